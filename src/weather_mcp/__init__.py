"""Weather MCP — JSON-RPC tool server for National Weather Service data."""

from __future__ import annotations

__version__ = "1.0.0"
