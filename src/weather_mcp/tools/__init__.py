"""Tool catalog — the weather tools and the registry that serves them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from weather_mcp.tools.base import Tool, ToolDescriptor
from weather_mcp.tools.registry import ToolRegistry
from weather_mcp.tools.weather import AlertsTool, ForecastTool

if TYPE_CHECKING:
    from weather_mcp.clients.nws import NWSClient


def build_registry(client: NWSClient) -> ToolRegistry:
    """Build the catalog served by ``tools/list`` and ``tools/call``."""
    return ToolRegistry([AlertsTool(client), ForecastTool(client)])


__all__ = [
    "AlertsTool",
    "ForecastTool",
    "Tool",
    "ToolDescriptor",
    "ToolRegistry",
    "build_registry",
]
