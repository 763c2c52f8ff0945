"""Top-level error types."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when server settings cannot be read, parsed, or validated."""
