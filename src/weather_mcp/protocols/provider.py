"""ToolProvider protocol — what the dispatcher needs from a tool catalog.

The :class:`~weather_mcp.protocols.dispatcher.Dispatcher` serves
``tools/list`` and ``tools/call`` through this interface without knowing
how tools are implemented.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from weather_mcp.protocols.models import ToolResult


@runtime_checkable
class ToolProvider(Protocol):
    """Lists and executes tools."""

    def discover_tools(self) -> list[dict[str, Any]]:
        """Return the catalog as ``tools/list`` entries.

        Each dict follows the shape::

            {
                "name": "...",
                "description": "...",
                "inputSchema": { ... }   # JSON Schema
            }
        """
        ...

    async def execute_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """Validate *arguments* and run the named tool.

        Raises:
            ToolNotFoundError: If *name* is not in the catalog.
            InvalidParamsError: If *arguments* fail the tool's schema.
        """
        ...
