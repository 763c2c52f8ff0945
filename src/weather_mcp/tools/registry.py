"""ToolRegistry — the static tool catalog and invoker.

Satisfies the :class:`~weather_mcp.protocols.provider.ToolProvider` protocol.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from weather_mcp.protocols.errors import ToolNotFoundError
from weather_mcp.protocols.models import ToolResult
from weather_mcp.utils.telemetry import ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from weather_mcp.tools.base import Tool, ToolDescriptor

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class ToolRegistry:
    """Immutable name-to-tool map built once at startup.

    Usage::

        registry = ToolRegistry([AlertsTool(nws), ForecastTool(nws)])

        registry.discover_tools()                          # tools/list entries
        await registry.execute_tool("get_alerts", {"state": "ny"})
    """

    def __init__(self, tools: Iterable[Tool]) -> None:
        table: dict[str, Tool] = {}
        for tool in tools:
            name = tool.descriptor.name
            if name in table:
                msg = f"Duplicate tool name: {name}"
                raise ValueError(msg)
            table[name] = tool
        self._tools: Mapping[str, Tool] = MappingProxyType(table)

    @property
    def descriptors(self) -> list[ToolDescriptor]:
        return [tool.descriptor for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def discover_tools(self) -> list[dict[str, Any]]:
        """Return every descriptor as a ``tools/list`` entry, in registration order."""
        return [descriptor.to_mcp() for descriptor in self.descriptors]

    async def execute_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """Validate *arguments* against the tool's schema, then invoke it."""
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)

        validated = tool.descriptor.argument_schema.validate_arguments(arguments)

        with _tracer.start_as_current_span("tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            logger.debug("Invoking tool %s with %s", name, validated)
            block = await tool.invoke(validated)

        return ToolResult(content=[block])
