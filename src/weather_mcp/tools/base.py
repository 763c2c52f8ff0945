"""Tool descriptors and the interface every tool implements."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from weather_mcp.protocols.schema import ArgumentSchema  # noqa: TC001

if TYPE_CHECKING:
    from weather_mcp.protocols.models import TextContent


class ToolDescriptor(BaseModel):
    """Catalog entry for a tool: unique name, description, argument schema."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    argument_schema: ArgumentSchema

    def to_mcp(self) -> dict[str, Any]:
        """Render as a ``tools/list`` entry."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.argument_schema.to_json_schema(),
        }


@runtime_checkable
class Tool(Protocol):
    """A named operation exposed through ``tools/call``.

    ``invoke`` receives arguments already validated against
    ``descriptor.argument_schema`` and never raises: an unavailable answer is
    reported as explanatory text.
    """

    descriptor: ToolDescriptor

    async def invoke(self, arguments: dict[str, Any]) -> TextContent: ...
