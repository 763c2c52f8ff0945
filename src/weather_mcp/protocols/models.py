"""JSON-RPC 2.0 envelopes and MCP payloads.

Implements the message format used by the Model Context Protocol for
tool discovery (``tools/list``) and execution (``tools/call``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from weather_mcp.protocols.errors import ProtocolError

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    ``id`` is kept exactly as received (string, number or null) so that it
    can be echoed back unchanged.
    """

    model_config = ConfigDict(frozen=True)

    jsonrpc: str = "2.0"
    method: str | None = None
    params: Any = None
    id: Any = None

    @classmethod
    def from_message(cls, msg: dict[str, Any]) -> JsonRpcRequest:
        """Build a request from a decoded JSON object without coercing fields."""
        method = msg.get("method")
        return cls(
            jsonrpc=str(msg.get("jsonrpc", "2.0")),
            method=method if isinstance(method, str) and method else None,
            params=msg.get("params"),
            id=msg.get("id"),
        )


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None

    @classmethod
    def from_exception(cls, exc: ProtocolError) -> JsonRpcError:
        return cls(code=exc.code, message=exc.message, data=exc.data)


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Exactly one of ``result`` and ``error`` is set.
    """

    jsonrpc: str = "2.0"
    id: Any = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: Any, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: Any, error: JsonRpcError) -> JsonRpcResponse:
        return cls(id=request_id, error=error)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the wire shape, always carrying ``id`` (even null)."""
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        else:
            payload["result"] = self.result if self.result is not None else {}
        payload["id"] = self.id
        return payload


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """The ``tools/call`` result: one text block in this server."""

    content: list[TextContent] = []

    @classmethod
    def from_text(cls, text: str) -> ToolResult:
        """Create a ToolResult with a single text content block."""
        return cls(content=[TextContent(text=text)])

    @property
    def text(self) -> str:
        return "\n".join(part.text for part in self.content)


class ServerInfo(BaseModel):
    name: str
    version: str


class InitializeResult(BaseModel):
    """Static handshake payload returned by ``initialize``."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(alias="protocolVersion")
    capabilities: dict[str, dict[str, Any]] = Field(
        default_factory=lambda: {"tools": {}, "resources": {}, "prompts": {}, "logging": {}}
    )
    server_info: ServerInfo = Field(alias="serverInfo")
