"""Protocol layer — JSON-RPC envelopes, dispatch, and transports."""

from weather_mcp.protocols.dispatcher import NOTIFICATION_INITIALIZED, Dispatcher
from weather_mcp.protocols.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
    ToolNotFoundError,
)
from weather_mcp.protocols.models import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
    TextContent,
    ToolResult,
)
from weather_mcp.protocols.provider import ToolProvider
from weather_mcp.protocols.schema import ArgumentSchema, ParamSpec
from weather_mcp.protocols.transport import StdioTransport, Transport, serve_transport

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "NOTIFICATION_INITIALIZED",
    "PARSE_ERROR",
    "ArgumentSchema",
    "Dispatcher",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MethodNotFoundError",
    "ParamSpec",
    "ParseError",
    "ProtocolError",
    "ServerInfo",
    "StdioTransport",
    "TextContent",
    "ToolNotFoundError",
    "ToolProvider",
    "ToolResult",
    "Transport",
    "serve_transport",
]
