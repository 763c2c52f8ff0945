"""JSON-RPC error codes and the exceptions that carry them.

Every exception here maps one-to-one onto a JSON-RPC error envelope.  The
:class:`~weather_mcp.protocols.dispatcher.Dispatcher` catches them and turns
them into responses; anything else that escapes a handler is reported as
:data:`INTERNAL_ERROR`.
"""

from __future__ import annotations

from typing import Any

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, data: Any = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)


class ParseError(ProtocolError):
    """The payload is not valid JSON."""

    code = PARSE_ERROR

    def __init__(self, data: Any = None) -> None:
        super().__init__("Parse error", data)


class InvalidRequestError(ProtocolError):
    """The payload is JSON but not a request object."""

    code = INVALID_REQUEST

    def __init__(self, data: Any = None) -> None:
        super().__init__("Invalid Request", data)


class MethodNotFoundError(ProtocolError):
    """The requested method is not served."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: str | None = None) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}" if method else "Method not found")


class ToolNotFoundError(MethodNotFoundError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        ProtocolError.__init__(self, f"Unknown tool: {name}")


class InvalidParamsError(ProtocolError):
    """Request parameters or tool arguments failed validation."""

    code = INVALID_PARAMS

    def __init__(self, message: str = "Invalid params", data: Any = None) -> None:
        super().__init__(message, data)
