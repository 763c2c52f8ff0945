"""Dispatcher — maps one JSON-RPC payload to one response payload.

Transport-independent and stateless: the stdio loop and the HTTP adapter
both hand payloads to the same :class:`Dispatcher`.

Routes:
  initialize                → static capability/version info
  notifications/initialized → notification (no response)
  ping                      → empty result
  tools/list                → the provider's tool catalog
  tools/call                → provider dispatch
  resources/list            → empty list
  prompts/list              → empty list
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from weather_mcp.protocols.errors import (
    INTERNAL_ERROR,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
)
from weather_mcp.protocols.models import (
    InitializeResult,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
)
from weather_mcp.utils.telemetry import (
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_ID,
    ATTR_RPC_METHOD,
    get_tracer,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from weather_mcp.protocols.provider import ToolProvider

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

NOTIFICATION_INITIALIZED = "notifications/initialized"


class Dispatcher:
    """Validates request envelopes, routes methods, builds response envelopes.

    Usage::

        dispatcher = Dispatcher(registry, server_info=ServerInfo(name="weather", version="1.0.0"))

        raw_response = await dispatcher.handle(raw_request)   # str | None
        response = await dispatcher.handle_message(decoded)   # dict | None
    """

    def __init__(
        self,
        provider: ToolProvider,
        *,
        server_info: ServerInfo,
        protocol_version: str = "2024-11-05",
    ) -> None:
        self._provider = provider
        self._initialize_result = InitializeResult(
            protocol_version=protocol_version,
            server_info=server_info,
        )
        self._routes: dict[str, Callable[[Any], Awaitable[dict[str, Any]]]] = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
            "resources/list": self._resources_list,
            "prompts/list": self._prompts_list,
        }

    async def handle(self, raw: str | bytes) -> str | None:
        """Decode *raw*, dispatch it, and encode the response.

        Returns ``None`` when the message is a notification that gets no reply.
        """
        try:
            msg = decode_payload(raw)
        except (ValueError, RecursionError) as exc:
            logger.warning("JSON parse error: %s", exc)
            response = self._error_response(None, ParseError())
            return _encode(response)

        payload = await self.handle_message(msg)
        return None if payload is None else _encode(payload)

    async def handle_message(self, msg: Any) -> dict[str, Any] | None:
        """Dispatch an already-decoded message and return the response envelope."""
        if not isinstance(msg, dict):
            logger.warning("Rejected non-object request: %s", type(msg).__name__)
            return self._error_response(None, InvalidRequestError())

        request = JsonRpcRequest.from_message(msg)

        with _tracer.start_as_current_span("rpc.handle") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method or "")
            if request.id is not None:
                span.set_attribute(ATTR_RPC_ID, str(request.id))

            try:
                result = await self._route(request)
            except ProtocolError as exc:
                logger.warning(
                    "Protocol error for %s: %s (code=%s)", request.method, exc.message, exc.code
                )
                span.set_attribute(ATTR_RPC_ERROR_CODE, exc.code)
                return self._error_response(request.id, exc)
            except Exception as exc:
                logger.exception("Unhandled error while handling %s", request.method)
                span.set_attribute(ATTR_RPC_ERROR_CODE, INTERNAL_ERROR)
                error = JsonRpcError(code=INTERNAL_ERROR, message="Internal error", data=str(exc))
                return JsonRpcResponse.failure(request.id, error).to_payload()

        if result is None:
            return None
        return JsonRpcResponse.success(request.id, result).to_payload()

    async def _route(self, request: JsonRpcRequest) -> dict[str, Any] | None:
        if request.method is None:
            raise MethodNotFoundError()

        if request.method == NOTIFICATION_INITIALIZED:
            logger.debug("Client finished initialization")
            return None

        handler = self._routes.get(request.method)
        if handler is None:
            raise MethodNotFoundError(request.method)
        return await handler(request.params)

    # ── handlers ─────────────────────────────────────────────────

    async def _initialize(self, params: Any) -> dict[str, Any]:
        if isinstance(params, dict):
            client_info = params.get("clientInfo") or {}
            logger.info(
                "Client initialize: %s protocol=%s",
                client_info.get("name", "?") if isinstance(client_info, dict) else "?",
                params.get("protocolVersion", "?"),
            )
        return self._initialize_result.model_dump(by_alias=True)

    async def _ping(self, _params: Any) -> dict[str, Any]:
        return {}

    async def _tools_list(self, _params: Any) -> dict[str, Any]:
        return {"tools": self._provider.discover_tools()}

    async def _tools_call(self, params: Any) -> dict[str, Any]:
        if not isinstance(params, dict):
            raise InvalidParamsError()
        name = params.get("name")
        if not name or not isinstance(name, str):
            raise InvalidParamsError()

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise InvalidParamsError("Invalid params: arguments must be an object")

        result = await self._provider.execute_tool(name, arguments)
        return result.model_dump()

    async def _resources_list(self, _params: Any) -> dict[str, Any]:
        return {"resources": []}

    async def _prompts_list(self, _params: Any) -> dict[str, Any]:
        return {"prompts": []}

    @staticmethod
    def _error_response(request_id: Any, exc: ProtocolError) -> dict[str, Any]:
        return JsonRpcResponse.failure(request_id, JsonRpcError.from_exception(exc)).to_payload()


def _encode(payload: dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def decode_payload(raw: str | bytes) -> Any:
    """Parse *raw* as strict JSON.

    Raises:
        ValueError: On malformed input, including the ``NaN``/``Infinity``
            tokens that :func:`json.loads` would otherwise accept.
        RecursionError: When nesting exceeds the interpreter's limit.
    """
    return json.loads(raw, parse_constant=_reject_constant)


def _reject_constant(token: str) -> Any:
    msg = f"Invalid JSON token: {token}"
    raise ValueError(msg)
