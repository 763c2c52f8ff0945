"""HTTP adapter — serves a :class:`Dispatcher` as JSON-RPC over POST bodies.

JSON-RPC errors are always returned with HTTP 200; the status code never
reflects protocol failures.  ``notifications/initialized`` is answered with
204 and no body.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from typing import TYPE_CHECKING

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from weather_mcp.protocols.dispatcher import decode_payload
from weather_mcp.protocols.errors import INTERNAL_ERROR, MethodNotFoundError
from weather_mcp.protocols.models import JsonRpcError, JsonRpcResponse

if TYPE_CHECKING:
    from weather_mcp.protocols.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


@lru_cache(maxsize=1)
def load_help_page() -> str:
    """Return the bundled browser help page."""
    return resources.files("weather_mcp.static").joinpath("help.html").read_text(encoding="utf-8")


def create_app(dispatcher: Dispatcher, *, title: str = "Weather MCP Server", version: str = "") -> FastAPI:
    """Build the FastAPI application around *dispatcher*."""
    app = FastAPI(title=title, version=version, docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/help")
    async def help_page() -> HTMLResponse:
        return HTMLResponse(load_help_page())

    @app.api_route("/{path:path}", methods=_ALL_METHODS)
    async def rpc(request: Request, path: str) -> Response:
        logger.debug("%s /%s", request.method, path)
        if request.method == "OPTIONS":
            return Response(headers=CORS_HEADERS)

        if request.method != "POST":
            return _json(JsonRpcResponse.failure(None, JsonRpcError.from_exception(MethodNotFoundError())))

        body = await request.body()
        try:
            msg = decode_payload(body)
        except (ValueError, RecursionError) as exc:
            logger.warning("MCP server error: %s", exc)
            error = JsonRpcError(code=INTERNAL_ERROR, message="Internal error", data=str(exc))
            return _json(JsonRpcResponse.failure(None, error))

        payload = await dispatcher.handle_message(msg)
        if payload is None:
            return Response(status_code=204)
        return JSONResponse(payload, headers=CORS_HEADERS)

    return app


def _json(response: JsonRpcResponse) -> JSONResponse:
    return JSONResponse(response.to_payload(), headers={"Access-Control-Allow-Origin": "*"})


def run_http(app: FastAPI, *, host: str, port: int, log_level: str = "warning") -> None:
    """Serve *app* with uvicorn until interrupted."""
    uvicorn.run(app, host=host, port=port, log_level=log_level)
