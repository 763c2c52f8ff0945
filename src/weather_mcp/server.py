"""Server assembly — wire settings, clients, tools and dispatcher together."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from weather_mcp.clients.nws import NWSClient
from weather_mcp.protocols.dispatcher import Dispatcher
from weather_mcp.protocols.models import ServerInfo
from weather_mcp.protocols.transport import StdioTransport, serve_transport
from weather_mcp.tools import build_registry

if TYPE_CHECKING:
    import httpx
    from fastapi import FastAPI

    from weather_mcp.config import ServerSettings

logger = logging.getLogger(__name__)


def build_dispatcher(
    settings: ServerSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Dispatcher:
    """Create the dispatcher and its tool catalog from *settings*.

    ``transport`` is forwarded to the weather client (tests pass a mock).
    """
    client = NWSClient(
        base_url=settings.nws_base_url,
        user_agent=settings.user_agent,
        timeout=settings.http_timeout,
        transport=transport,
    )
    return Dispatcher(
        build_registry(client),
        server_info=ServerInfo(name=settings.server_name, version=settings.server_version),
        protocol_version=settings.protocol_version,
    )


async def run_stdio(dispatcher: Dispatcher) -> None:
    """Serve *dispatcher* over stdin/stdout until end of input."""
    transport = StdioTransport()
    await transport.connect()
    logger.info("Weather MCP server running on stdio")
    await serve_transport(dispatcher, transport)


def build_http_app(settings: ServerSettings) -> FastAPI:
    """Create the HTTP application for *settings*."""
    from weather_mcp.protocols.http import create_app

    return create_app(build_dispatcher(settings), version=settings.server_version)
