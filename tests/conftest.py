"""Shared fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from weather_mcp.protocols.dispatcher import Dispatcher
from weather_mcp.protocols.models import ServerInfo
from weather_mcp.tools import build_registry


@pytest.fixture
def nws() -> MagicMock:
    """A stand-in NWSClient; every lookup returns "no data" unless overridden."""
    client = MagicMock()
    client.get_alerts = AsyncMock(return_value=None)
    client.get_point = AsyncMock(return_value=None)
    client.get_forecast = AsyncMock(return_value=None)
    return client


@pytest.fixture
def dispatcher(nws: MagicMock) -> Dispatcher:
    return Dispatcher(
        build_registry(nws),
        server_info=ServerInfo(name="weather", version="1.0.0"),
    )


@pytest.fixture
def recorded_transport() -> Callable[..., tuple[httpx.MockTransport, list[httpx.Request]]]:
    """Build an ``httpx.MockTransport`` that records requests.

    ``routes`` maps a URL path to ``(status, json_body)``; unknown paths get 404.
    """

    def _make(
        routes: dict[str, tuple[int, Any]],
    ) -> tuple[httpx.MockTransport, list[httpx.Request]]:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            status, body = routes.get(request.url.path, (404, {"detail": "not found"}))
            return httpx.Response(status, json=body)

        return httpx.MockTransport(handler), seen

    return _make
