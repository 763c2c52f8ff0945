"""NWSClient — read-only access to the National Weather Service API.

Every request either yields a decoded JSON object or ``None``.  Network
errors, non-success statuses and unparseable bodies all collapse into
``None`` so callers handle a single "no data" signal.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from weather_mcp.utils.telemetry import ATTR_HTTP_STATUS, ATTR_HTTP_URL, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

DEFAULT_BASE_URL = "https://api.weather.gov"
DEFAULT_USER_AGENT = "weather-app/1.0"


class NWSClient:
    """Async client for the ``api.weather.gov`` endpoints used by the tools.

    A fresh :class:`httpx.AsyncClient` is opened per request; ``transport``
    lets tests substitute :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "application/geo+json",
        }
        self._timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def alerts_url(self, state: str) -> str:
        return f"{self._base_url}/alerts?area={state}"

    def points_url(self, latitude: float, longitude: float) -> str:
        """Build the points lookup URL with coordinates fixed to 4 decimals."""
        return f"{self._base_url}/points/{latitude:.4f},{longitude:.4f}"

    async def get_alerts(self, state: str) -> dict[str, Any] | None:
        """Fetch active alerts for a two-letter region code."""
        return await self.fetch_json(self.alerts_url(state))

    async def get_point(self, latitude: float, longitude: float) -> dict[str, Any] | None:
        """Resolve coordinates to grid point metadata (holds the forecast URL)."""
        return await self.fetch_json(self.points_url(latitude, longitude))

    async def get_forecast(self, forecast_url: str) -> dict[str, Any] | None:
        """Fetch a forecast document from the URL a points lookup returned."""
        return await self.fetch_json(forecast_url)

    async def fetch_json(self, url: str) -> dict[str, Any] | None:
        """GET *url* and return the decoded JSON object, or ``None`` on any failure."""
        with _tracer.start_as_current_span("nws.fetch") as span:
            span.set_attribute(ATTR_HTTP_URL, url)
            try:
                async with httpx.AsyncClient(
                    headers=self._headers,
                    timeout=self._timeout,
                    transport=self._transport,
                ) as client:
                    response = await client.get(url)
                    span.set_attribute(ATTR_HTTP_STATUS, response.status_code)
                    response.raise_for_status()
                    data = response.json()
            except httpx.HTTPError as exc:
                logger.warning("Error making NWS request to %s: %s", url, exc)
                return None
            except ValueError as exc:
                logger.warning("Unparseable NWS response from %s: %s", url, exc)
                return None

        if not isinstance(data, dict):
            logger.warning("Unexpected NWS response shape from %s: %s", url, type(data).__name__)
            return None
        return data
