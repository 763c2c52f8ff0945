"""Weather tools — ``get_alerts`` and ``get_forecast`` backed by the NWS API.

Both tools turn every external failure into explanatory text; only
argument validation (done by the registry) produces protocol errors.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from weather_mcp.protocols.models import TextContent
from weather_mcp.protocols.schema import ArgumentSchema, ParamSpec
from weather_mcp.tools.base import ToolDescriptor

if TYPE_CHECKING:
    from weather_mcp.clients.nws import NWSClient

logger = logging.getLogger(__name__)

ALERTS_DESCRIPTOR = ToolDescriptor(
    name="get_alerts",
    description="Get weather alerts for a state",
    argument_schema=ArgumentSchema(
        params={
            "state": ParamSpec(
                type="string",
                min_length=2,
                max_length=2,
                description="Two-letter state code (e.g. CA, NY)",
            ),
        },
    ),
)

FORECAST_DESCRIPTOR = ToolDescriptor(
    name="get_forecast",
    description="Get weather forecast for a location",
    argument_schema=ArgumentSchema(
        params={
            "latitude": ParamSpec(
                type="number",
                minimum=-90,
                maximum=90,
                description="Latitude of the location",
            ),
            "longitude": ParamSpec(
                type="number",
                minimum=-180,
                maximum=180,
                description="Longitude of the location",
            ),
        },
    ),
)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_alert(feature: Any) -> str:
    """Render one GeoJSON alert feature as a delimited text record."""
    props = _properties(feature)
    return "\n".join([
        f"Event: {props.get('event') or 'Unknown'}",
        f"Area: {props.get('areaDesc') or 'Unknown'}",
        f"Severity: {props.get('severity') or 'Unknown'}",
        f"Status: {props.get('status') or 'Unknown'}",
        f"Headline: {props.get('headline') or 'No headline'}",
        "---",
    ])


def format_period(period: Any) -> str:
    """Render one forecast period as a delimited text entry."""
    if not isinstance(period, dict):
        period = {}
    temperature = period.get("temperature")
    return "\n".join([
        f"{period.get('name') or 'Unknown'}:",
        f"Temperature: {'Unknown' if temperature is None else temperature}"
        f"°{period.get('temperatureUnit') or 'F'}",
        f"Wind: {period.get('windSpeed') or 'Unknown'} {period.get('windDirection') or ''}",
        f"{period.get('shortForecast') or 'No forecast available'}",
        "---",
    ])


def format_coordinate(value: float) -> str:
    """Show a coordinate as the caller sent it, without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _properties(item: Any) -> dict[str, Any]:
    if not isinstance(item, dict):
        return {}
    props = item.get("properties")
    return props if isinstance(props, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


class AlertsTool:
    """Active alerts for a US state, in the order the API returns them."""

    descriptor = ALERTS_DESCRIPTOR

    def __init__(self, client: NWSClient) -> None:
        self._client = client

    async def invoke(self, arguments: dict[str, Any]) -> TextContent:
        state = str(arguments["state"]).upper()
        data = await self._client.get_alerts(state)
        if data is None:
            return TextContent(text="Failed to retrieve alerts data")

        features = _as_list(data.get("features"))
        if not features:
            return TextContent(text=f"No active alerts for {state}")

        formatted = "\n".join(format_alert(feature) for feature in features)
        return TextContent(text=f"Active alerts for {state}:\n\n{formatted}")


class ForecastTool:
    """Forecast periods for a coordinate pair via the two-step points lookup."""

    descriptor = FORECAST_DESCRIPTOR

    def __init__(self, client: NWSClient) -> None:
        self._client = client

    async def invoke(self, arguments: dict[str, Any]) -> TextContent:
        latitude = arguments["latitude"]
        longitude = arguments["longitude"]
        shown = f"{format_coordinate(latitude)}, {format_coordinate(longitude)}"

        point = await self._client.get_point(latitude, longitude)
        if point is None:
            return TextContent(
                text=(
                    f"Failed to retrieve grid point data for coordinates: {shown}. "
                    "This location may not be supported by the NWS API "
                    "(only US locations are supported)."
                )
            )

        forecast_url = _properties(point).get("forecast")
        if not forecast_url or not isinstance(forecast_url, str):
            logger.warning("Grid point data for %s has no forecast URL", shown)
            return TextContent(text="Failed to get forecast URL from grid point data")

        forecast = await self._client.get_forecast(forecast_url)
        if forecast is None:
            return TextContent(text="Failed to retrieve forecast data")

        periods = _as_list(_properties(forecast).get("periods"))
        if not periods:
            return TextContent(text="No forecast periods available")

        formatted = "\n".join(format_period(period) for period in periods)
        return TextContent(text=f"Forecast for {shown}:\n\n{formatted}")
