"""Tests for the get_alerts and get_forecast tools."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import httpx

from weather_mcp.clients.nws import NWSClient
from weather_mcp.tools.weather import (
    AlertsTool,
    ForecastTool,
    format_alert,
    format_coordinate,
    format_period,
)

_FORECAST_URL = "https://api.weather.gov/gridpoints/MTR/85,105/forecast"

RecordedTransport = Callable[..., tuple[httpx.MockTransport, list[httpx.Request]]]


def _alert(**props: Any) -> dict[str, Any]:
    return {"type": "Feature", "properties": props}


def _period(**fields: Any) -> dict[str, Any]:
    base = {
        "name": "Tonight",
        "temperature": 54,
        "temperatureUnit": "F",
        "windSpeed": "5 to 10 mph",
        "windDirection": "W",
        "shortForecast": "Mostly Clear",
    }
    base.update(fields)
    return base


class TestFormatting:
    def test_format_alert(self) -> None:
        text = format_alert(
            _alert(
                event="Flood Warning",
                areaDesc="Kings County",
                severity="Severe",
                status="Actual",
                headline="Flood warning until noon",
            )
        )
        assert text == (
            "Event: Flood Warning\n"
            "Area: Kings County\n"
            "Severity: Severe\n"
            "Status: Actual\n"
            "Headline: Flood warning until noon\n"
            "---"
        )

    def test_format_alert_defaults(self) -> None:
        text = format_alert({"properties": {}})
        assert "Event: Unknown" in text
        assert "Headline: No headline" in text

    def test_format_alert_without_properties(self) -> None:
        assert format_alert("garbage").startswith("Event: Unknown")

    def test_format_period(self) -> None:
        assert format_period(_period()) == (
            "Tonight:\n"
            "Temperature: 54°F\n"
            "Wind: 5 to 10 mph W\n"
            "Mostly Clear\n"
            "---"
        )

    def test_format_period_defaults(self) -> None:
        text = format_period({})
        assert text.startswith("Unknown:\nTemperature: Unknown°F\nWind: Unknown ")
        assert "No forecast available" in text

    def test_format_period_zero_degrees(self) -> None:
        assert "Temperature: 0°C" in format_period(_period(temperature=0, temperatureUnit="C"))

    def test_format_coordinate(self) -> None:
        assert format_coordinate(37.77) == "37.77"
        assert format_coordinate(40.0) == "40"
        assert format_coordinate(-74) == "-74"


class TestAlertsTool:
    async def test_retrieval_failure(self, nws: MagicMock) -> None:
        block = await AlertsTool(nws).invoke({"state": "CA"})
        assert block.text == "Failed to retrieve alerts data"

    async def test_no_alerts(self, nws: MagicMock) -> None:
        nws.get_alerts.return_value = {"features": []}
        block = await AlertsTool(nws).invoke({"state": "ZZ"})
        assert block.text == "No active alerts for ZZ"

    async def test_missing_features_means_no_alerts(self, nws: MagicMock) -> None:
        nws.get_alerts.return_value = {"title": "empty"}
        block = await AlertsTool(nws).invoke({"state": "WY"})
        assert block.text == "No active alerts for WY"

    async def test_alerts_keep_api_order(self, nws: MagicMock) -> None:
        nws.get_alerts.return_value = {
            "features": [_alert(event="Heat Advisory"), _alert(event="Air Quality Alert")]
        }
        block = await AlertsTool(nws).invoke({"state": "az"})

        assert block.type == "text"
        assert block.text.startswith("Active alerts for AZ:\n\n")
        assert block.text.index("Heat Advisory") < block.text.index("Air Quality Alert")
        assert block.text.count("---") == 2
        nws.get_alerts.assert_awaited_once_with("AZ")


class TestForecastTool:
    async def test_points_failure(self, nws: MagicMock) -> None:
        block = await ForecastTool(nws).invoke({"latitude": 48.8566, "longitude": 2.3522})
        assert block.text == (
            "Failed to retrieve grid point data for coordinates: 48.8566, 2.3522. "
            "This location may not be supported by the NWS API "
            "(only US locations are supported)."
        )
        nws.get_forecast.assert_not_awaited()

    async def test_missing_forecast_url(self, nws: MagicMock) -> None:
        nws.get_point.return_value = {"properties": {}}
        block = await ForecastTool(nws).invoke({"latitude": 40, "longitude": -74})
        assert block.text == "Failed to get forecast URL from grid point data"

    async def test_forecast_failure(self, nws: MagicMock) -> None:
        nws.get_point.return_value = {"properties": {"forecast": _FORECAST_URL}}
        block = await ForecastTool(nws).invoke({"latitude": 40, "longitude": -74})
        assert block.text == "Failed to retrieve forecast data"
        nws.get_forecast.assert_awaited_once_with(_FORECAST_URL)

    async def test_no_periods(self, nws: MagicMock) -> None:
        nws.get_point.return_value = {"properties": {"forecast": _FORECAST_URL}}
        nws.get_forecast.return_value = {"properties": {"periods": []}}
        block = await ForecastTool(nws).invoke({"latitude": 40, "longitude": -74})
        assert block.text == "No forecast periods available"

    async def test_periods_in_order(self, nws: MagicMock) -> None:
        nws.get_point.return_value = {"properties": {"forecast": _FORECAST_URL}}
        nws.get_forecast.return_value = {
            "properties": {"periods": [_period(name="Tonight"), _period(name="Saturday")]}
        }
        block = await ForecastTool(nws).invoke({"latitude": 37.7749, "longitude": -122.4194})

        assert block.text.startswith("Forecast for 37.7749, -122.4194:\n\nTonight:\n")
        assert block.text.index("Tonight:") < block.text.index("Saturday:")


class TestForecastOverHttp:
    async def test_points_path_uses_four_decimals(
        self, recorded_transport: RecordedTransport
    ) -> None:
        transport, seen = recorded_transport({})
        tool = ForecastTool(NWSClient(transport=transport))

        block = await tool.invoke({"latitude": 37.77, "longitude": -122.4194})

        assert seen[0].url.path == "/points/37.7700,-122.4194"
        assert "37.77, -122.4194" in block.text

    async def test_two_stage_lookup(self, recorded_transport: RecordedTransport) -> None:
        transport, seen = recorded_transport({
            "/points/37.7749,-122.4194": (200, {"properties": {"forecast": _FORECAST_URL}}),
            "/gridpoints/MTR/85,105/forecast": (200, {"properties": {"periods": [_period()]}}),
        })
        tool = ForecastTool(NWSClient(transport=transport))

        block = await tool.invoke({"latitude": 37.7749, "longitude": -122.4194})

        assert [r.url.path for r in seen] == [
            "/points/37.7749,-122.4194",
            "/gridpoints/MTR/85,105/forecast",
        ]
        assert "Temperature: 54°F" in block.text

    async def test_server_error_degrades(self, recorded_transport: RecordedTransport) -> None:
        transport, _ = recorded_transport({
            "/points/40.0000,-74.0000": (500, {"detail": "upstream"}),
        })
        block = await ForecastTool(NWSClient(transport=transport)).invoke(
            {"latitude": 40.0, "longitude": -74.0}
        )
        assert "may not be supported" in block.text
