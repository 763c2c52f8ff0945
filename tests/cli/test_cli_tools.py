"""Tests for ``weather-mcp tools`` CLI commands."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from weather_mcp.cli import main
from weather_mcp.clients.nws import NWSClient


class TestToolsList:
    def test_table(self) -> None:
        result = CliRunner().invoke(main, ["tools", "list"])

        assert result.exit_code == 0
        assert "get_alerts" in result.output
        assert "get_forecast" in result.output

    def test_json(self) -> None:
        result = CliRunner().invoke(main, ["tools", "list", "--json"])

        assert result.exit_code == 0
        tools = json.loads(result.output)
        assert [t["name"] for t in tools] == ["get_alerts", "get_forecast"]
        assert tools[0]["inputSchema"]["required"] == ["state"]

    def test_missing_config_file(self) -> None:
        result = CliRunner().invoke(main, ["tools", "list", "--config", "/nonexistent.yaml"])
        assert result.exit_code == 2


class TestToolsCall:
    def test_call_prints_text(self) -> None:
        with patch.object(NWSClient, "fetch_json", AsyncMock(return_value={"features": []})) as fetch:
            result = CliRunner().invoke(main, ["tools", "call", "get_alerts", '{"state": "vt"}'])

        assert result.exit_code == 0
        assert "No active alerts for VT" in result.output
        fetch.assert_awaited_once_with("https://api.weather.gov/alerts?area=VT")

    def test_degraded_result_still_succeeds(self) -> None:
        with patch.object(NWSClient, "fetch_json", AsyncMock(return_value=None)):
            result = CliRunner().invoke(main, ["tools", "call", "get_alerts", '{"state": "CA"}'])

        assert result.exit_code == 0
        assert "Failed to retrieve alerts data" in result.output

    def test_invalid_params_exit_1(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "get_alerts", '{"state": "C"}'])

        assert result.exit_code == 1
        assert "Error -32602" in result.output

    def test_unknown_tool_exit_1(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "get_tides"])

        assert result.exit_code == 1
        assert "Error -32601" in result.output

    def test_bad_json_exit_2(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "get_alerts", "{state"])

        assert result.exit_code == 2
        assert "Invalid JSON arguments" in result.output
