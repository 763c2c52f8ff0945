"""Server settings — optional YAML file plus environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, ValidationError

from weather_mcp.clients.nws import DEFAULT_BASE_URL as NWS_BASE_URL
from weather_mcp.clients.nws import DEFAULT_USER_AGENT
from weather_mcp.clients.replicate import DEFAULT_BASE_URL as REPLICATE_BASE_URL
from weather_mcp.clients.replicate import DEFAULT_MODEL_VERSION
from weather_mcp.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

# Environment variable -> settings field
ENV_OVERRIDES: dict[str, str] = {
    "WEATHER_MCP_HOST": "host",
    "WEATHER_MCP_PORT": "port",
    "WEATHER_MCP_NWS_BASE_URL": "nws_base_url",
    "WEATHER_MCP_USER_AGENT": "user_agent",
    "WEATHER_MCP_HTTP_TIMEOUT": "http_timeout",
    "REPLICATE_API_TOKEN": "replicate_api_token",
}


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ServerSettings(BaseModel):
    """Everything the server needs, resolved once at startup."""

    server_name: str = "weather"
    server_version: str = "1.0.0"
    protocol_version: str = "2024-11-05"

    nws_base_url: str = NWS_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    http_timeout: float = 5.0

    host: str = "127.0.0.1"
    port: int = 8787

    replicate_api_token: str | None = None
    replicate_base_url: str = REPLICATE_BASE_URL
    replicate_model_version: str = DEFAULT_MODEL_VERSION

    telemetry: TelemetrySettings = TelemetrySettings()


class SettingsLoader:
    """Load and validate a settings YAML file into a :class:`ServerSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load_raw(self) -> dict[str, Any]:
        """Read YAML with env vars interpolated and return the mapping.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.

        Raises:
            ConfigError: If the file cannot be read or is not a YAML mapping.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError("Settings YAML must be a mapping")
        return data

    def load(self) -> ServerSettings:
        """Read and validate the file.

        Raises:
            ConfigError: On read, parse or schema validation failures.
        """
        return _validate(self.load_raw())


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ServerSettings:
    """Build settings from an optional YAML file, then apply env overrides."""
    data: dict[str, Any] = SettingsLoader(Path(path)).load_raw() if path else {}
    env = os.environ if environ is None else environ
    for variable, field in ENV_OVERRIDES.items():
        value = env.get(variable)
        if value:
            data[field] = value
    return _validate(data)


def _validate(data: dict[str, Any]) -> ServerSettings:
    try:
        return ServerSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
