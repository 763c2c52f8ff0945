"""``weather-mcp serve`` — run the JSON-RPC server on stdio or HTTP."""

from __future__ import annotations

import asyncio
import sys

import click

from weather_mcp.cli_commands._output import configure_logging, err_console, load_settings_or_exit


@click.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"]),
    default="stdio",
    help="Serve over stdin/stdout or as an HTTP listener.",
)
@click.option("--host", default=None, help="HTTP bind address (overrides settings).")
@click.option("--port", type=int, default=None, help="HTTP port (overrides settings).")
@click.option("--config", "-c", type=click.Path(exists=True), default=None, help="Settings YAML file.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging on stderr.")
@click.option("--telemetry", is_flag=True, help="Enable OpenTelemetry tracing.")
def serve(
    transport: str,
    host: str | None,
    port: int | None,
    config: str | None,
    verbose: bool,
    telemetry: bool,
) -> None:
    """Serve the weather tools over TRANSPORT."""
    from weather_mcp.server import build_dispatcher, build_http_app, run_stdio

    configure_logging(verbose=verbose)
    settings = load_settings_or_exit(config)

    if telemetry:
        settings.telemetry.enabled = True
    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port

    if settings.telemetry.enabled:
        from weather_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(otlp_endpoint=settings.telemetry.otlp_endpoint)
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    if transport == "stdio":
        try:
            asyncio.run(run_stdio(build_dispatcher(settings)))
        except KeyboardInterrupt:
            pass
        return

    from weather_mcp.protocols.http import run_http

    err_console.print(
        f"Weather MCP server listening on http://{settings.host}:{settings.port} "
        f"(help at /help)"
    )
    run_http(
        build_http_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if verbose else "warning",
    )
