"""OpenTelemetry tracing helpers for the weather server.

Provides a thin wrapper around the OpenTelemetry API so the rest of the
codebase can call ``get_tracer()`` without caring whether the SDK is
installed.  When the SDK is *not* configured the API returns no-op
implementations.

Usage::

    from weather_mcp.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("rpc.handle") as span:
        span.set_attribute(ATTR_RPC_METHOD, "tools/call")

To activate real tracing, call :func:`configure_telemetry` once at startup
(requires the ``otel`` extra: ``pip install weather-mcp[otel]``).
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Semantic attribute keys used throughout the server
# ---------------------------------------------------------------------------

ATTR_RPC_METHOD = "weather_mcp.rpc.method"
ATTR_RPC_ID = "weather_mcp.rpc.id"
ATTR_RPC_ERROR_CODE = "weather_mcp.rpc.error_code"
ATTR_TOOL_NAME = "weather_mcp.tool.name"
ATTR_HTTP_URL = "weather_mcp.http.url"
ATTR_HTTP_STATUS = "weather_mcp.http.status"

_INSTRUMENTATION_NAME = "weather_mcp"
_SERVICE_NAME = "weather-mcp"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*.

    If the OpenTelemetry SDK has not been configured the returned tracer
    is a no-op.
    """
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(otlp_endpoint: str | None = None) -> None:
    """Install a tracer provider for the ``weather-mcp`` service.

    Spans go to *otlp_endpoint* over OTLP/gRPC when one is configured,
    otherwise they are printed as JSON on stderr (stdout carries the stdio
    transport).

    Raises:
        ImportError: If ``opentelemetry-sdk`` (or, for OTLP export,
            ``opentelemetry-exporter-otlp``) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
    except ImportError as exc:
        msg = "opentelemetry-sdk is required for tracing. Install it with: pip install weather-mcp[otel]"
        raise ImportError(msg) from exc

    if otlp_endpoint:
        processor = BatchSpanProcessor(_otlp_exporter(otlp_endpoint))
    else:
        processor = SimpleSpanProcessor(_stderr_exporter())

    provider = TracerProvider(resource=Resource.create({"service.name": _SERVICE_NAME}))  # pyright: ignore[reportUnknownVariableType,reportUnknownMemberType]
    provider.add_span_processor(processor)  # pyright: ignore[reportUnknownMemberType]
    trace.set_tracer_provider(provider)  # pyright: ignore[reportUnknownArgumentType]


def _stderr_exporter() -> Any:
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter  # pyright: ignore[reportMissingImports,reportUnknownVariableType]

    return ConsoleSpanExporter(out=sys.stderr)


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
    except ImportError as exc:
        msg = "opentelemetry-exporter-otlp is required for OTLP export. Install it with: pip install weather-mcp[otel]"
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)
