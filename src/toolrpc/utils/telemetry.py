"""OpenTelemetry tracing helpers for toolrpc.

Provides a thin wrapper around the OpenTelemetry API so the rest of the
codebase can call ``get_tracer()`` without caring whether the SDK is
installed.  When the SDK is *not* configured the API returns no-op
implementations.

Usage::

    from toolrpc.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("toolrpc.tool.invoke") as span:
        span.set_attribute(ATTR_TOOL_NAME, "MapList")

To export spans, call :func:`configure_telemetry` once at startup with the
``telemetry`` section of the server config (requires ``toolrpc[otel]``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace

if TYPE_CHECKING:
    from toolrpc.config import TelemetrySettings

# ---------------------------------------------------------------------------
# Semantic attribute keys
# ---------------------------------------------------------------------------

ATTR_RPC_METHOD = "toolrpc.rpc.method"
ATTR_RPC_ERROR_CODE = "toolrpc.rpc.error_code"
ATTR_BATCH_SIZE = "toolrpc.rpc.batch_size"
ATTR_TOOL_NAME = "toolrpc.tool.name"
ATTR_TOOL_QUALIFIED_NAME = "toolrpc.tool.qualified_name"

_INSTRUMENTATION_NAME = "toolrpc"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name* (no-op without SDK)."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    settings: TelemetrySettings,
    *,
    service_name: str = _INSTRUMENTATION_NAME,
) -> None:
    """Install an SDK tracer provider exporting spans as *settings* describe.

    ``settings.console`` prints spans to stdout; ``settings.otlp_endpoint``
    ships them over OTLP/gRPC.  Both need the ``otel`` extra.

    Raises:
        ImportError: ``opentelemetry-sdk`` or, for OTLP export,
            ``opentelemetry-exporter-otlp`` is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = "opentelemetry-sdk is required for tracing; install toolrpc[otel]"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))

    if settings.console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    if settings.otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = "opentelemetry-exporter-otlp is required for OTLP export; install toolrpc[otel]"
            raise ImportError(msg) from exc
        exporter = OTLPSpanExporter(endpoint=settings.otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
