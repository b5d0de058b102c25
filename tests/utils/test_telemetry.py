"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from opentelemetry import trace

from toolrpc.config import TelemetrySettings
from toolrpc.utils.telemetry import (
    _INSTRUMENTATION_NAME,
    ATTR_BATCH_SIZE,
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_METHOD,
    ATTR_TOOL_NAME,
    ATTR_TOOL_QUALIFIED_NAME,
    configure_telemetry,
    get_tracer,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        tracer = get_tracer("test.module")
        assert isinstance(tracer, trace.Tracer)

    def test_default_name(self) -> None:
        tracer = get_tracer()
        assert isinstance(tracer, trace.Tracer)

    def test_noop_span(self) -> None:
        """Without SDK configured, spans should be no-ops."""
        tracer = get_tracer("test.noop")
        with tracer.start_as_current_span("toolrpc.rpc.request") as span:
            span.set_attribute(ATTR_RPC_METHOD, "ping")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="toolrpc\\[otel\\]"):
                configure_telemetry(TelemetrySettings(enabled=True))

    def test_configures_with_console(self) -> None:
        try:
            from opentelemetry.sdk.trace import TracerProvider
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        settings = TelemetrySettings(enabled=True, console=True)
        with patch("opentelemetry.trace.set_tracer_provider") as mock_set:
            configure_telemetry(settings, service_name="toolrpc-test")

        (provider,), _ = mock_set.call_args
        assert isinstance(provider, TracerProvider)
        assert provider.resource.attributes["service.name"] == "toolrpc-test"

    def test_otlp_raises_without_exporter(self) -> None:
        try:
            import opentelemetry.sdk.trace  # noqa: F401
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        settings = TelemetrySettings(enabled=True, otlp_endpoint="http://localhost:4317")
        with (
            patch.dict(
                "sys.modules",
                {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None},
            ),
            patch("opentelemetry.trace.set_tracer_provider") as mock_set,
        ):
            with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
                configure_telemetry(settings)
        mock_set.assert_not_called()


class TestAttributeConstants:
    @pytest.mark.parametrize(
        "attr",
        [
            ATTR_RPC_METHOD,
            ATTR_RPC_ERROR_CODE,
            ATTR_BATCH_SIZE,
            ATTR_TOOL_NAME,
            ATTR_TOOL_QUALIFIED_NAME,
        ],
    )
    def test_namespaced(self, attr: str) -> None:
        assert attr.startswith(f"{_INSTRUMENTATION_NAME}.")
