"""
OpenTelemetry configuration for the PCREX Shop backend.
Provides centralized tracing and metrics setup.
"""

import logging
import os
from typing import Optional

from opentelemetry import metrics
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

# Global telemetry state
_telemetry_initialized = False
_tracer_provider: Optional[TracerProvider] = None
_meter_provider: Optional[MeterProvider] = None


def get_resource_attributes(service_name: str, service_version: str = "1.0.0") -> Resource:
    """Create OpenTelemetry resource with service information."""
    return Resource.create(
        {
            "service.name": service_name,
            "service.version": service_version,
            "deployment.environment": os.getenv("ENV", "development"),
            "telemetry.sdk.language": "python",
            "telemetry.sdk.name": "opentelemetry",
        }
    )


def setup_telemetry(service_name: str, service_version: str = "1.0.0") -> None:
    """
    Initialize OpenTelemetry tracing and metrics for a service.

    Without OTEL_EXPORTER_OTLP_ENDPOINT the global no-op providers stay in
    place and spans/metrics are discarded.
    """
    global _telemetry_initialized, _tracer_provider, _meter_provider

    if _telemetry_initialized:
        logger.info(f"Telemetry already initialized for {service_name}")
        return

    from pcrex.settings import OTEL_EXPORTER_OTLP_ENDPOINT

    otlp_endpoint = OTEL_EXPORTER_OTLP_ENDPOINT
    if not otlp_endpoint:
        logger.info(f"No OTLP endpoint configured, telemetry disabled for {service_name}")
        return

    try:
        resource = get_resource_attributes(service_name, service_version)

        _tracer_provider = TracerProvider(resource=resource)
        otlp_trace_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        _tracer_provider.add_span_processor(BatchSpanProcessor(otlp_trace_exporter))
        trace.set_tracer_provider(_tracer_provider)

        otlp_metric_exporter = OTLPMetricExporter(endpoint=otlp_endpoint, insecure=True)
        metric_reader = PeriodicExportingMetricReader(
            exporter=otlp_metric_exporter,
            export_interval_millis=30000,  # Export every 30 seconds
        )
        _meter_provider = MeterProvider(resource=resource, metric_readers=[metric_reader])
        metrics.set_meter_provider(_meter_provider)

        _telemetry_initialized = True
        logger.info(f"OpenTelemetry initialized for {service_name} -> {otlp_endpoint}")

    except Exception as e:
        logger.error(f"Failed to initialize OpenTelemetry: {e}")


def get_tracer(name: str):
    """Get a tracer for creating custom spans."""
    return trace.get_tracer(name)


def get_meter(name: str):
    """Get a meter for creating custom metrics."""
    return metrics.get_meter(name)


class ShopMetrics:
    """Event counters for the shop backend.

    Record "X happened" events here (a reference was resolved, a request failed).
    Current-state values belong in the health endpoint, not in counters.
    """

    def __init__(self, service_name: str):
        self.meter = get_meter(f"pcrex.{service_name}")

        self.image_resolutions = self.meter.create_counter(
            "image_resolutions_total", description="Image references resolved, by reference kind"
        )

        self.http_errors = self.meter.create_counter("http_errors_total", description="HTTP responses with status >= 400")


def setup_web_server_telemetry(app):
    """Setup telemetry for the web server service."""
    setup_telemetry("pcrex-web-server")

    try:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        FastAPIInstrumentor.instrument_app(app)
    except ImportError:
        pass

    try:
        from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor

        SQLAlchemyInstrumentor().instrument()
    except ImportError:
        pass

    return ShopMetrics("web-server")
