"""
OpenTelemetry configuration for llhls.
Provides tracing setup; parse spans are recorded through get_tracer().
"""

import logging
import os
from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from llhls import __version__

logger = logging.getLogger(__name__)

# Global telemetry state
_telemetry_initialized = False
_tracer_provider: Optional[TracerProvider] = None


def get_resource_attributes(service_name: str, service_version: str = __version__) -> Resource:
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


def setup_telemetry(
    service_name: str,
    otlp_endpoint: Optional[str] = None,
    enable_console_export: bool = False,
) -> Optional[TracerProvider]:
    """
    Initialize OpenTelemetry tracing.

    Args:
        service_name: Name of the service (e.g., "llhls-inspect")
        otlp_endpoint: OTLP gRPC endpoint; no OTLP export when unset
        enable_console_export: Whether to also export spans to the console
    """
    global _telemetry_initialized, _tracer_provider

    if _telemetry_initialized:
        logger.info(f"Telemetry already initialized for {service_name}")
        return _tracer_provider

    _tracer_provider = TracerProvider(resource=get_resource_attributes(service_name))

    if otlp_endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        _tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)))

    # Console exporter for debugging
    if enable_console_export:
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter

        _tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(_tracer_provider)
    _telemetry_initialized = True
    logger.info(f"OpenTelemetry initialized for {service_name} -> {otlp_endpoint or 'console'}")
    return _tracer_provider


def shutdown_telemetry() -> None:
    """Flush pending spans."""
    if _tracer_provider is not None:
        _tracer_provider.shutdown()


def get_tracer(name: str):
    """Get a tracer for creating custom spans."""
    return trace.get_tracer(name)
