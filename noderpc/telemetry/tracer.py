"""
OpenTelemetry Trace Context Management

Provides tracer setup, span creation and trace context injection into the
HTTP headers of outgoing node requests.
"""

import logging
from typing import Any, Dict, Optional

from opentelemetry import propagate, trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ALWAYS_ON

logger = logging.getLogger(__name__)

TRACER_NAME = "noderpc"


def setup_tracer(service_name: str, otlp_endpoint: str = "localhost:4317"):
    """Configure OpenTelemetry tracer

    Args:
        service_name: Service name
        otlp_endpoint: OTLP receiver address

    Returns:
        Tracer for the service
    """
    provider = TracerProvider(
        sampler=ALWAYS_ON,
        resource=Resource.create({"service.name": service_name}),
    )

    otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint)
    provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(provider)

    tracer = trace.get_tracer(service_name)

    logger.info(f"OpenTelemetry trace configured, service name: {service_name}, OTLP endpoint: {otlp_endpoint}")

    return tracer


def inject_trace_context(headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Inject the active trace context into a header dictionary

    Uses the globally configured propagator (W3C traceparent by default).
    Without an active span the headers are returned unchanged.

    Args:
        headers: Headers to extend, a new dictionary is created if None

    Returns:
        Dict[str, str]: The same headers with trace context added
    """
    carrier = {} if headers is None else headers
    propagate.inject(carrier)
    return carrier


def create_span(name: str, attributes: Dict[str, Any] = None):
    """Create new span as the current span

    Args:
        name: Span name
        attributes: Span attributes

    Returns:
        Context manager yielding the span
    """
    tracer = trace.get_tracer(TRACER_NAME)
    return tracer.start_as_current_span(
        name,
        attributes=attributes or {},
        kind=trace.SpanKind.CLIENT,
    )
