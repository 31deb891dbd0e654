"""
OpenTelemetry Integration Module

Provides distributed tracing and metrics collection capabilities:
- tracer: Tracer setup, spans and trace context injection into request headers
- metrics: Counters and latency histograms for node calls
"""

from .tracer import (
    setup_tracer,
    inject_trace_context,
    create_span
)
from .metrics import (
    setup_metrics,
    increment_counter,
    record_latency
)

__all__ = [
    "setup_tracer",
    "inject_trace_context",
    "create_span",
    "setup_metrics",
    "increment_counter",
    "record_latency"
]
