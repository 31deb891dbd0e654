"""
Transport Adapters Module

Adapter implementations delivering encoded JSON-RPC requests to nodes:
- http: httpx-based HTTP(S) transport

All adapters inject OpenTelemetry trace context into outgoing requests.
"""

from .adapter_factory import TransportFactory, TransportType
from .adapter_interface import TransportError, TransportInterface, TransportResponse

__all__ = [
    "TransportFactory",
    "TransportType",
    "TransportError",
    "TransportInterface",
    "TransportResponse"
]
