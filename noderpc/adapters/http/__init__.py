"""
HTTP Adapter Package

Implements the httpx-based transport used to reach JSON-RPC nodes.
"""

from noderpc.adapters.http.client import HttpTransport

__all__ = ["HttpTransport"]
