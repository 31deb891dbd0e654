"""
HTTP transport adapter

POSTs JSON-RPC payloads to nodes over HTTP(S) with a shared httpx client.
"""

import logging
import time
from typing import Dict, Optional

import httpx

from noderpc.adapters.adapter_interface import TransportError, TransportInterface, TransportResponse
from noderpc.telemetry.metrics import increment_counter, record_latency
from noderpc.telemetry.tracer import inject_trace_context

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class HttpTransport(TransportInterface):
    """
    HTTP transport adapter

    The underlying httpx.Client is thread-safe, so one transport serves all
    concurrent calls of a client.
    """

    def __init__(self,
                 timeout_ms: int = 5000,
                 headers: Optional[Dict[str, str]] = None,
                 client: Optional[httpx.Client] = None):
        """Initialize HTTP transport

        Args:
            timeout_ms: Request timeout (milliseconds)
            headers: Extra headers sent with every request
            client: Preconfigured httpx client, mainly for tests
        """
        self.timeout_ms = timeout_ms
        self.headers = dict(DEFAULT_HEADERS)
        if headers:
            self.headers.update(headers)
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=timeout_ms / 1000.0,
            follow_redirects=True,
        )
        logger.info(f"HTTP transport created, timeout: {timeout_ms}ms")

    def send(self, url: str, payload: bytes) -> TransportResponse:
        headers = inject_trace_context(dict(self.headers))
        start_time = time.time()

        try:
            response = self.client.post(url, content=payload, headers=headers)
        except httpx.TimeoutException as e:
            increment_counter("rpc.transport.errors", 1, {"type": "timeout"})
            raise TransportError(f"Request to {url} timed out ({self.timeout_ms}ms)") from e
        except httpx.HTTPError as e:
            increment_counter("rpc.transport.errors", 1, {"type": "network"})
            raise TransportError(f"Request to {url} failed: {e}") from e

        latency_ms = (time.time() - start_time) * 1000
        record_latency("rpc.transport.latency", latency_ms, {"status": str(response.status_code)})
        logger.debug(f"HTTP {response.status_code} from {url}, latency: {latency_ms:.2f}ms")

        return TransportResponse(
            status_code=response.status_code,
            reason=response.reason_phrase,
            content=response.content,
        )

    def close(self) -> None:
        """Close the client if this transport created it"""
        if self._owns_client:
            self.client.close()
