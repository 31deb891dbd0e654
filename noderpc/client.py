"""
Failover JSON-RPC client

Drives one logical call across the node pool: builds the request in the
dialect of the targeted node, downgrades nodes that turn out to be legacy-only,
rotates to the next node on transient failures and gives up after the
configured number of tries.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Collection, Iterable, Optional, Tuple

from noderpc.adapters.adapter_factory import TransportFactory
from noderpc.adapters.adapter_interface import TransportError, TransportInterface
from noderpc.classifier import ErrorCategory, classify, is_malformed_error
from noderpc.config import ClientConfig
from noderpc.dialect import CallDescription, Dialect, build_request
from noderpc.errors import (
    CallCancelledError,
    MalformedProtocolError,
    RecoverableRpcError,
    RetryExceededError,
    UnrecoverableRpcError,
)
from noderpc.models import RpcError, WireRequest, WireResponse
from noderpc.node_pool import Node, NodePool
from noderpc.telemetry.metrics import increment_counter, record_latency, setup_metrics
from noderpc.telemetry.tracer import create_span, setup_tracer
from noderpc.utils.serialization import DecodeError, decode_response, encode_request

logger = logging.getLogger(__name__)


class CallState(Enum):
    """States of one logical call"""
    DISPATCH = "dispatch"
    DIALECT_FALLBACK = "dialect_fallback"
    ROTATE = "rotate"
    SUCCESS = "success"
    EXHAUSTED = "exhausted"
    ABORT = "abort"


TERMINAL_STATES = frozenset({CallState.SUCCESS, CallState.EXHAUSTED, CallState.ABORT})


@dataclass
class AttemptState:
    """Progress of one logical call, never shared between calls"""
    call: CallDescription
    node: Node
    tried_count: int = 0
    dialect: Optional[Dialect] = None
    result: Any = None
    rpc_error: Optional[RpcError] = None
    error: Optional[Exception] = None
    cancel_event: Optional[threading.Event] = None


class NodeRpcClient:
    """
    JSON-RPC client with node failover and dialect fallback

    Safe to share between threads; each call() drives its own AttemptState and
    only the pool cursor and node dialect flags are shared.
    """

    def __init__(self,
                 transport: TransportInterface,
                 nodes: Optional[Iterable[Node]] = None,
                 max_tries: Optional[int] = None,
                 pool: Optional[NodePool] = None,
                 recoverable_errors: Optional[Collection[Tuple[int, str]]] = None):
        """Initialize client

        Args:
            transport: Transport adapter used for every request
            nodes: Nodes in failover order, ignored when pool is given
            max_tries: Maximum nodes contacted per call, ignored when pool is given
            pool: Prebuilt node pool
            recoverable_errors: Optional replacement for the transient
                (code, message) allow-list

        Raises:
            ValueError: Neither pool nor nodes and max_tries given
        """
        if pool is None:
            if nodes is None or max_tries is None:
                raise ValueError("Either pool or both nodes and max_tries are required")
            pool = NodePool(nodes, max_tries)
        self.transport = transport
        self.pool = pool
        self.recoverable_errors = recoverable_errors
        self._transitions = {
            CallState.DISPATCH: self._dispatch,
            CallState.DIALECT_FALLBACK: self._fall_back_to_legacy,
            CallState.ROTATE: self._rotate,
        }
        logger.info(f"Node RPC client created, nodes: {[n.url for n in pool.nodes]}, max tries: {pool.max_tries}")

    @classmethod
    def from_config(cls, config: ClientConfig) -> "NodeRpcClient":
        """Create client, transport and nodes from configuration"""
        if config.enable_tracing:
            setup_tracer(config.service_name, config.otlp_endpoint)
            setup_metrics(config.service_name, config.otlp_endpoint)
        transport = TransportFactory.create_transport(config.transport, config.transport_config())
        return cls(transport, config.build_nodes(), config.max_tries)

    def __enter__(self) -> "NodeRpcClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport"""
        self.transport.close()

    def call(self, call: CallDescription, cancel_event: Optional[threading.Event] = None) -> Any:
        """Execute one logical call

        Args:
            call: Call description
            cancel_event: Checked before every attempt; once set, no further
                node is contacted

        Returns:
            Result payload of the first successful response

        Raises:
            MalformedProtocolError: A node broke the envelope contract
            UnrecoverableRpcError: A node rejected the call
            RetryExceededError: All attempts failed with recoverable errors
            CallCancelledError: cancel_event was set between attempts
        """
        attempt = AttemptState(call=call, node=self.pool.current(), cancel_event=cancel_event)

        with create_span("rpc.call", {"rpc.api": call.api, "rpc.method": call.method}):
            state = CallState.DISPATCH
            while state not in TERMINAL_STATES:
                state = self._transitions[state](attempt)

            if state is CallState.SUCCESS:
                increment_counter("rpc.client.success", 1, {"method": call.method})
                return attempt.result
            raise attempt.error

    def _dispatch(self, attempt: AttemptState) -> CallState:
        """Send the call to the targeted node in the node's dialect"""
        node = attempt.node
        if attempt.cancel_event is not None and attempt.cancel_event.is_set():
            attempt.error = CallCancelledError(
                f"call<{attempt.call}> cancelled after {attempt.tried_count} attempts",
                node=node.url,
            )
            return CallState.ABORT

        dialect = node.dialect
        if not attempt.call.supports(dialect):
            message = f"call<{attempt.call}> has no legacy form for legacy node<{node.url}>"
            logger.warning(message)
            attempt.error = UnrecoverableRpcError(message, node=node.url)
            return CallState.ABORT

        attempt.dialect = dialect
        request = build_request(attempt.call, dialect)
        try:
            response = self._call_node(node, request)
        except RecoverableRpcError as e:
            attempt.error = e
            return CallState.ROTATE
        except MalformedProtocolError as e:
            attempt.error = e
            return CallState.ABORT

        if not response.is_error:
            attempt.result = response.result
            return CallState.SUCCESS

        attempt.rpc_error = response.error
        return self._handle_rpc_error(attempt, response.error)

    def _handle_rpc_error(self, attempt: AttemptState, error: RpcError) -> CallState:
        url = attempt.node.url
        category = classify(error, self.recoverable_errors)
        increment_counter("rpc.client.errors", 1, {"type": category.value, "code": str(error.code)})

        if category is ErrorCategory.LEGACY_DIALECT:
            if attempt.dialect is Dialect.CURRENT:
                return CallState.DIALECT_FALLBACK
            # The sentinel only means "legacy node" for current-dialect requests
            if is_malformed_error(error):
                category = ErrorCategory.MALFORMED

        if category is ErrorCategory.MALFORMED:
            return self._abort_malformed(attempt, error)

        if category is ErrorCategory.RECOVERABLE:
            message = f"Recoverable error from node<{url}> : {error}"
            logger.info(message)
            attempt.error = RecoverableRpcError(message, node=url, error=error)
            return CallState.ROTATE

        # Fatal, or the legacy sentinel answering a request already in the legacy dialect
        message = f"Unrecoverable error from node<{url}> : {error}"
        logger.warning(message)
        attempt.error = UnrecoverableRpcError(message, node=url, error=error)
        return CallState.ABORT

    def _abort_malformed(self, attempt: AttemptState, error: RpcError) -> CallState:
        url = attempt.node.url
        message = f"Malformed error from node<{url}> : {error}"
        logger.warning(message)
        attempt.error = MalformedProtocolError(message, node=url, error=error)
        return CallState.ABORT

    def _fall_back_to_legacy(self, attempt: AttemptState) -> CallState:
        """Downgrade the node and retry it without consuming a try"""
        node = attempt.node
        if node.downgrade():
            logger.info(f"Stop using current dialect for {node.url}")
            increment_counter("rpc.client.dialect_downgrades", 1, {"node": node.url})

        if attempt.call.legacy_compatible:
            return CallState.DISPATCH

        if is_malformed_error(attempt.rpc_error):
            return self._abort_malformed(attempt, attempt.rpc_error)

        message = f"call<{attempt.call}> has no legacy form for legacy node<{node.url}>"
        logger.warning(message)
        attempt.error = UnrecoverableRpcError(message, node=node.url, error=attempt.rpc_error)
        return CallState.ABORT

    def _rotate(self, attempt: AttemptState) -> CallState:
        """Move to the next node, or stop when the try budget is spent"""
        failed = attempt.node
        tried = attempt.tried_count + 1
        if tried >= self.pool.max_tries:
            logger.warning(f"Try count exceeded : call<{attempt.call}> node<{failed.url}>: {attempt.error}")
            exhausted = RetryExceededError(
                f"call<{attempt.call}> failed after {tried} tries",
                node=failed.url,
                last_error=attempt.error,
                attempts=tried,
            )
            exhausted.__cause__ = attempt.error
            attempt.error = exhausted
            return CallState.EXHAUSTED

        if self.pool.advance(failed):
            increment_counter("rpc.client.rotations", 1, {"node": failed.url})
        attempt.tried_count = tried
        attempt.node = self.pool.current()
        attempt.rpc_error = None
        return CallState.DISPATCH

    def _call_node(self, node: Node, request: WireRequest) -> WireResponse:
        """Send one request and decode the response

        Raises:
            RecoverableRpcError: Transport failure or non-success HTTP status
            MalformedProtocolError: Body is not a valid response envelope
        """
        attributes = {"node": node.url, "method": request.method}
        payload = encode_request(request)

        with create_span("rpc.attempt", attributes):
            increment_counter("rpc.client.requests", 1, attributes)
            logger.debug(f"Sending {request.method} to {node.url}: {payload[:200]!r}")
            start_time = time.time()

            try:
                response = self.transport.send(node.url, payload)
            except TransportError as e:
                increment_counter("rpc.client.errors", 1, {"type": "transport"})
                message = f"Transport failure to node<{node.url}> : {e}"
                logger.warning(message)
                raise RecoverableRpcError(message, node=node.url, error=e) from e

            record_latency("rpc.client.latency", (time.time() - start_time) * 1000, attributes)

            if not response.is_acceptable:
                increment_counter("rpc.client.errors", 1, {"type": "http_status", "code": str(response.status_code)})
                message = (f"Non-success status {response.status_code} <{response.reason}> "
                           f"from <{node.url}>")
                logger.warning(message)
                raise RecoverableRpcError(message, node=node.url, status_code=response.status_code)

            try:
                return decode_response(response.content)
            except DecodeError as e:
                increment_counter("rpc.client.errors", 1, {"type": "decode"})
                message = f"Malformed response from node<{node.url}> : {e}"
                logger.warning(message)
                raise MalformedProtocolError(message, node=node.url, error=e) from e
