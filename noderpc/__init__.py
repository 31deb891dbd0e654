"""
noderpc: failover JSON-RPC client for interchangeable service nodes

Nodes speak one of two dialects of the same JSON-RPC 2.0 protocol:

1. Current (appbase) dialect: ``<api>.<method>`` with named parameters
2. Legacy (condenser) dialect: ``condenser_api.<method>`` with positional parameters

The client adapts each call to the dialect of the node it targets, downgrades
nodes that turn out to be legacy-only, and fails over to the next node on
transient errors. All requests carry OpenTelemetry trace context.
"""

from noderpc.classifier import ErrorCategory, classify
from noderpc.client import NodeRpcClient
from noderpc.config import ClientConfig, NodeConfig
from noderpc.dialect import CallDescription, Dialect, build_request
from noderpc.errors import (
    CallCancelledError,
    MalformedProtocolError,
    RetryExceededError,
    RpcClientError,
    UnrecoverableRpcError,
)
from noderpc.node_pool import Node, NodePool

__version__ = "0.1.0"

__all__ = [
    "NodeRpcClient",
    "ClientConfig",
    "NodeConfig",
    "CallDescription",
    "Dialect",
    "build_request",
    "ErrorCategory",
    "classify",
    "Node",
    "NodePool",
    "RpcClientError",
    "MalformedProtocolError",
    "UnrecoverableRpcError",
    "RetryExceededError",
    "CallCancelledError",
]
