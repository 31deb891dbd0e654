"""
Client exception types

Callers only ever see MalformedProtocolError, UnrecoverableRpcError,
RetryExceededError or CallCancelledError. RecoverableRpcError is raised
internally to drive node rotation and reaches callers only wrapped in
RetryExceededError.
"""

from typing import Any, Optional


class RpcClientError(RuntimeError):
    """Base class for errors raised by the node RPC client"""

    def __init__(
        self,
        message: str,
        *,
        node: Optional[str] = None,
        error: Any = None,
    ) -> None:
        super().__init__(message)
        self.node = node
        self.error = error


class MalformedProtocolError(RpcClientError):
    """The node broke the response or error-envelope contract"""


class UnrecoverableRpcError(RpcClientError):
    """The node rejected the call with a well-formed, non-transient error"""


class RecoverableRpcError(RpcClientError):
    """Transient failure; another node may succeed"""

    def __init__(
        self,
        message: str,
        *,
        node: Optional[str] = None,
        error: Any = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, node=node, error=error)
        self.status_code = status_code


class RetryExceededError(RpcClientError):
    """Every attempt allowed by the budget failed with a recoverable error"""

    def __init__(
        self,
        message: str,
        *,
        node: Optional[str] = None,
        last_error: Optional[RecoverableRpcError] = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message, node=node, error=last_error)
        self.last_error = last_error
        self.attempts = attempts


class CallCancelledError(RpcClientError):
    """The caller cancelled the call between two attempts"""
