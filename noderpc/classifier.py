"""
Error classification

Maps an error envelope returned by a node onto the category that decides
whether the call is retried on another node.
"""

from enum import Enum
from typing import Collection, FrozenSet, Optional, Tuple

from noderpc.error_codes import RpcErrorCodes, RpcErrorMessages
from noderpc.models import RpcError


class ErrorCategory(Enum):
    """Retry eligibility of an RPC error"""
    MALFORMED = "malformed"
    LEGACY_DIALECT = "legacy_dialect"
    RECOVERABLE = "recoverable"
    FATAL = "fatal"


# Known transient server failures. Anything not listed here is fatal.
RECOVERABLE_ERRORS: FrozenSet[Tuple[int, str]] = frozenset({
    (RpcErrorCodes.JSON_RPC_ERROR_DURING_CALL, RpcErrorMessages.UNABLE_TO_LOCK_DATABASE),
    (RpcErrorCodes.JSON_RPC_SERVER_ERROR, RpcErrorMessages.UNKNOWN_EXCEPTION),
    (RpcErrorCodes.JSON_RPC_INTERNAL_ERROR, RpcErrorMessages.INTERNAL_ERROR),
    (RpcErrorCodes.JUSSI_UPSTREAM_RESPONSE_ERROR, RpcErrorMessages.UPSTREAM_RESPONSE_ERROR),
})


def is_legacy_node_error(error: RpcError) -> bool:
    return error.code == RpcErrorCodes.JSON_RPC_LEGACY_NODE_ERROR


def is_malformed_error(error: RpcError) -> bool:
    return error.code is None or error.message is None


def is_recoverable_error(error: RpcError,
                         recoverable_errors: Optional[Collection[Tuple[int, str]]] = None) -> bool:
    table = RECOVERABLE_ERRORS if recoverable_errors is None else recoverable_errors
    return (error.code, error.message) in table


def classify(error: RpcError,
             recoverable_errors: Optional[Collection[Tuple[int, str]]] = None) -> ErrorCategory:
    """Classify an error envelope

    The legacy sentinel is checked first: legacy nodes reply to current-dialect
    requests with code 1 and do not necessarily fill in a message.

    Args:
        error: Error envelope from the response
        recoverable_errors: Optional replacement for the (code, message)
            allow-list of transient failures

    Returns:
        ErrorCategory: Exactly one category for every input
    """
    if is_legacy_node_error(error):
        return ErrorCategory.LEGACY_DIALECT
    if is_malformed_error(error):
        return ErrorCategory.MALFORMED
    if is_recoverable_error(error, recoverable_errors):
        return ErrorCategory.RECOVERABLE
    return ErrorCategory.FATAL
