"""
Node RPC error codes and messages

Values are defined by the node software and the jussi gateway, see
json_rpc_plugin.hpp in steemit/steem and jussi/errors.py in steemit/jussi.
They must not be renumbered.
"""

from typing import FrozenSet


class RpcErrorCodes:
    """Error codes returned in the error envelope"""
    JSON_RPC_SERVER_ERROR = -32000
    JSON_RPC_NO_PARAMS = -32001
    JSON_RPC_PARSE_PARAMS_ERROR = -32002
    JSON_RPC_ERROR_DURING_CALL = -32003

    JSON_RPC_INVALID_REQUEST = -32600
    JSON_RPC_METHOD_NOT_FOUND = -32601
    JSON_RPC_INVALID_PARAMS = -32602
    JSON_RPC_INTERNAL_ERROR = -32603

    JSON_RPC_PARSE_ERROR = -32700

    JUSSI_UPSTREAM_RESPONSE_ERROR = 1100

    # Legacy (pre-appbase) nodes answer every current-dialect request with 1
    JSON_RPC_LEGACY_NODE_ERROR = 1


class RpcErrorMessages:
    """Error messages paired with the codes above"""
    INTERNAL_ERROR = "Internal Error"
    INVALID_UPSTREAM_RESPONSE = "Bad or missing upstream response"
    UNABLE_TO_LOCK_DATABASE = "Unable to acquire database lock"
    UNKNOWN_EXCEPTION = "Unknown exception"
    UPSTREAM_RESPONSE_ERROR = "Upstream response error"


def well_known_codes() -> FrozenSet[int]:
    """All error codes the client knows about"""
    return frozenset({
        RpcErrorCodes.JSON_RPC_SERVER_ERROR,
        RpcErrorCodes.JSON_RPC_NO_PARAMS,
        RpcErrorCodes.JSON_RPC_PARSE_PARAMS_ERROR,
        RpcErrorCodes.JSON_RPC_ERROR_DURING_CALL,
        RpcErrorCodes.JSON_RPC_INVALID_REQUEST,
        RpcErrorCodes.JSON_RPC_METHOD_NOT_FOUND,
        RpcErrorCodes.JSON_RPC_INVALID_PARAMS,
        RpcErrorCodes.JSON_RPC_INTERNAL_ERROR,
        RpcErrorCodes.JSON_RPC_PARSE_ERROR,
        RpcErrorCodes.JUSSI_UPSTREAM_RESPONSE_ERROR,
        RpcErrorCodes.JSON_RPC_LEGACY_NODE_ERROR,
    })


def well_known_messages() -> FrozenSet[str]:
    """All error messages the client knows about"""
    return frozenset({
        RpcErrorMessages.INTERNAL_ERROR,
        RpcErrorMessages.INVALID_UPSTREAM_RESPONSE,
        RpcErrorMessages.UNABLE_TO_LOCK_DATABASE,
        RpcErrorMessages.UNKNOWN_EXCEPTION,
        RpcErrorMessages.UPSTREAM_RESPONSE_ERROR,
    })
