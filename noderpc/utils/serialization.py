"""
JSON envelope serialization

Provides conversion between wire message types and the JSON bytes exchanged
with nodes.
"""

import json
from typing import Any, Optional

from noderpc.models import RpcError, RpcErrorData, WireRequest, WireResponse


class DecodeError(ValueError):
    """Response body is not a valid response envelope"""


def encode_request(request: WireRequest) -> bytes:
    """Convert request to JSON bytes

    Args:
        request: Wire request

    Returns:
        bytes: Compact UTF-8 JSON
    """
    return json.dumps(request.to_dict(), separators=(",", ":")).encode("utf-8")


def decode_response(content: bytes) -> WireResponse:
    """Convert JSON bytes to a response

    Args:
        content: Response body

    Returns:
        WireResponse: Response with exactly one of result/error set

    Raises:
        DecodeError: Invalid JSON or envelope
    """
    try:
        body = json.loads(content)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Response is not valid JSON: {e}") from e

    if not isinstance(body, dict):
        raise DecodeError(f"Response must be a JSON object, got {type(body).__name__}")

    raw_error = body.get("error")
    if raw_error is None:
        if "result" not in body:
            raise DecodeError("Response has neither result nor error")
        return WireResponse(result=body["result"])

    if body.get("result") is not None:
        raise DecodeError("Response has both result and error")
    return WireResponse(error=dict_to_error(raw_error))


def dict_to_error(data: Any) -> RpcError:
    """Convert error object to RpcError

    Missing ``code``/``message`` are kept as None so the classifier can see
    them; wrong types are decode errors.
    """
    if not isinstance(data, dict):
        raise DecodeError(f"Error must be a JSON object, got {type(data).__name__}")

    code = data.get("code")
    if code is not None and (isinstance(code, bool) or not isinstance(code, int)):
        raise DecodeError(f"Error code must be an integer, got {code!r}")

    message = data.get("message")
    if message is not None and not isinstance(message, str):
        raise DecodeError(f"Error message must be a string, got {message!r}")

    return RpcError(code=code, message=message, data=_dict_to_error_data(data.get("data")))


def _dict_to_error_data(data: Any) -> Optional[RpcErrorData]:
    if not isinstance(data, dict):
        return None
    return RpcErrorData(
        name=_optional_str(data.get("name")),
        exception=_optional_str(data.get("exception")),
    )


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None

