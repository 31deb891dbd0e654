"""
Wire-level message types

Request and response envelopes exchanged with a node. The JSON field names
are fixed by the node protocol.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

JSON_RPC_VERSION = "2.0"


@dataclass(frozen=True)
class WireRequest:
    """One JSON-RPC request, built per attempt"""
    id: int
    method: str
    params: Union[Dict[str, Any], List[Any]]
    jsonrpc: str = JSON_RPC_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "id": self.id,
            "method": self.method,
            "params": self.params,
        }


@dataclass(frozen=True)
class RpcErrorData:
    name: Optional[str] = None
    exception: Optional[str] = None


@dataclass(frozen=True)
class RpcError:
    """Error envelope of a response

    ``code`` and ``message`` are optional here because nodes do not always
    honour the envelope contract; the classifier decides what a missing field
    means.
    """
    code: Optional[int] = None
    message: Optional[str] = None
    data: Optional[RpcErrorData] = None

    def __str__(self) -> str:
        text = f"code={self.code} message={self.message!r}"
        if self.data is not None:
            text += f" data={self.data.name}: {self.data.exception}"
        return text


@dataclass(frozen=True)
class WireResponse:
    """Decoded response: exactly one of ``result`` / ``error`` is meaningful"""
    result: Any = None
    error: Optional[RpcError] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None
