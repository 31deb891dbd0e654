"""
Dialect adapter

Turns a caller's logical call into the request a node understands. Current
(appbase) nodes take ``<api>.<method>`` with named parameters; legacy
(condenser) nodes take ``condenser_api.<method>`` with positional parameters.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Tuple

from noderpc.models import WireRequest

LEGACY_API = "condenser_api"


class Dialect(Enum):
    """Protocol dialects spoken by nodes"""
    CURRENT = "appbase"
    LEGACY = "condenser"


class DialectNotSupportedError(ValueError):
    """The call has no form in the requested dialect"""


@dataclass(frozen=True)
class CallDescription:
    """Immutable description of one logical call

    Attributes:
        api: Sub-API name used by the current dialect, e.g. "database_api"
        method: Method name, shared by both dialects
        params: Named arguments for the current dialect
        legacy_params: Positional arguments for the legacy dialect, or None
            when the call cannot be expressed in it
        id: Request identifier
    """
    api: str
    method: str
    params: Mapping[str, Any]
    legacy_params: Optional[Tuple[Any, ...]] = None
    id: int = 0

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))
        if self.legacy_params is not None:
            object.__setattr__(self, "legacy_params", tuple(self.legacy_params))

    @classmethod
    def of(cls,
           api: str,
           method: str,
           params: Optional[Mapping[str, Any]] = None,
           legacy_params: Optional[Sequence[Any]] = None,
           id: int = 0) -> "CallDescription":
        return cls(api=api, method=method, params=params or {},
                   legacy_params=legacy_params, id=id)

    def __str__(self) -> str:
        return f"{self.api}.{self.method}(id={self.id})"

    @property
    def legacy_compatible(self) -> bool:
        return self.legacy_params is not None

    def supports(self, dialect: Dialect) -> bool:
        return dialect is Dialect.CURRENT or self.legacy_compatible


def build_request(call: CallDescription, dialect: Dialect) -> WireRequest:
    """Build the wire request for a call in the given dialect

    Args:
        call: Logical call
        dialect: Dialect of the targeted node

    Returns:
        WireRequest: Request ready for encoding

    Raises:
        DialectNotSupportedError: Legacy dialect requested for a call without
            positional parameters
    """
    if dialect is Dialect.CURRENT:
        return WireRequest(
            id=call.id,
            method=f"{call.api}.{call.method}",
            params=dict(call.params),
        )

    if not call.legacy_compatible:
        raise DialectNotSupportedError(
            f"{call.api}.{call.method} has no {LEGACY_API} form"
        )
    return WireRequest(
        id=call.id,
        method=f"{LEGACY_API}.{call.method}",
        params=list(call.legacy_params),
    )
