"""
Transport adapter interface

Defines the interface every transport adapter implements, so the call
orchestration does not depend on how bytes reach a node.
"""

import abc
from dataclasses import dataclass

# Statuses after which the response body is read
SUCCESS_STATUS = 200
REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})


class TransportError(ConnectionError):
    """The request could not be delivered or no response was received"""


@dataclass(frozen=True)
class TransportResponse:
    """Raw response of one request"""
    status_code: int
    reason: str
    content: bytes

    @property
    def is_acceptable(self) -> bool:
        """Whether the status allows reading the body"""
        return self.status_code == SUCCESS_STATUS or self.status_code in REDIRECT_STATUSES


class TransportInterface(abc.ABC):
    """Transport adapter interface"""

    @abc.abstractmethod
    def send(self, url: str, payload: bytes) -> TransportResponse:
        """Send an encoded request to a node and wait for the response

        Args:
            url: Node endpoint address
            payload: Encoded JSON request

        Returns:
            TransportResponse: Status, reason phrase and body

        Raises:
            TransportError: Connection failure or timeout
        """
        pass

    @abc.abstractmethod
    def close(self) -> None:
        """Release connections and other resources"""
        pass
