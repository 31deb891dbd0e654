"""
Node pool

Holds the fixed, ordered set of nodes and the failover cursor shared by all
concurrent calls.
"""

import logging
import threading
from typing import Iterable, Tuple

from noderpc.dialect import Dialect

logger = logging.getLogger(__name__)


class Node:
    """One service endpoint and the dialect it is assumed to speak

    The dialect flag only ever goes from current to legacy. Concurrent
    downgrades are idempotent.
    """

    def __init__(self, url: str, current_dialect: bool = True):
        self.url = url
        self._current_dialect = current_dialect
        self._lock = threading.Lock()

    @property
    def current_dialect(self) -> bool:
        """Whether the node is assumed to speak the current dialect"""
        with self._lock:
            return self._current_dialect

    @property
    def dialect(self) -> Dialect:
        return Dialect.CURRENT if self.current_dialect else Dialect.LEGACY

    def downgrade(self) -> bool:
        """Mark the node as legacy-only

        Returns:
            bool: True if this call changed the flag, False if the node was
            already legacy-only
        """
        with self._lock:
            changed = self._current_dialect
            self._current_dialect = False
        return changed

    def __repr__(self) -> str:
        return f"Node(url={self.url!r}, dialect={self.dialect.value})"


class NodePool:
    """Ordered nodes with a compare-and-advance rotation cursor"""

    def __init__(self, nodes: Iterable[Node], max_tries: int):
        """Initialize node pool

        Args:
            nodes: Candidate nodes in failover order, at least one
            max_tries: Maximum number of nodes one call may contact, at least 1

        Raises:
            ValueError: Empty node list or max_tries below 1
        """
        self._nodes: Tuple[Node, ...] = tuple(nodes)
        if not self._nodes:
            raise ValueError("NodePool requires at least one node")
        if max_tries < 1:
            raise ValueError(f"max_tries must be at least 1, got {max_tries}")
        self.max_tries = max_tries
        self._index = 0
        self._lock = threading.Lock()

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def current(self) -> Node:
        """Node currently targeted by new attempts"""
        with self._lock:
            return self._nodes[self._index]

    def advance(self, expected: Node) -> bool:
        """Move the cursor past ``expected`` if it is still the current node

        Args:
            expected: Node the caller saw fail

        Returns:
            bool: True if the cursor moved, False if another caller had
            already moved it
        """
        with self._lock:
            if self._nodes[self._index] is not expected:
                return False
            self._index = (self._index + 1) % len(self._nodes)
            following = self._nodes[self._index]
        logger.debug(f"Rotated node {expected.url} -> {following.url}")
        return True
