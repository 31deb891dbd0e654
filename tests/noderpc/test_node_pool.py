"""
Tests for the node pool and node dialect flags
"""
import threading

import pytest

from noderpc.dialect import Dialect
from noderpc.node_pool import Node, NodePool


def make_nodes(count):
    return [Node(f"https://node{i}.example.net/") for i in range(count)]


class TestNode:
    """Test node dialect flag"""

    def test_defaults_to_current_dialect(self):
        node = Node("https://example.net/")
        assert node.current_dialect is True
        assert node.dialect is Dialect.CURRENT

    def test_legacy_node(self):
        node = Node("https://example.net/", current_dialect=False)
        assert node.dialect is Dialect.LEGACY

    def test_downgrade_is_one_way(self):
        node = Node("https://example.net/")
        assert node.downgrade() is True
        assert node.dialect is Dialect.LEGACY
        assert node.downgrade() is False
        assert node.current_dialect is False

    def test_concurrent_downgrades_change_flag_once(self):
        node = Node("https://example.net/")
        barrier = threading.Barrier(8)
        results = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            changed = node.downgrade()
            with lock:
                results.append(changed)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1
        assert node.dialect is Dialect.LEGACY


class TestNodePool:
    """Test rotation cursor"""

    def test_requires_nodes(self):
        with pytest.raises(ValueError):
            NodePool([], 1)

    def test_requires_positive_max_tries(self):
        with pytest.raises(ValueError, match="max_tries"):
            NodePool(make_nodes(1), 0)

    def test_starts_at_first_node(self):
        nodes = make_nodes(3)
        pool = NodePool(nodes, 3)
        assert pool.current() is nodes[0]
        assert len(pool) == 3
        assert pool.nodes == tuple(nodes)
        assert pool.max_tries == 3

    def test_advance_wraps_around(self):
        nodes = make_nodes(3)
        pool = NodePool(nodes, 3)
        visited = []
        for _ in range(4):
            current = pool.current()
            visited.append(current)
            assert pool.advance(current) is True
        assert visited == [nodes[0], nodes[1], nodes[2], nodes[0]]

    def test_stale_advance_is_noop(self):
        nodes = make_nodes(3)
        pool = NodePool(nodes, 3)
        assert pool.advance(nodes[0]) is True
        assert pool.advance(nodes[0]) is False
        assert pool.current() is nodes[1]

    def test_single_node_pool(self):
        nodes = make_nodes(1)
        pool = NodePool(nodes, 2)
        assert pool.advance(nodes[0]) is True
        assert pool.current() is nodes[0]

    def test_concurrent_advance_moves_once(self):
        """Many callers failing on the same node advance the cursor by one"""
        nodes = make_nodes(4)
        pool = NodePool(nodes, 4)
        failed = pool.current()
        barrier = threading.Barrier(10)

        def worker():
            barrier.wait()
            pool.advance(failed)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert pool.current() is nodes[1]
