"""Performance tests for ring lookups and membership changes."""

import time
from concurrent.futures import ThreadPoolExecutor

from chring.core.concurrent import ConcurrentConsistentHash
from chring.core.ring import ConsistentHash


def test_find_performance() -> None:
    """Test lookup throughput on a large ring."""
    ring = ConsistentHash(200, metrics=False)
    for i in range(10):
        ring.insert(f"node{i}")

    start_time = time.time()
    for i in range(100000):
        ring.find(f"key{i}")
    duration = time.time() - start_time

    assert duration < 2.0


def test_insert_remove_performance() -> None:
    """Test membership churn on a ring with many positions."""
    ring = ConsistentHash(100, metrics=False)
    for i in range(50):
        ring.insert(f"node{i}")

    start_time = time.time()
    for i in range(50, 100):
        ring.insert(f"node{i}")
        ring.remove(f"node{i}")
    duration = time.time() - start_time

    assert duration < 2.0
    assert len(ring) == 5000


def test_concurrent_find_performance() -> None:
    """Test lookup throughput through the reader/writer lock."""
    ring = ConcurrentConsistentHash(100, metrics=False)
    for i in range(10):
        ring.insert(f"node{i}")

    def lookup(worker: int) -> None:
        for i in range(10000):
            ring.find(f"worker{worker}-key{i}")

    start_time = time.time()
    with ThreadPoolExecutor(max_workers=4) as executor:
        list(executor.map(lookup, range(4)))
    duration = time.time() - start_time

    assert duration < 5.0
