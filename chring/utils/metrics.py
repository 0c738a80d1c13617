from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter
from typing import TYPE_CHECKING

from prometheus_client import Counter, Gauge, Histogram, start_http_server

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(slots=True)
class Metrics:
    operations_total: Counter = field(
        default_factory=lambda: Counter(
            "chring_operations_total",
            "Total number of ring operations",
            ["ring", "operation", "status"],
        )
    )
    operation_latency: Histogram = field(
        default_factory=lambda: Histogram(
            "chring_operation_latency_seconds",
            "Ring operation latency in seconds",
            ["ring", "operation"],
            buckets=(
                0.00001,
                0.00005,
                0.0001,
                0.0005,
                0.001,
                0.005,
                0.01,
                0.05,
                0.1,
            ),
        )
    )
    positions: Gauge = field(
        default_factory=lambda: Gauge(
            "chring_positions",
            "Number of virtual-node positions on the ring",
            ["ring"],
        )
    )
    owners: Gauge = field(
        default_factory=lambda: Gauge(
            "chring_owners",
            "Number of distinct owners on the ring",
            ["ring"],
        )
    )
    collisions_total: Counter = field(
        default_factory=lambda: Counter(
            "chring_collisions_total",
            "Total virtual-node hash collisions rejected",
            ["ring"],
        )
    )


class MetricsCollector:
    _instance: MetricsCollector | None = None
    _metrics: Metrics | None = None
    _started: bool = False

    def __new__(cls) -> MetricsCollector:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._metrics = Metrics()
        return cls._instance

    @property
    def metrics(self) -> Metrics:
        if self._metrics is None:
            self._metrics = Metrics()
        return self._metrics

    def start_server(self, port: int = 9090) -> None:
        if not self._started:
            start_http_server(port)
            self._started = True

    def record_operation(
        self,
        ring: str,
        operation: str,
        status: str,
        latency: float,
    ) -> None:
        self.metrics.operations_total.labels(
            ring=ring,
            operation=operation,
            status=status,
        ).inc()
        self.metrics.operation_latency.labels(
            ring=ring,
            operation=operation,
        ).observe(latency)

    def record_collision(self, ring: str) -> None:
        self.metrics.collisions_total.labels(ring=ring).inc()

    def update_ring_size(self, ring: str, positions: int, owners: int) -> None:
        self.metrics.positions.labels(ring=ring).set(positions)
        self.metrics.owners.labels(ring=ring).set(owners)


class Timer:
    def __init__(
        self,
        callback: Callable[[float], None] | None = None,
    ) -> None:
        self._start: float = 0.0
        self._callback = callback

    def __enter__(self) -> Timer:
        self._start = perf_counter()
        return self

    def __exit__(self, *_: object) -> None:
        elapsed = perf_counter() - self._start
        if self._callback:
            self._callback(elapsed)

    @property
    def elapsed(self) -> float:
        return perf_counter() - self._start
