from __future__ import annotations

from bisect import bisect_left
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from loguru import logger

from chring.core.errors import (
    CollisionError,
    EmptyRingError,
    InternalConsistencyError,
    InvalidConfiguration,
)
from chring.utils.hashing import hash_key, virtual_key
from chring.utils.metrics import MetricsCollector, Timer

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chring.utils.config import RingConfig


def successor(
    positions: Sequence[int],
    owner_of: Mapping[int, str],
    key: str,
) -> str:
    """Owner of the first position at or after ``key``'s hash.

    Wraps to the smallest position when the hash is past the largest one.
    """
    if not positions:
        raise EmptyRingError()
    idx = bisect_left(positions, hash_key(key))
    if idx == len(positions):
        idx = 0
    position = positions[idx]
    try:
        return owner_of[position]
    except KeyError:
        raise InternalConsistencyError(position) from None


@dataclass(frozen=True, slots=True)
class RingSnapshot:
    replication: int
    positions: tuple[int, ...]
    owner_of: Mapping[int, str]

    def find(self, key: str) -> str:
        return successor(self.positions, self.owner_of, key)

    def __len__(self) -> int:
        return len(self.positions)


class ConsistentHash:
    """Consistent-hashing ring with ``replication`` virtual nodes per owner.

    Not safe for concurrent mutation; use ``ConcurrentConsistentHash`` when
    the ring is shared between threads.
    """

    def __init__(
        self,
        replication: int,
        name: str = "default",
        metrics: bool = True,
    ) -> None:
        if (
            isinstance(replication, bool)
            or not isinstance(replication, int)
            or replication < 1
        ):
            logger.warning(f"Ring {name}: replication factor must be 1 or greater")
            raise InvalidConfiguration(replication)
        self._replication = replication
        self._name = name
        self._positions: list[int] = []
        self._owner_of: dict[int, str] = {}
        self._replica_counts: dict[str, int] = {}
        self._metrics = MetricsCollector() if metrics else None

    @classmethod
    def from_config(cls, config: RingConfig) -> ConsistentHash:
        return cls(
            config.replication,
            name=config.name,
            metrics=config.metrics_enabled,
        )

    @property
    def replication(self) -> int:
        return self._replication

    @property
    def name(self) -> str:
        return self._name

    @property
    def positions(self) -> tuple[int, ...]:
        return tuple(self._positions)

    @property
    def owner_count(self) -> int:
        return len(self._replica_counts)

    def owners(self) -> list[str]:
        return sorted(self._replica_counts)

    def owner_at(self, position: int) -> str | None:
        return self._owner_of.get(position)

    def positions_of(self, owner: str) -> list[int]:
        return [p for p in self._positions if self._owner_of[p] == owner]

    def snapshot(self) -> RingSnapshot:
        return RingSnapshot(
            replication=self._replication,
            positions=tuple(self._positions),
            owner_of=MappingProxyType(dict(self._owner_of)),
        )

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, owner: object) -> bool:
        return owner in self._replica_counts

    def __repr__(self) -> str:
        return (
            f"ConsistentHash(name={self._name!r}, replication={self._replication}, "
            f"owners={self.owner_count}, positions={len(self._positions)})"
        )

    def insert(self, owner: str) -> None:
        """Add ``replication`` positions for ``owner``.

        Raises ``CollisionError`` on the first replica whose hash is already
        on the ring. Replicas added before the collision are kept.
        """
        with Timer() as timer:
            try:
                for i in range(1, self._replication + 1):
                    self._insert_one(owner, virtual_key(owner, i))
            except CollisionError as e:
                self._record("insert", "collision", timer.elapsed)
                if self._metrics:
                    self._metrics.record_collision(self._name)
                logger.warning(f"Ring {self._name}: {e}")
                raise
            self._record("insert", "ok", timer.elapsed)
        logger.info(
            f"Ring {self._name}: inserted {owner} "
            f"({self._replication} replicas, {len(self._positions)} positions)"
        )

    def _insert_one(self, owner: str, vkey: str) -> None:
        position = hash_key(vkey)
        idx = bisect_left(self._positions, position)
        if idx < len(self._positions) and self._positions[idx] == position:
            raise CollisionError(owner, vkey, position)
        self._positions.insert(idx, position)
        self._owner_of[position] = owner
        self._replica_counts[owner] = self._replica_counts.get(owner, 0) + 1

    def remove(self, owner: str) -> None:
        """Drop the position of every replica of ``owner``.

        A replica hash that is not on the ring is ignored.
        """
        with Timer() as timer:
            removed = 0
            for i in range(1, self._replication + 1):
                if self._remove_one(virtual_key(owner, i)):
                    removed += 1
            self._record("remove", "ok", timer.elapsed)
        if removed:
            logger.info(
                f"Ring {self._name}: removed {owner} "
                f"({removed} replicas, {len(self._positions)} positions)"
            )

    def _remove_one(self, vkey: str) -> bool:
        position = hash_key(vkey)
        current = self._owner_of.pop(position, None)
        if current is None:
            logger.debug(f"Ring {self._name}: {vkey} not found")
            return False
        del self._positions[bisect_left(self._positions, position)]
        remaining = self._replica_counts[current] - 1
        if remaining:
            self._replica_counts[current] = remaining
        else:
            del self._replica_counts[current]
        return True

    def find(self, key: str) -> str:
        with Timer() as timer:
            try:
                owner = successor(self._positions, self._owner_of, key)
            except EmptyRingError:
                self._record("find", "empty", timer.elapsed)
                raise
            except InternalConsistencyError as e:
                self._record("find", "error", timer.elapsed)
                logger.error(f"Ring {self._name}: {e}")
                raise
        self._record("find", "ok", timer.elapsed)
        return owner

    def _record(self, operation: str, status: str, latency: float) -> None:
        if self._metrics is None:
            return
        self._metrics.record_operation(self._name, operation, status, latency)
        if operation != "find":
            self._metrics.update_ring_size(
                self._name, len(self._positions), len(self._replica_counts)
            )
