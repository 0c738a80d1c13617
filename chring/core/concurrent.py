from __future__ import annotations

from contextlib import contextmanager
from threading import Condition, Lock
from typing import TYPE_CHECKING

from chring.core.ring import ConsistentHash

if TYPE_CHECKING:
    from collections.abc import Iterator

    from chring.core.ring import RingSnapshot
    from chring.utils.config import RingConfig


class RWLock:
    """Reader/writer lock that prefers writers.

    Any number of readers may hold the lock together. A writer holds it
    alone, and once a writer is waiting no new reader is admitted.
    """

    def __init__(self) -> None:
        self._cond = Condition(Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read called without a read lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write called without the write lock")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def reader(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def writer(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def write_locked(self) -> bool:
        return self._writer


class ConcurrentConsistentHash:
    """``ConsistentHash`` guarded by an ``RWLock``.

    Lookups share the lock; ``insert`` and ``remove`` hold it exclusively for
    all of their replicas, so readers never see a half-applied change.
    """

    def __init__(
        self,
        replication: int,
        name: str = "default",
        metrics: bool = True,
    ) -> None:
        self._ring = ConsistentHash(replication, name=name, metrics=metrics)
        self._lock = RWLock()

    @classmethod
    def from_config(cls, config: RingConfig) -> ConcurrentConsistentHash:
        return cls(
            config.replication,
            name=config.name,
            metrics=config.metrics_enabled,
        )

    @property
    def replication(self) -> int:
        return self._ring.replication

    @property
    def name(self) -> str:
        return self._ring.name

    @property
    def lock(self) -> RWLock:
        return self._lock

    def insert(self, owner: str) -> None:
        with self._lock.writer():
            self._ring.insert(owner)

    def remove(self, owner: str) -> None:
        with self._lock.writer():
            self._ring.remove(owner)

    def find(self, key: str) -> str:
        with self._lock.reader():
            return self._ring.find(key)

    @property
    def positions(self) -> tuple[int, ...]:
        with self._lock.reader():
            return self._ring.positions

    @property
    def owner_count(self) -> int:
        with self._lock.reader():
            return self._ring.owner_count

    def owners(self) -> list[str]:
        with self._lock.reader():
            return self._ring.owners()

    def owner_at(self, position: int) -> str | None:
        with self._lock.reader():
            return self._ring.owner_at(position)

    def positions_of(self, owner: str) -> list[int]:
        with self._lock.reader():
            return self._ring.positions_of(owner)

    def snapshot(self) -> RingSnapshot:
        with self._lock.reader():
            return self._ring.snapshot()

    def __len__(self) -> int:
        with self._lock.reader():
            return len(self._ring)

    def __contains__(self, owner: object) -> bool:
        with self._lock.reader():
            return owner in self._ring

    def __repr__(self) -> str:
        with self._lock.reader():
            return f"Concurrent{self._ring!r}"
