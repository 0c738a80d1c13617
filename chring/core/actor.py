from __future__ import annotations

from asyncio import CancelledError, Future, Queue, Task, create_task, get_running_loop
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

from loguru import logger

from chring.core.ring import ConsistentHash

if TYPE_CHECKING:
    from collections.abc import Callable

    from chring.core.ring import RingSnapshot
    from chring.utils.config import RingConfig


class RingCommandType(Enum):
    INSERT = auto()
    REMOVE = auto()
    FIND = auto()


@dataclass(slots=True)
class RingCommand:
    command_type: RingCommandType
    argument: str
    future: Future[Any]


class RingActor:
    """A ring owned by a single asyncio task.

    Mutations and lookups are queued and applied one at a time in arrival
    order. Readers that do not need ordering with pending writes can use
    ``snapshot()`` instead.
    """

    def __init__(
        self,
        replication: int,
        name: str = "default",
        metrics: bool = True,
    ) -> None:
        self._ring = ConsistentHash(replication, name=name, metrics=metrics)
        self._queue: Queue[RingCommand] = Queue()
        self._task: Task[None] | None = None
        self._handlers: dict[RingCommandType, Callable[[str], Any]] = {
            RingCommandType.INSERT: self._ring.insert,
            RingCommandType.REMOVE: self._ring.remove,
            RingCommandType.FIND: self._ring.find,
        }
        self._running = False

    @classmethod
    def from_config(cls, config: RingConfig) -> RingActor:
        return cls(
            config.replication,
            name=config.name,
            metrics=config.metrics_enabled,
        )

    @property
    def name(self) -> str:
        return self._ring.name

    @property
    def replication(self) -> int:
        return self._ring.replication

    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._task = create_task(self._command_loop())
        logger.info(f"Ring actor {self.name} started")

    async def stop(self) -> None:
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except CancelledError:
                pass
            self._task = None
        while not self._queue.empty():
            command = self._queue.get_nowait()
            command.future.cancel()
        logger.info(f"Ring actor {self.name} stopped")

    async def insert(self, owner: str) -> None:
        await self._submit(RingCommandType.INSERT, owner)

    async def remove(self, owner: str) -> None:
        await self._submit(RingCommandType.REMOVE, owner)

    async def find(self, key: str) -> str:
        return await self._submit(RingCommandType.FIND, key)

    def snapshot(self) -> RingSnapshot:
        return self._ring.snapshot()

    async def _submit(self, command_type: RingCommandType, argument: str) -> Any:
        if not self._running:
            raise RuntimeError(f"Ring actor {self.name} is not running")
        future: Future[Any] = get_running_loop().create_future()
        await self._queue.put(RingCommand(command_type, argument, future))
        return await future

    async def _command_loop(self) -> None:
        while self._running:
            command = await self._queue.get()
            try:
                result = self._handlers[command.command_type](command.argument)
            except Exception as e:
                if not command.future.done():
                    command.future.set_exception(e)
            else:
                if not command.future.done():
                    command.future.set_result(result)
            finally:
                self._queue.task_done()

