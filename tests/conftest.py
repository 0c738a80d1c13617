from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger
from pytest import fixture

from chring.core.ring import ConsistentHash

if TYPE_CHECKING:
    from collections.abc import Generator

ADDRESSES: list[str] = [
    "127.0.0.1",
    "17.0.1.1",
    "1.1.0.1",
    "27.99.0.111",
    "64.0.8.8",
    "8.8.8.8",
    "10.100.0.100",
    "128.4.4.4",
    "28.28.1.1",
    "28.10.0.10",
    "12.9.0.10",
    "11.11.8.1",
    "13.10.0.19",
    "128.19.19.19",
]


@fixture
def addresses() -> list[str]:
    return list(ADDRESSES)


@fixture
def populated_ring() -> ConsistentHash:
    ring = ConsistentHash(100, name="populated")
    for address in ADDRESSES:
        ring.insert(address)
    return ring


@fixture
def log_messages() -> Generator[list[str], None, None]:
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)
