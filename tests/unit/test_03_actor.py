from __future__ import annotations

from asyncio import gather
from typing import TYPE_CHECKING

from pytest import fixture, raises

from chring.core.actor import RingActor
from chring.core.errors import CollisionError, EmptyRingError, InvalidConfiguration
from chring.utils.config import RingConfig

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


@fixture
async def actor() -> AsyncGenerator[RingActor, None]:
    ring_actor = RingActor(10, name="actor", metrics=False)
    await ring_actor.start()
    yield ring_actor
    await ring_actor.stop()


def test_invalid_replication() -> None:
    with raises(InvalidConfiguration):
        RingActor(0)


def test_from_config() -> None:
    ring_actor = RingActor.from_config(RingConfig(replication=3, name="cfg"))
    assert ring_actor.replication == 3
    assert ring_actor.name == "cfg"
    assert not ring_actor.is_running()


async def test_insert_and_find(actor: RingActor) -> None:
    await actor.insert("node-1")
    await actor.insert("node-2")
    owner = await actor.find("some-key")
    assert owner in {"node-1", "node-2"}
    assert owner == actor.snapshot().find("some-key")


async def test_errors_reach_caller(actor: RingActor) -> None:
    with raises(EmptyRingError):
        await actor.find("some-key")
    await actor.insert("node-1")
    with raises(CollisionError):
        await actor.insert("node-1")
    assert actor.is_running()
    assert await actor.find("some-key") == "node-1"


async def test_commands_applied_in_order(actor: RingActor) -> None:
    results = await gather(
        actor.insert("node-1"),
        actor.find("k"),
        actor.remove("node-1"),
        actor.insert("node-2"),
        actor.find("k"),
    )
    assert results[1] == "node-1"
    assert results[4] == "node-2"
    assert set(actor.snapshot().owner_of.values()) == {"node-2"}


async def test_remove_absent_owner(actor: RingActor) -> None:
    await actor.insert("node-1")
    await actor.remove("node-9")
    assert len(actor.snapshot()) == 10


async def test_submit_requires_running_actor() -> None:
    ring_actor = RingActor(1, metrics=False)
    with raises(RuntimeError):
        await ring_actor.insert("node-1")
    await ring_actor.start()
    await ring_actor.insert("node-1")
    await ring_actor.stop()
    assert not ring_actor.is_running()
    with raises(RuntimeError):
        await ring_actor.find("k")
