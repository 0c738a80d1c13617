from __future__ import annotations


class RingError(Exception):
    """Base class for every error raised by a ring."""


class InvalidConfiguration(RingError, ValueError):
    def __init__(self, replication: object) -> None:
        super().__init__(f"replication factor must be 1 or greater, got {replication!r}")
        self.replication = replication


class CollisionError(RingError):
    """A virtual key hashed onto a position that is already taken.

    Replicas inserted earlier in the same call are left in the ring.
    """

    def __init__(self, owner: str, virtual_key: str, hash_value: int) -> None:
        super().__init__(f"collision on {owner} ({virtual_key}) hashed as {hash_value}")
        self.owner = owner
        self.virtual_key = virtual_key
        self.hash_value = hash_value


class EmptyRingError(RingError, LookupError):
    def __init__(self) -> None:
        super().__init__("ring has no positions")


class InternalConsistencyError(RingError):
    def __init__(self, position: int) -> None:
        super().__init__(f"no owner mapping for position {position}")
        self.position = position
