from chring.core.actor import RingActor
from chring.core.concurrent import ConcurrentConsistentHash, RWLock
from chring.core.errors import (
    CollisionError,
    EmptyRingError,
    InternalConsistencyError,
    InvalidConfiguration,
    RingError,
)
from chring.core.ring import ConsistentHash, RingSnapshot

__all__ = [
    "ConsistentHash",
    "ConcurrentConsistentHash",
    "RingActor",
    "RingSnapshot",
    "RWLock",
    "RingError",
    "InvalidConfiguration",
    "CollisionError",
    "EmptyRingError",
    "InternalConsistencyError",
]
