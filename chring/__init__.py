from chring.core import (
    CollisionError,
    ConcurrentConsistentHash,
    ConsistentHash,
    EmptyRingError,
    InternalConsistencyError,
    InvalidConfiguration,
    RingActor,
    RingError,
    RingSnapshot,
    RWLock,
)
from chring.utils import RingConfig, checksum, configure_logging, virtual_key

__version__ = "0.1.0"

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
    "RingConfig",
    "checksum",
    "virtual_key",
    "configure_logging",
]
