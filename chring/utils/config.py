from __future__ import annotations

from dataclasses import dataclass
from os import getenv

from chring.core.errors import InvalidConfiguration

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class RingConfig:
    replication: int = 100
    name: str = "default"
    log_level: str = "INFO"
    metrics_enabled: bool = True

    @classmethod
    def from_env(cls) -> RingConfig:
        return cls(
            replication=_parse_replication(getenv("RING_REPLICATION", "100")),
            name=getenv("RING_NAME", "default"),
            log_level=getenv("LOG_LEVEL", "INFO"),
            metrics_enabled=getenv("RING_METRICS_ENABLED", "true").lower() in _TRUTHY,
        )


def _parse_replication(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfiguration(raw) from None


def get_config() -> RingConfig:
    return RingConfig.from_env()
