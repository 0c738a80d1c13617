from chring.utils.config import RingConfig, get_config
from chring.utils.hashing import checksum, hash_key, virtual_key
from chring.utils.log import configure_logging
from chring.utils.metrics import Metrics, MetricsCollector, Timer

__all__ = [
    "RingConfig",
    "get_config",
    "checksum",
    "hash_key",
    "virtual_key",
    "configure_logging",
    "Metrics",
    "MetricsCollector",
    "Timer",
]
