"""
Rate pool integration layer
"""

from .rate_pool_config import RatePoolConfig, load_rate_pool_config
from .rate_pool_engine import RatePoolEngine
from .rate_pool_snapshot import RatePoolSnapshot, snapshot_from_state, state_from_snapshot

__all__ = [
    "RatePoolConfig",
    "load_rate_pool_config",
    "RatePoolEngine",
    "RatePoolSnapshot",
    "snapshot_from_state",
    "state_from_snapshot",
]
