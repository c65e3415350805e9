"""
Rate pool configuration.

A pool is configured by its owner identity, opening balances and control
parameters. Configuration can be built in code or loaded from a YAML mapping,
either at the top level or under a `rate_pool:` section:

    rate_pool:
      owner: "0xowner"
      token_a_balance: 1000
      token_b_balance: 1000
      exchange_rate: 100
      fee_percentage: 3
      paused: false
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..core.rate_pool.math import MAX_FEE_PERCENTAGE, MAX_UINT

CONFIG_SECTION = "rate_pool"


@dataclass(frozen=True)
class RatePoolConfig:
    owner: str
    token_a_balance: int = 0
    token_b_balance: int = 0
    # 100 == parity.
    exchange_rate: int = 100
    fee_percentage: int = 0
    paused: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.owner, str) or not self.owner:
            raise ValueError("owner must be a non-empty string")
        for name, v in (
            ("token_a_balance", self.token_a_balance),
            ("token_b_balance", self.token_b_balance),
            ("exchange_rate", self.exchange_rate),
            ("fee_percentage", self.fee_percentage),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if not (0 <= v <= MAX_UINT):
                raise ValueError(f"{name} must be a uint: {v}")
        if self.fee_percentage > MAX_FEE_PERCENTAGE:
            raise ValueError(f"fee_percentage must be in [0, {MAX_FEE_PERCENTAGE}]: {self.fee_percentage}")
        if not isinstance(self.paused, bool):
            raise TypeError("paused must be a bool")


_CONFIG_KEYS = frozenset(f.name for f in fields(RatePoolConfig))


def rate_pool_config_from_mapping(obj: Mapping[str, Any]) -> RatePoolConfig:
    if not isinstance(obj, Mapping):
        raise TypeError("rate pool config must be a mapping")
    section = obj.get(CONFIG_SECTION, obj)
    if not isinstance(section, Mapping):
        raise TypeError(f"{CONFIG_SECTION} section must be a mapping")
    unknown = sorted(set(section) - _CONFIG_KEYS)
    if unknown:
        raise ValueError(f"unknown rate pool config keys: {', '.join(map(str, unknown))}")
    if "owner" not in section:
        raise ValueError("rate pool config requires an owner")
    return RatePoolConfig(**dict(section))


def load_rate_pool_config(path: str | Path) -> RatePoolConfig:
    """Load a `RatePoolConfig` from a YAML file."""
    text = Path(path).read_text(encoding="utf-8")
    obj = yaml.safe_load(text)
    if obj is None:
        raise ValueError(f"empty rate pool config: {path}")
    return rate_pool_config_from_mapping(obj)
