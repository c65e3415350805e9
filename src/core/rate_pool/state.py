"""Pool state operations, construction and serialization for `rate_pool`.

The PoolState operations here are pure: setters return a new `PoolState` and
a failed precondition raises before anything is built, so the input state is
never altered.

Round-trip property (tested): `ledger_from_dict(ledger_to_dict(s)) == s`.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from .errors import InvalidFeeError
from .math import MAX_FEE_PERCENTAGE, MAX_UINT
from .types import Identity, LedgerState, LiquidityRecord, PoolState

# Auto-derived from the dataclass field definitions (single source of truth).
POOL_VAR_NAMES: tuple[str, ...] = tuple(PoolState.__dataclass_fields__)
RECORD_VAR_NAMES: tuple[str, ...] = tuple(LiquidityRecord.__dataclass_fields__)


def initial_state(
    owner: Identity,
    *,
    token_a_balance: int = 0,
    token_b_balance: int = 0,
    exchange_rate: int = 100,
    fee_percentage: int = 0,
    paused: bool = False,
) -> LedgerState:
    """Return a fresh ledger with an empty liquidity registry.

    Raises TypeError/ValueError for values the pool invariants would reject:
    non-uint balances or rate, a fee outside [0, 100], a non-bool pause flag.
    """
    if not isinstance(owner, str) or not owner:
        raise ValueError("owner must be a non-empty string")
    for name, v in (
        ("token_a_balance", token_a_balance),
        ("token_b_balance", token_b_balance),
        ("exchange_rate", exchange_rate),
        ("fee_percentage", fee_percentage),
    ):
        if not isinstance(v, int) or isinstance(v, bool):
            raise TypeError(f"{name} must be an int")
        if not (0 <= v <= MAX_UINT):
            raise ValueError(f"{name} must be a uint: {v}")
    if fee_percentage > MAX_FEE_PERCENTAGE:
        raise ValueError(f"fee_percentage must be in [0, {MAX_FEE_PERCENTAGE}]: {fee_percentage}")
    if not isinstance(paused, bool):
        raise TypeError("paused must be a bool")
    pool = PoolState(
        owner=owner,
        token_a_balance=token_a_balance,
        token_b_balance=token_b_balance,
        exchange_rate=exchange_rate,
        fee_percentage=fee_percentage,
        paused=paused,
    )
    return LedgerState(pool=pool, providers={})


# -- PoolState operations ----------------------------------------------------

def read_balances(pool: PoolState) -> tuple[int, int]:
    return pool.token_a_balance, pool.token_b_balance


def read_rate(pool: PoolState) -> int:
    return pool.exchange_rate


def set_rate(pool: PoolState, new_rate: int) -> PoolState:
    return replace(pool, exchange_rate=new_rate)


def set_fee(pool: PoolState, new_fee: int) -> PoolState:
    """Return *pool* with a new fee. Raises InvalidFeeError outside [0, 100]."""
    if not 0 <= new_fee <= MAX_FEE_PERCENTAGE:
        raise InvalidFeeError(f"fee_percentage must be in [0, {MAX_FEE_PERCENTAGE}]: {new_fee}")
    return replace(pool, fee_percentage=new_fee)


def toggle_pause(pool: PoolState) -> PoolState:
    return replace(pool, paused=not pool.paused)


# -- Serialization -----------------------------------------------------------

def pool_to_dict(pool: PoolState) -> dict[str, bool | int | str]:
    return {name: getattr(pool, name) for name in POOL_VAR_NAMES}


def pool_from_dict(d: Mapping[str, Any]) -> PoolState:
    """Deserialize a dict to a PoolState. Raises KeyError on missing fields."""
    kwargs: dict[str, Any] = {}
    for name in POOL_VAR_NAMES:
        val = d[name]
        if name == "owner":
            if not isinstance(val, str):
                raise TypeError("owner must be a string")
            kwargs[name] = val
        elif name == "paused":
            if not isinstance(val, bool):
                raise TypeError("paused must be a bool")
            kwargs[name] = val
        elif isinstance(val, int) and not isinstance(val, bool):
            kwargs[name] = int(val)
        else:
            raise TypeError(f"pool var {name!r} must be int, got {type(val).__name__}")
    return PoolState(**kwargs)


def record_to_dict(record: LiquidityRecord) -> dict[str, int]:
    return {name: getattr(record, name) for name in RECORD_VAR_NAMES}


def record_from_dict(d: Mapping[str, Any]) -> LiquidityRecord:
    kwargs: dict[str, int] = {}
    for name in RECORD_VAR_NAMES:
        val = d[name]
        if not isinstance(val, int) or isinstance(val, bool):
            raise TypeError(f"record var {name!r} must be int, got {type(val).__name__}")
        kwargs[name] = int(val)
    return LiquidityRecord(**kwargs)


def ledger_to_dict(ledger: LedgerState) -> dict[str, Any]:
    return {
        "pool": pool_to_dict(ledger.pool),
        "providers": {
            participant: record_to_dict(record)
            for participant, record in sorted(ledger.providers.items())
        },
    }


def ledger_from_dict(d: Mapping[str, Any]) -> LedgerState:
    providers = d["providers"]
    if not isinstance(providers, Mapping):
        raise TypeError("providers must be a mapping")
    return LedgerState(
        pool=pool_from_dict(d["pool"]),
        providers={str(k): record_from_dict(v) for k, v in providers.items()},
    )
