"""
Rate pool ledger snapshot encoding.

Goals:
- Deterministic JSON serialization for hashing / persistence.
- Round-trippable into the functional-core `LedgerState` types.
- Explicit versioning for future formats.

Layout (version 1): one pool record plus the provider table sorted by
participant, each row carrying the three `LiquidityRecord` fields.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from ..core.rate_pool.invariants import check_all
from ..core.rate_pool.math import MAX_UINT
from ..core.rate_pool.state import pool_from_dict, pool_to_dict
from ..core.rate_pool.types import LedgerState, LiquidityRecord


RATE_POOL_SNAPSHOT_VERSION = 1


def canonical_json_bytes(value: Any) -> bytes:
    """
    Canonical JSON encoding for hashing.

    Rules: UTF-8, sorted keys, no whitespace, NaN/floats and surrogate code
    points rejected.
    """
    _reject_floats(value)
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def _reject_surrogates(s: str) -> None:
    for ch in s:
        if 0xD800 <= ord(ch) <= 0xDFFF:
            raise TypeError("surrogate code points are not allowed in canonical encoding")


def _reject_floats(value: Any) -> None:
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, str):
        _reject_surrogates(value)
    if isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
            _reject_surrogates(k)
            _reject_floats(v)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _reject_floats(item)


def domain_sep_bytes(label: str, version: int = 1) -> bytes:
    """ASCII, NUL-terminated prefix that keeps hash domains apart."""
    if not label or "\x00" in label or not label.isascii():
        raise ValueError("label must be a non-empty ASCII string without NUL")
    return b"ratepool:" + label.encode("ascii") + b":v" + str(version).encode("ascii") + b"\x00"


def _require_str(value: Any, *, name: str, max_len: int) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    _reject_surrogates(value)
    if not value:
        raise ValueError(f"{name} must be non-empty")
    if len(value) > max_len:
        raise ValueError(f"{name} too large")
    return value


def _require_uint(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if not (0 <= value <= MAX_UINT):
        raise ValueError(f"{name} must be a uint")
    return int(value)


@dataclass(frozen=True)
class RatePoolSnapshot:
    """
    Deterministic, versioned snapshot of a `LedgerState`.

    The commitment is *not* included inside `data` to avoid self-reference.
    """

    version: int
    data: Dict[str, Any]

    def canonical_bytes(self) -> bytes:
        return canonical_json_bytes(self.data)

    def commitment_bytes(self) -> bytes:
        payload = domain_sep_bytes("rate_pool_snapshot", version=self.version) + self.canonical_bytes()
        return hashlib.sha256(payload).digest()

    def commitment_hex(self) -> str:
        return "0x" + self.commitment_bytes().hex()


def snapshot_from_state(state: LedgerState, *, version: int = RATE_POOL_SNAPSHOT_VERSION) -> RatePoolSnapshot:
    if version != RATE_POOL_SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {version}")

    providers = [
        {
            "participant": participant,
            "token_a_provided": int(record.token_a_provided),
            "token_b_provided": int(record.token_b_provided),
            "share_percentage": int(record.share_percentage),
        }
        for participant, record in state.providers.items()
    ]
    providers.sort(key=lambda e: e["participant"])

    data: Dict[str, Any] = {
        "version": int(version),
        "pool": pool_to_dict(state.pool),
        "providers": providers,
    }
    return RatePoolSnapshot(version=version, data=data)


def state_from_snapshot(
    snapshot: Mapping[str, Any],
    *,
    max_providers: int = 200_000,
    max_str_len: int = 512,
) -> LedgerState:
    """Rebuild a `LedgerState` from snapshot data, validating every field."""
    if not isinstance(snapshot, Mapping):
        raise TypeError("snapshot must be a mapping")

    version = snapshot.get("version", RATE_POOL_SNAPSHOT_VERSION)
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("snapshot.version must be a positive int")
    if version != RATE_POOL_SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {version}")

    pool_obj = snapshot.get("pool")
    if not isinstance(pool_obj, Mapping):
        raise TypeError("snapshot.pool must be an object")
    try:
        pool = pool_from_dict(pool_obj)
    except KeyError as exc:
        raise ValueError(f"snapshot.pool missing field: {exc.args[0]}") from exc
    _require_str(pool.owner, name="pool.owner", max_len=max_str_len)
    for name in ("token_a_balance", "token_b_balance", "exchange_rate", "fee_percentage"):
        _require_uint(getattr(pool, name), name=f"pool.{name}")

    entries = snapshot.get("providers")
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise TypeError("snapshot.providers must be a list")
    if len(entries) > max_providers:
        raise ValueError(f"too many provider entries: {len(entries)} > {max_providers}")

    providers: Dict[str, LiquidityRecord] = {}
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise TypeError("snapshot.providers entries must be objects")
        participant = _require_str(entry.get("participant"), name="provider.participant", max_len=max_str_len)
        if participant in providers:
            raise ValueError(f"duplicate provider entry: {participant}")
        providers[participant] = LiquidityRecord(
            token_a_provided=_require_uint(entry.get("token_a_provided"), name="provider.token_a_provided"),
            token_b_provided=_require_uint(entry.get("token_b_provided"), name="provider.token_b_provided"),
            share_percentage=_require_uint(entry.get("share_percentage"), name="provider.share_percentage"),
        )

    state = LedgerState(pool=pool, providers=providers)
    violations = check_all(state)
    if violations:
        raise ValueError(f"snapshot violates invariants: {', '.join(violations)}")
    return state
