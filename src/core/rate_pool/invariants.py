"""Invariant checkers for `rate_pool`.

Each function returns True when the invariant holds, and `check_all()` returns
the list of violated invariant IDs (empty = all pass).

Share percentages are deliberately not bounded: accumulation past 100, per
participant or in aggregate, is allowed.
"""

from __future__ import annotations

from typing import Callable

from .math import MAX_FEE_PERCENTAGE, MAX_UINT
from .types import LedgerState


def inv_balances_non_negative(s: LedgerState) -> bool:
    return s.pool.token_a_balance >= 0 and s.pool.token_b_balance >= 0


def inv_balances_bounded(s: LedgerState) -> bool:
    return s.pool.token_a_balance <= MAX_UINT and s.pool.token_b_balance <= MAX_UINT


def inv_fee_in_range(s: LedgerState) -> bool:
    return 0 <= s.pool.fee_percentage <= MAX_FEE_PERCENTAGE


def inv_rate_in_uint_range(s: LedgerState) -> bool:
    return 0 <= s.pool.exchange_rate <= MAX_UINT


def inv_owner_set(s: LedgerState) -> bool:
    return isinstance(s.pool.owner, str) and bool(s.pool.owner)


def inv_provider_records_non_negative(s: LedgerState) -> bool:
    return all(
        r.token_a_provided >= 0 and r.token_b_provided >= 0 and r.share_percentage >= 0
        for r in s.providers.values()
    )


# ---------------------------------------------------------------------------
# Registry + check_all
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: dict[str, Callable[[LedgerState], bool]] = {
    "inv_balances_non_negative": inv_balances_non_negative,
    "inv_balances_bounded": inv_balances_bounded,
    "inv_fee_in_range": inv_fee_in_range,
    "inv_rate_in_uint_range": inv_rate_in_uint_range,
    "inv_owner_set": inv_owner_set,
    "inv_provider_records_non_negative": inv_provider_records_non_negative,
}


def check_all(state: LedgerState) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(state)
    ]
