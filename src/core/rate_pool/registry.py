"""Liquidity registry: participant -> `LiquidityRecord`.

The registry is a plain mapping inside `LedgerState`. Lookups never insert;
`record_contribution` returns a new mapping and leaves the input untouched.
Records are never deleted.
"""

from __future__ import annotations

from typing import Mapping

from .math import checked_add
from .types import EMPTY_RECORD, Identity, LiquidityRecord


def get_provider_info(
    providers: Mapping[Identity, LiquidityRecord], participant: Identity,
) -> LiquidityRecord:
    """Return the participant's record, or a zeroed record if absent."""
    return providers.get(participant, EMPTY_RECORD)


def record_contribution(
    providers: Mapping[Identity, LiquidityRecord],
    participant: Identity,
    amount_a: int,
    amount_b: int,
    share_delta: int,
) -> dict[Identity, LiquidityRecord]:
    """Return a registry with *participant*'s latest contribution recorded.

    Provided amounts are overwritten with this contribution; the share adds to
    whatever the participant already holds.
    """
    current = get_provider_info(providers, participant)
    updated = dict(providers)
    updated[participant] = LiquidityRecord(
        token_a_provided=amount_a,
        token_b_provided=amount_b,
        share_percentage=checked_add(current.share_percentage, share_delta),
    )
    return updated


def total_share_percentage(providers: Mapping[Identity, LiquidityRecord]) -> int:
    """Sum of all participants' shares. Not capped at 100."""
    return sum(record.share_percentage for record in providers.values())
