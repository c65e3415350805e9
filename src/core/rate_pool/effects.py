"""Effect functions for the rate_pool engine.

One pure function per action. Each computes the ``Effect`` from the PRE- and
POST-state of an accepted step; amounts are derived from the balance deltas.
"""

from __future__ import annotations

from .registry import get_provider_info
from .types import ActionParams, Effect, Event, LedgerState


def _common_effects(post: LedgerState) -> dict[str, bool | int]:
    pool = post.pool
    return dict(
        token_a_balance_after=pool.token_a_balance,
        token_b_balance_after=pool.token_b_balance,
        exchange_rate_after=pool.exchange_rate,
        fee_percentage_after=pool.fee_percentage,
        paused_after=pool.paused,
    )


def effect_swap_a_to_b(pre: LedgerState, post: LedgerState, params: ActionParams) -> Effect:
    output = pre.pool.token_b_balance - post.pool.token_b_balance
    return Effect(event=Event.SWAPPED, output_amount=output, **_common_effects(post))


def effect_add_liquidity(pre: LedgerState, post: LedgerState, params: ActionParams) -> Effect:
    before = get_provider_info(pre.providers, params.caller).share_percentage
    after = get_provider_info(post.providers, params.caller).share_percentage
    return Effect(event=Event.LIQUIDITY_ADDED, share_delta=after - before, **_common_effects(post))


def effect_update_exchange_rate(pre: LedgerState, post: LedgerState, params: ActionParams) -> Effect:
    return Effect(event=Event.EXCHANGE_RATE_UPDATED, **_common_effects(post))


def effect_update_fee(pre: LedgerState, post: LedgerState, params: ActionParams) -> Effect:
    return Effect(event=Event.FEE_UPDATED, **_common_effects(post))


def effect_toggle_pause(pre: LedgerState, post: LedgerState, params: ActionParams) -> Effect:
    return Effect(event=Event.PAUSE_TOGGLED, **_common_effects(post))
