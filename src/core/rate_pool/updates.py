"""State transition functions for `rate_pool`.

One pure function per action. Each returns a new `LedgerState` with the
action's updates applied.

Semantics:
- updates evaluate against the PRE-state,
- the matching guard has already accepted the action, so checked arithmetic
  here cannot fail on a guarded call,
- updates are built with `dataclasses.replace()` on frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import replace

from .math import checked_add, checked_sub, compute_swap_output, liquidity_share_delta
from .registry import record_contribution
from .state import set_fee, set_rate, toggle_pause
from .types import ActionParams, LedgerState


def apply_swap_a_to_b(state: LedgerState, params: ActionParams) -> LedgerState:
    pool = state.pool
    output = compute_swap_output(params.amount, pool.fee_percentage, pool.exchange_rate)
    return replace(
        state,
        pool=replace(
            pool,
            token_a_balance=checked_add(pool.token_a_balance, params.amount),
            token_b_balance=checked_sub(pool.token_b_balance, output),
        ),
    )


def apply_add_liquidity(state: LedgerState, params: ActionParams) -> LedgerState:
    pool = state.pool
    # Denominator is the liquidity before this contribution lands.
    total_liquidity = checked_add(pool.token_a_balance, pool.token_b_balance)
    delta = liquidity_share_delta(params.amount_a, total_liquidity)
    providers = record_contribution(
        state.providers, params.caller, params.amount_a, params.amount_b, delta,
    )
    return LedgerState(
        pool=replace(
            pool,
            token_a_balance=checked_add(pool.token_a_balance, params.amount_a),
            token_b_balance=checked_add(pool.token_b_balance, params.amount_b),
        ),
        providers=providers,
    )


def apply_update_exchange_rate(state: LedgerState, params: ActionParams) -> LedgerState:
    return replace(state, pool=set_rate(state.pool, params.new_rate))


def apply_update_fee(state: LedgerState, params: ActionParams) -> LedgerState:
    return replace(state, pool=set_fee(state.pool, params.new_fee))


def apply_toggle_pause(state: LedgerState, params: ActionParams) -> LedgerState:
    return replace(state, pool=toggle_pause(state.pool))
