"""Guard functions for `rate_pool`.

One pure function per action. Each evaluates the action's preconditions
against the PRE-state in a fixed order and returns the first failing
`ErrorKind`, or None when the action is allowed. Guards never modify state.

Arithmetic the update will perform is dry-run here, so every overflow,
underflow and division failure is reported before any update is applied.
"""

from __future__ import annotations

from .errors import ErrorKind, RatePoolError
from .math import (
    MAX_FEE_PERCENTAGE,
    MAX_UINT,
    checked_add,
    checked_sub,
    compute_swap_output,
    liquidity_share_delta,
)
from .registry import get_provider_info
from .types import ActionParams, LedgerState


def guard_swap_a_to_b(state: LedgerState, params: ActionParams) -> ErrorKind | None:
    pool = state.pool
    if pool.paused:
        return ErrorKind.PAUSED
    if params.amount <= 0:
        return ErrorKind.INVALID_AMOUNT
    if params.amount > pool.token_a_balance:
        return ErrorKind.INSUFFICIENT_BALANCE
    try:
        output = compute_swap_output(params.amount, pool.fee_percentage, pool.exchange_rate)
    except RatePoolError as exc:
        return exc.kind
    if output > pool.token_b_balance:
        return ErrorKind.POOL_EMPTY
    try:
        checked_add(pool.token_a_balance, params.amount)
        checked_sub(pool.token_b_balance, output)
    except RatePoolError as exc:
        return exc.kind
    return None


def guard_add_liquidity(state: LedgerState, params: ActionParams) -> ErrorKind | None:
    pool = state.pool
    if pool.paused:
        return ErrorKind.PAUSED
    if params.amount_a <= 0 or params.amount_b <= 0:
        return ErrorKind.INVALID_AMOUNT
    current = get_provider_info(state.providers, params.caller)
    try:
        total_liquidity = checked_add(pool.token_a_balance, pool.token_b_balance)
        delta = liquidity_share_delta(params.amount_a, total_liquidity)
        checked_add(current.share_percentage, delta)
        checked_add(pool.token_a_balance, params.amount_a)
        checked_add(pool.token_b_balance, params.amount_b)
    except RatePoolError as exc:
        return exc.kind
    return None


def _owner_only(state: LedgerState, params: ActionParams) -> ErrorKind | None:
    if params.caller != state.pool.owner:
        return ErrorKind.OWNER_ONLY
    return None


def guard_update_exchange_rate(state: LedgerState, params: ActionParams) -> ErrorKind | None:
    denied = _owner_only(state, params)
    if denied is not None:
        return denied
    # new_rate is a uint; zero is accepted.
    if params.new_rate < 0:
        return ErrorKind.INVALID_AMOUNT
    if params.new_rate > MAX_UINT:
        return ErrorKind.INTEGER_OVERFLOW
    return None


def guard_update_fee(state: LedgerState, params: ActionParams) -> ErrorKind | None:
    denied = _owner_only(state, params)
    if denied is not None:
        return denied
    if not 0 <= params.new_fee <= MAX_FEE_PERCENTAGE:
        return ErrorKind.INVALID_FEE
    return None


def guard_toggle_pause(state: LedgerState, params: ActionParams) -> ErrorKind | None:
    return _owner_only(state, params)
