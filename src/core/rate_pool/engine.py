"""Dispatch-table engine for `rate_pool`.

``step(state, params)`` is the single entry point. It:

1. Dispatches to the correct guard / update / effect functions.
2. Runs the guard against the pre-state; the first failing precondition wins.
3. Applies the update and checks all invariants on the post-state.
4. Returns a ``StepResult`` (accepted, or rejected with an ``ErrorKind`` or
   a list of violated invariants).

A rejected step returns no state, so the caller's pre-state is the state.
"""

from __future__ import annotations

from typing import Callable

from .effects import (
    effect_add_liquidity,
    effect_swap_a_to_b,
    effect_toggle_pause,
    effect_update_exchange_rate,
    effect_update_fee,
)
from .errors import ErrorKind, RatePoolInvariantError, error_for_kind
from .guards import (
    guard_add_liquidity,
    guard_swap_a_to_b,
    guard_toggle_pause,
    guard_update_exchange_rate,
    guard_update_fee,
)
from .invariants import check_all
from .types import Action, ActionParams, Effect, LedgerState, StepResult
from .updates import (
    apply_add_liquidity,
    apply_swap_a_to_b,
    apply_toggle_pause,
    apply_update_exchange_rate,
    apply_update_fee,
)

GuardFn = Callable[[LedgerState, ActionParams], ErrorKind | None]
UpdateFn = Callable[[LedgerState, ActionParams], LedgerState]
EffectFn = Callable[[LedgerState, LedgerState, ActionParams], Effect]

_DISPATCH: dict[Action, tuple[GuardFn, UpdateFn, EffectFn]] = {
    Action.SWAP_A_TO_B: (
        guard_swap_a_to_b, apply_swap_a_to_b, effect_swap_a_to_b,
    ),
    Action.ADD_LIQUIDITY: (
        guard_add_liquidity, apply_add_liquidity, effect_add_liquidity,
    ),
    Action.UPDATE_EXCHANGE_RATE: (
        guard_update_exchange_rate, apply_update_exchange_rate, effect_update_exchange_rate,
    ),
    Action.UPDATE_FEE: (
        guard_update_fee, apply_update_fee, effect_update_fee,
    ),
    Action.TOGGLE_PAUSE: (
        guard_toggle_pause, apply_toggle_pause, effect_toggle_pause,
    ),
}


def step(state: LedgerState, params: ActionParams) -> StepResult:
    """Execute one action against the given state.

    Returns ``StepResult`` with ``accepted=True`` on success,
    or ``accepted=False`` with a ``rejection`` kind or ``violations``.
    """
    guard_fn, update_fn, effect_fn = _DISPATCH[params.action]

    rejection = guard_fn(state, params)
    if rejection is not None:
        return StepResult(accepted=False, rejection=rejection)

    new_state = update_fn(state, params)

    violations = check_all(new_state)
    if violations:
        return StepResult(accepted=False, violations=tuple(violations))

    effect = effect_fn(state, new_state, params)
    return StepResult(accepted=True, state=new_state, effect=effect)


def raise_for_rejection(result: StepResult) -> None:
    """Raise the exception matching a rejected ``StepResult``; no-op if accepted.

    Raises:
        RatePoolError: The subclass for ``result.rejection`` (e.g. PausedError).
        RatePoolInvariantError: Post-state violated one or more invariants.
    """
    if result.accepted:
        return
    if result.rejection is not None:
        raise error_for_kind(result.rejection)
    raise RatePoolInvariantError(list(result.violations))


def step_or_raise(state: LedgerState, params: ActionParams) -> StepResult:
    """Like ``step()`` but raises on rejection instead of returning a result."""
    result = step(state, params)
    raise_for_rejection(result)
    return result
