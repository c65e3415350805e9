"""
Rate pool execution adapter.

This is an imperative-shell wrapper around the functional core in
`src/core/rate_pool`:
- Holds the single committed `LedgerState` for one pool.
- Serializes every public operation (reads included) behind one lock, so the
  guard -> update -> invariant -> commit sequence is a single critical section.
- Commits only accepted steps; a rejected operation raises the matching
  `RatePoolError` and leaves the committed state exactly as it was.
- Takes caller identity as an explicit argument, supplied by whatever
  authenticated the transaction. Identity is never inferred here.

No custody transfer happens: swaps and contributions only move the pool's
internal counters.
"""

from __future__ import annotations

import threading
from typing import Any, Mapping

import structlog

from ..core.rate_pool.engine import raise_for_rejection, step
from ..core.rate_pool.registry import get_provider_info, total_share_percentage
from ..core.rate_pool.state import initial_state, read_balances, read_rate
from ..core.rate_pool.types import Action, ActionParams, Effect, LedgerState, LiquidityRecord
from .rate_pool_config import RatePoolConfig
from .rate_pool_snapshot import RatePoolSnapshot, snapshot_from_state, state_from_snapshot

logger = structlog.get_logger()


def _require_identity(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    if not value:
        raise ValueError(f"{name} must be non-empty")
    if any(0xD800 <= ord(ch) <= 0xDFFF for ch in value):
        raise ValueError(f"{name} must not contain surrogate code points")
    return value


class RatePoolEngine:
    """One rate pool and its liquidity registry, safe to share across threads."""

    def __init__(self, state: LedgerState) -> None:
        if not isinstance(state, LedgerState):
            raise TypeError("state must be a LedgerState")
        self._state = state
        self._lock = threading.Lock()
        logger.info(
            "rate_pool_engine_created",
            owner=state.pool.owner,
            token_a_balance=state.pool.token_a_balance,
            token_b_balance=state.pool.token_b_balance,
            exchange_rate=state.pool.exchange_rate,
            fee_percentage=state.pool.fee_percentage,
            paused=state.pool.paused,
            providers=len(state.providers),
        )

    @classmethod
    def create(cls, owner: str, **pool_fields: Any) -> RatePoolEngine:
        return cls(initial_state(_require_identity(owner, name="owner"), **pool_fields))

    @classmethod
    def from_config(cls, config: RatePoolConfig) -> RatePoolEngine:
        return cls(
            initial_state(
                _require_identity(config.owner, name="owner"),
                token_a_balance=config.token_a_balance,
                token_b_balance=config.token_b_balance,
                exchange_rate=config.exchange_rate,
                fee_percentage=config.fee_percentage,
                paused=config.paused,
            )
        )

    @classmethod
    def from_snapshot(cls, snapshot: Mapping[str, Any]) -> RatePoolEngine:
        return cls(state_from_snapshot(snapshot))

    # -- Reads ---------------------------------------------------------------

    @property
    def owner(self) -> str:
        return self._state.pool.owner

    @property
    def state(self) -> LedgerState:
        with self._lock:
            return self._state

    def snapshot(self) -> RatePoolSnapshot:
        with self._lock:
            return snapshot_from_state(self._state)

    def get_balances(self) -> tuple[int, int]:
        with self._lock:
            return read_balances(self._state.pool)

    def get_exchange_rate(self) -> int:
        with self._lock:
            return read_rate(self._state.pool)

    def get_fee_percentage(self) -> int:
        with self._lock:
            return self._state.pool.fee_percentage

    def is_paused(self) -> bool:
        with self._lock:
            return self._state.pool.paused

    def get_provider_info(self, participant: str) -> LiquidityRecord:
        """Record for *participant*, zeroed if they never contributed."""
        with self._lock:
            return get_provider_info(self._state.providers, participant)

    # -- Mutations -----------------------------------------------------------

    def swap_a_to_b(self, caller: str | None, amount: int) -> int:
        """Swap *amount* of token A into the pool; returns the token B output.

        Swaps are open to anyone. *caller* only labels the log lines and may be
        None when the invoking environment has no identity to report.
        """
        params = ActionParams(
            action=Action.SWAP_A_TO_B,
            caller="" if caller is None else _require_identity(caller, name="caller"),
            amount=amount,
        )
        effect = self._execute(params)
        logger.info(
            "swap_executed",
            caller=caller,
            amount_in=amount,
            amount_out=effect.output_amount,
            token_a_balance=effect.token_a_balance_after,
            token_b_balance=effect.token_b_balance_after,
        )
        return effect.output_amount

    def add_liquidity(self, caller: str, amount_a: int, amount_b: int) -> bool:
        params = ActionParams(
            action=Action.ADD_LIQUIDITY,
            caller=_require_identity(caller, name="caller"),
            amount_a=amount_a,
            amount_b=amount_b,
        )
        with self._lock:
            effect = self._execute_locked(params)
            total_share = total_share_percentage(self._state.providers)
        logger.info(
            "liquidity_added",
            caller=caller,
            amount_a=amount_a,
            amount_b=amount_b,
            share_delta=effect.share_delta,
            total_share=total_share,
        )
        return True

    def update_exchange_rate(self, caller: str, new_rate: int) -> bool:
        effect = self._execute(
            ActionParams(
                action=Action.UPDATE_EXCHANGE_RATE,
                caller=_require_identity(caller, name="caller"),
                new_rate=new_rate,
            )
        )
        logger.info("exchange_rate_updated", caller=caller, exchange_rate=effect.exchange_rate_after)
        if effect.exchange_rate_after == 0:
            logger.warning("exchange_rate_zero", caller=caller)
        return True

    def update_fee(self, caller: str, new_fee: int) -> bool:
        effect = self._execute(
            ActionParams(action=Action.UPDATE_FEE, caller=_require_identity(caller, name="caller"), new_fee=new_fee)
        )
        logger.info("fee_updated", caller=caller, fee_percentage=effect.fee_percentage_after)
        return True

    def toggle_pause(self, caller: str) -> bool:
        effect = self._execute(
            ActionParams(action=Action.TOGGLE_PAUSE, caller=_require_identity(caller, name="caller"))
        )
        logger.info("pause_toggled", caller=caller, paused=effect.paused_after)
        return True

    # -- Internals -----------------------------------------------------------

    def _execute(self, params: ActionParams) -> Effect:
        with self._lock:
            return self._execute_locked(params)

    def _execute_locked(self, params: ActionParams) -> Effect:
        result = step(self._state, params)
        if not result.accepted:
            logger.warning(
                "rate_pool_operation_rejected",
                action=params.action.value,
                caller=params.caller,
                kind=result.rejection.label if result.rejection is not None else None,
                code=result.rejection.code if result.rejection is not None else None,
                violations=list(result.violations),
            )
            raise_for_rejection(result)
        if result.state is None or result.effect is None:
            raise RuntimeError(f"accepted {params.action.value} step produced no state/effect")
        self._state = result.state
        return result.effect
