"""`rate_pool`: pure-Python functional core of the two-asset rate pool ledger.

- deterministic, integer-only transitions,
- immutable state (frozen dataclasses),
- ordered guards (first failing precondition wins) and post-state invariants.

Pricing is linear: output = (amount * rate - amount * fee) // 100, with
`rate == 100` meaning parity. Only the A -> B swap direction exists.

Public API:
- `initial_state(owner, ...) -> LedgerState`
- `step(state, params) -> StepResult`
- `step_or_raise(state, params) -> StepResult` (raises on rejection)
- `compute_swap_output(amount, fee_percentage, exchange_rate) -> int`
"""

from .engine import raise_for_rejection, step, step_or_raise
from .errors import (
    DivideByZeroError,
    ErrorKind,
    InsufficientBalanceError,
    IntegerOverflowError,
    IntegerUnderflowError,
    InvalidAmountError,
    InvalidFeeError,
    OwnerOnlyError,
    PausedError,
    PoolEmptyError,
    RatePoolError,
    RatePoolInvariantError,
)
from .math import MAX_UINT, compute_swap_output, liquidity_share_delta
from .registry import get_provider_info
from .state import initial_state, ledger_from_dict, ledger_to_dict
from .types import (
    Action,
    ActionParams,
    Effect,
    Event,
    LedgerState,
    LiquidityRecord,
    PoolState,
    StepResult,
)

__all__ = [
    "step",
    "step_or_raise",
    "raise_for_rejection",
    "initial_state",
    "ledger_from_dict",
    "ledger_to_dict",
    "compute_swap_output",
    "liquidity_share_delta",
    "get_provider_info",
    "MAX_UINT",
    "Action",
    "ActionParams",
    "Effect",
    "Event",
    "LedgerState",
    "LiquidityRecord",
    "PoolState",
    "StepResult",
    "ErrorKind",
    "RatePoolError",
    "RatePoolInvariantError",
    "OwnerOnlyError",
    "InsufficientBalanceError",
    "InvalidAmountError",
    "PoolEmptyError",
    "PausedError",
    "InvalidFeeError",
    "DivideByZeroError",
    "IntegerUnderflowError",
    "IntegerOverflowError",
]
