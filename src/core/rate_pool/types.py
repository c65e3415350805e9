"""Data types for the `rate_pool` ledger engine.

All types are frozen dataclasses (immutable). A transition never mutates a
`LedgerState`; it returns a new one.

Units/conventions:
- balances and provided amounts are raw integer token units,
- `exchange_rate` is scaled by 100 (`100` = parity),
- `fee_percentage` is an integer in `[0, 100]`,
- `share_percentage` is an integer percentage, uncapped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, unique
from typing import Mapping

from .errors import ErrorKind

# Participants and the owner are opaque identity strings supplied by the caller.
Identity = str


@unique
class Action(Enum):
    """One member per public mutating operation."""
    SWAP_A_TO_B = "swap_a_to_b"
    ADD_LIQUIDITY = "add_liquidity"
    UPDATE_EXCHANGE_RATE = "update_exchange_rate"
    UPDATE_FEE = "update_fee"
    TOGGLE_PAUSE = "toggle_pause"


@unique
class Event(Enum):
    """One member per accepted action."""
    SWAPPED = "Swapped"
    LIQUIDITY_ADDED = "LiquidityAdded"
    EXCHANGE_RATE_UPDATED = "ExchangeRateUpdated"
    FEE_UPDATED = "FeeUpdated"
    PAUSE_TOGGLED = "PauseToggled"


@dataclass(frozen=True)
class PoolState:
    """Balances and control parameters of the two-asset pool."""

    owner: Identity
    token_a_balance: int = 0
    token_b_balance: int = 0
    exchange_rate: int = 100
    fee_percentage: int = 0
    paused: bool = False


@dataclass(frozen=True)
class LiquidityRecord:
    """Per-participant contribution record.

    `token_a_provided` / `token_b_provided` hold the latest contribution only;
    `share_percentage` accumulates across contributions.
    """

    token_a_provided: int = 0
    token_b_provided: int = 0
    share_percentage: int = 0


EMPTY_RECORD = LiquidityRecord()


@dataclass(frozen=True)
class LedgerState:
    """Pool state plus the liquidity registry. Treat `providers` as read-only."""

    pool: PoolState
    providers: Mapping[Identity, LiquidityRecord] = field(default_factory=dict)


@dataclass(frozen=True)
class ActionParams:
    """Parameters for an action. Unused fields default to 0."""

    action: Action
    caller: Identity = ""
    amount: int = 0          # swap_a_to_b
    amount_a: int = 0        # add_liquidity
    amount_b: int = 0        # add_liquidity
    new_rate: int = 0        # update_exchange_rate
    new_fee: int = 0         # update_fee

    def __post_init__(self) -> None:
        if not isinstance(self.action, Action):
            raise TypeError(f"action must be an Action, got {type(self.action).__name__}")
        if not isinstance(self.caller, str):
            raise TypeError("caller must be a string")
        for name in ("amount", "amount_a", "amount_b", "new_rate", "new_fee"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")


@dataclass(frozen=True)
class Effect:
    """Post-state observables emitted after a successful step."""

    event: Event
    output_amount: int = 0
    share_delta: int = 0
    token_a_balance_after: int = 0
    token_b_balance_after: int = 0
    exchange_rate_after: int = 0
    fee_percentage_after: int = 0
    paused_after: bool = False


@dataclass(frozen=True)
class StepResult:
    """Result of a single engine step.

    A rejected step carries either a `rejection` kind (failed precondition) or
    a non-empty `violations` tuple (post-state broke an invariant).
    """

    accepted: bool
    state: LedgerState | None = None
    effect: Effect | None = None
    rejection: ErrorKind | None = None
    violations: tuple[str, ...] = ()
