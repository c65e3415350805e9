"""
Core rate pool algorithms
"""

from .rate_pool import (
    ActionParams,
    LedgerState,
    StepResult,
    compute_swap_output,
    initial_state,
    step,
    step_or_raise,
)

__all__ = [
    "ActionParams",
    "LedgerState",
    "StepResult",
    "compute_swap_output",
    "initial_state",
    "step",
    "step_or_raise",
]
