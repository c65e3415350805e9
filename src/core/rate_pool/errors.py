"""Failure kinds and exception types for the rate_pool engine.

`ErrorKind` values are stable numeric codes. `step()` reports them in
`StepResult.rejection`; `step_or_raise()` and the integration shell raise the
matching `RatePoolError` subclass instead.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class ErrorKind(Enum):
    OWNER_ONLY = 1
    INSUFFICIENT_BALANCE = 2
    INVALID_AMOUNT = 3
    POOL_EMPTY = 4
    PAUSED = 5
    INVALID_FEE = 6
    DIVIDE_BY_ZERO = 7
    INTEGER_UNDERFLOW = 8
    INTEGER_OVERFLOW = 9

    @property
    def code(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        """CamelCase name, e.g. ``OwnerOnly``."""
        return "".join(part.capitalize() for part in self.name.split("_"))


class RatePoolError(Exception):
    """Base error for rejected rate_pool operations."""

    kind: ErrorKind

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.kind.label)

    @property
    def code(self) -> int:
        return self.kind.code


class OwnerOnlyError(RatePoolError):
    """Caller is not the pool owner."""

    kind = ErrorKind.OWNER_ONLY


class InsufficientBalanceError(RatePoolError):
    """Swap input exceeds the pool's token A balance."""

    kind = ErrorKind.INSUFFICIENT_BALANCE


class InvalidAmountError(RatePoolError):
    kind = ErrorKind.INVALID_AMOUNT


class PoolEmptyError(RatePoolError):
    """Swap output exceeds the pool's token B balance."""

    kind = ErrorKind.POOL_EMPTY


class PausedError(RatePoolError):
    kind = ErrorKind.PAUSED


class InvalidFeeError(RatePoolError):
    """Fee percentage outside [0, 100]."""

    kind = ErrorKind.INVALID_FEE


class DivideByZeroError(RatePoolError):
    kind = ErrorKind.DIVIDE_BY_ZERO


class IntegerUnderflowError(RatePoolError):
    kind = ErrorKind.INTEGER_UNDERFLOW


class IntegerOverflowError(RatePoolError):
    kind = ErrorKind.INTEGER_OVERFLOW


ERROR_TYPES: dict[ErrorKind, type[RatePoolError]] = {
    cls.kind: cls
    for cls in (
        OwnerOnlyError,
        InsufficientBalanceError,
        InvalidAmountError,
        PoolEmptyError,
        PausedError,
        InvalidFeeError,
        DivideByZeroError,
        IntegerUnderflowError,
        IntegerOverflowError,
    )
}


def error_for_kind(kind: ErrorKind, message: str | None = None) -> RatePoolError:
    """Build the exception instance matching *kind*."""
    return ERROR_TYPES[kind](message)


class RatePoolInvariantError(Exception):
    """Raised when a post-state violates one or more invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")
