"""Pure arithmetic for the `rate_pool` ledger engine.

Every function is stateless and operates on plain Python ints bounded to the
unsigned range `[0, MAX_UINT]`. Results that would leave that range raise
instead of wrapping.

All operands are non-negative, so Python's `//` (floor) coincides with
truncation toward zero.
"""

from __future__ import annotations

from .errors import DivideByZeroError, IntegerOverflowError, IntegerUnderflowError

MAX_UINT: int = (1 << 256) - 1
RATE_SCALE: int = 100  # exchange_rate == RATE_SCALE is parity
SHARE_SCALE: int = 100
MAX_FEE_PERCENTAGE: int = 100


# -- Checked uint helpers ----------------------------------------------------

def checked_add(a: int, b: int) -> int:
    total = a + b
    if total > MAX_UINT:
        raise IntegerOverflowError(f"{a} + {b} exceeds uint range")
    return total


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise IntegerUnderflowError(f"{a} - {b} underflows")
    return a - b


def checked_mul(a: int, b: int) -> int:
    product = a * b
    if product > MAX_UINT:
        raise IntegerOverflowError(f"{a} * {b} exceeds uint range")
    return product


def checked_div(a: int, b: int) -> int:
    if b == 0:
        raise DivideByZeroError(f"{a} / 0")
    return a // b


# -- Pricing -----------------------------------------------------------------

def compute_swap_output(input_amount: int, fee_percentage: int, exchange_rate: int) -> int:
    """Token B paid out for *input_amount* of token A.

    ``(input * rate - input * fee) // 100``. The fee is subtracted before the
    single division, so it is charged in raw input units rather than as a
    percentage of the converted value.

    Raises:
        IntegerUnderflowError: ``input * fee > input * rate``.
        IntegerOverflowError: an intermediate product leaves the uint range.
    """
    fee = checked_mul(input_amount, fee_percentage)
    base = checked_mul(input_amount, exchange_rate)
    return checked_sub(base, fee) // RATE_SCALE


# -- Liquidity shares --------------------------------------------------------

def liquidity_share_delta(amount_a: int, total_liquidity: int) -> int:
    """Share percentage credited for a contribution of *amount_a*.

    *total_liquidity* is the pool's A+B total before the contribution. Only the
    token A leg counts toward the share. An empty pool is reported as a
    division by zero before the multiply can overflow.
    """
    if total_liquidity == 0:
        raise DivideByZeroError(f"{amount_a} * {SHARE_SCALE} / 0")
    return checked_div(checked_mul(amount_a, SHARE_SCALE), total_liquidity)
