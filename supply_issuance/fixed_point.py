"""Integer fixed-point helpers.

Every amount and ratio handled by the controller is a plain ``int``. Values
are kept inside the unsigned 256-bit range of the ledgers the controller
talks to, and every division floors.
"""
from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation

from .errors import ArithmeticOverflow, ConfigValidationError, DivideByZero

RATIO_PRECISION = 10**18
EXTRA_PRECISION = 10**18
TOKEN_DECIMALS = 18
SECONDS_IN_YEAR = 31_536_000
ONE_DAY = 86_400
MAX_UINT256 = 2**256 - 1


def _bounded(value: int) -> int:
    if value < 0 or value > MAX_UINT256:
        raise ArithmeticOverflow(f"value {value} outside uint256 range")
    return value


def checked_add(a: int, b: int) -> int:
    return _bounded(a + b)


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise ArithmeticOverflow(f"subtraction underflow: {a} - {b}")
    return a - b


def checked_mul(a: int, b: int) -> int:
    return _bounded(a * b)


def checked_div(a: int, b: int) -> int:
    if b == 0:
        raise DivideByZero(f"division of {a} by zero")
    return a // b


def mul_div(a: int, b: int, denominator: int) -> int:
    """``a * b // denominator`` with the product overflow-checked first."""
    return checked_div(checked_mul(a, b), denominator)


def isqrt(value: int) -> int:
    return math.isqrt(_bounded(value))


def to_fixed(value: str | int | Decimal, precision: int = RATIO_PRECISION) -> int:
    """Convert a human-readable decimal (``"0.2"``) into a scaled integer."""
    try:
        number = Decimal(str(value))
    except InvalidOperation as exc:
        raise ConfigValidationError(f"'{value}' is not a decimal number") from exc
    if not number.is_finite():
        raise ConfigValidationError(f"'{value}' must be a finite number")
    scaled = number * precision
    if scaled < 0:
        raise ConfigValidationError(f"'{value}' must not be negative")
    return _bounded(int(scaled))


def from_fixed(amount: int, precision: int = RATIO_PRECISION) -> Decimal:
    return Decimal(amount) / Decimal(precision)
