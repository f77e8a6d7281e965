"""Pool ratio arithmetic.

The balance is scaled up before any division so that small pools relative
to a large supply do not truncate to zero.
"""
from __future__ import annotations

from .errors import DivideByZero
from .fixed_point import EXTRA_PRECISION, MAX_UINT256, RATIO_PRECISION, checked_div, checked_mul, mul_div
from .models import Direction, RatioReading


def calculate_ratio(balance: int, total_supply: int, target_ratio: int) -> RatioReading:
    """Return the pool ratio relative to ``target_ratio`` and the direction to move.

    ``current_ratio == EXTRA_PRECISION`` means the pool sits exactly on target.
    """
    if total_supply == 0:
        raise DivideByZero("token total supply is zero")

    if target_ratio == 0:
        # Any holding is infinitely above a zero target
        current_ratio = MAX_UINT256 if balance > 0 else EXTRA_PRECISION
    else:
        scaled = checked_div(checked_mul(balance, EXTRA_PRECISION * RATIO_PRECISION), total_supply)
        current_ratio = checked_div(scaled, target_ratio)

    direction = Direction.BURN if current_ratio > EXTRA_PRECISION else Direction.MINT
    return RatioReading(current_ratio=current_ratio, direction=direction)


def pool_ratio(balance: int, total_supply: int) -> int:
    """Plain ``balance / total_supply`` scaled by RATIO_PRECISION."""
    return mul_div(balance, RATIO_PRECISION, total_supply)


def target_amount(total_supply: int, target_ratio: int) -> int:
    return mul_div(total_supply, target_ratio, RATIO_PRECISION)
