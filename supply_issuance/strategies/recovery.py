"""Closed-form recovery-time convergence.

The pool ratio follows a parabola in time that reaches the target ratio,
with zero slope, no later than ``recovery_time`` seconds after starting
from the worst possible ratio. Past the vertex the ratio is pinned to the
target, so repeated calls cannot oscillate around it.

Burning from the pool also shrinks the supply (and minting grows it), so
the amount that produces the new ratio ``r'`` is ``(B - r'S) / (1 - r')``.
"""
from __future__ import annotations

from ..fixed_point import RATIO_PRECISION, isqrt
from ..models import AdjustmentContext, Direction
from ..ratio import pool_ratio, target_amount
from .base import ConvergenceStrategy, register_strategy


def _burn_ratio(ratio: int, target: int, elapsed: int, recovery_time: int) -> int:
    gap = max(ratio - target, 0)
    headroom = RATIO_PRECISION - target
    period_sq = recovery_time * recovery_time
    if headroom * elapsed * elapsed >= gap * period_sq:
        return target
    shared = isqrt(headroom * gap)
    numerator = ratio * period_sq + headroom * elapsed * elapsed - 2 * elapsed * recovery_time * shared
    return max(numerator // period_sq, target)


def _mint_ratio(ratio: int, target: int, elapsed: int, recovery_time: int) -> int:
    gap = max(target - ratio, 0)
    period_sq = recovery_time * recovery_time
    if target * elapsed * elapsed >= gap * period_sq:
        return target
    shared = isqrt(target * gap)
    numerator = ratio * period_sq + 2 * elapsed * recovery_time * shared - target * elapsed * elapsed
    return min(numerator // period_sq, target)


class RecoveryTimeStrategy(ConvergenceStrategy):
    """Quadratic trajectory that settles on the target within the recovery time."""

    name = "recovery_time"
    description = "Closed-form convergence reaching the target within recovery_time"

    def compute_adjustment(self, context: AdjustmentContext) -> int:
        elapsed = context.elapsed_seconds
        if elapsed == 0:
            return 0

        snapshot = context.snapshot
        balance = snapshot.common_pool_balance
        supply = snapshot.token_total_supply
        target = self.config.target_ratio
        ratio = pool_ratio(balance, supply)
        recovery_time = self.config.recovery_time

        if context.reading.direction is Direction.BURN:
            if target == RATIO_PRECISION:
                return 0
            new_ratio = _burn_ratio(ratio, target, elapsed, recovery_time)
            if new_ratio >= RATIO_PRECISION:
                return 0
            burned = (balance * RATIO_PRECISION - new_ratio * supply) // (RATIO_PRECISION - new_ratio)
            return -max(burned, 0)

        new_ratio = _mint_ratio(ratio, target, elapsed, recovery_time)
        if new_ratio >= RATIO_PRECISION:
            # A full-supply target is only approached, never reached, by minting
            return max(target_amount(supply, target) - balance, 0)
        minted = (new_ratio * supply - balance * RATIO_PRECISION) // (RATIO_PRECISION - new_ratio)
        return max(minted, 0)


register_strategy(RecoveryTimeStrategy)
