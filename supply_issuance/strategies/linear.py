from __future__ import annotations

from ..fixed_point import EXTRA_PRECISION, checked_mul, mul_div
from ..limiter import RateLimiter
from ..models import AdjustmentContext, Direction
from .base import ConvergenceStrategy, register_strategy


def convergence_amount(effective_rate: int, elapsed_seconds: int, total_supply: int) -> int:
    """Magnitude moved by ``effective_rate`` over ``elapsed_seconds``."""
    return mul_div(checked_mul(effective_rate, elapsed_seconds), total_supply, EXTRA_PRECISION)


class LinearStrategy(ConvergenceStrategy):
    """Rate-capped linear convergence toward the target ratio."""

    name = "linear"
    description = "Ideal rate over a one-year horizon, hard-capped per second"

    def __init__(self, config):
        super().__init__(config)
        self.limiter = RateLimiter(config)

    def compute_adjustment(self, context: AdjustmentContext) -> int:
        rate = self.limiter.limit(context.reading)
        amount = convergence_amount(
            rate.effective_rate,
            context.elapsed_seconds,
            context.snapshot.token_total_supply,
        )
        return amount if context.reading.direction is Direction.MINT else -amount


register_strategy(LinearStrategy)
