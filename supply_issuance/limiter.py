from __future__ import annotations

from dataclasses import dataclass

from .config import IssuanceConfig
from .fixed_point import EXTRA_PRECISION, checked_div
from .models import RatioReading


@dataclass(frozen=True)
class RateDecision:
    ideal_rate: int
    effective_rate: int

    @property
    def capped(self) -> bool:
        return self.effective_rate < self.ideal_rate


def ideal_rate(current_ratio: int, horizon: int) -> int:
    """Per-second rate that would close the ratio gap over ``horizon`` seconds."""
    return checked_div(abs(current_ratio - EXTRA_PRECISION), horizon)


class RateLimiter:
    """Clamps the ideal convergence rate to the configured maximum."""

    def __init__(self, config: IssuanceConfig):
        self.config = config

    def limit(self, reading: RatioReading) -> RateDecision:
        ideal = ideal_rate(reading.current_ratio, self.config.convergence_horizon)
        return RateDecision(
            ideal_rate=ideal,
            effective_rate=min(ideal, self.config.max_adjustment_per_second),
        )
