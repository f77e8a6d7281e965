from __future__ import annotations

import logging

from .errors import DelayNotPassed
from .models import AdjustmentState

logger = logging.getLogger(__name__)


class DelayGate:
    """Minimum-interval gate between successful executions."""

    def __init__(self, state: AdjustmentState):
        self.state = state

    @property
    def previous_adjustment_second(self) -> int:
        return self.state.previous_adjustment_second

    def elapsed(self, now: int) -> int:
        # A clock that runs backwards counts as no time passing
        return max(now - self.state.previous_adjustment_second, 0)

    def check(self, now: int, delay: int) -> int:
        elapsed = self.elapsed(now)
        if elapsed < delay:
            logger.debug("Adjustment gated: %ss elapsed of %ss", elapsed, delay)
            raise DelayNotPassed(elapsed, delay)
        return elapsed

    def advance(self, now: int) -> None:
        self.state.previous_adjustment_second = max(self.state.previous_adjustment_second, now)
