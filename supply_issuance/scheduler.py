from __future__ import annotations

import logging
from typing import Iterable, List

from .collaborators import ManualClock
from .controller import IssuanceController
from .errors import DelayNotPassed
from .fixed_point import ONE_DAY
from .models import AdjustmentRecord

logger = logging.getLogger(__name__)


def build_schedule(start: int, days: int, interval_seconds: int) -> List[int]:
    """Call times every ``interval_seconds`` over ``days`` days, first call after one interval."""
    if interval_seconds <= 0:
        raise ValueError(f"interval must be positive, got {interval_seconds}")
    end = start + days * ONE_DAY
    return list(range(start + interval_seconds, end + 1, interval_seconds))


class AdjustmentScheduler:
    """External driver that calls the controller at given times.

    Calls rejected by the delay gate are skipped; the next scheduled time
    retries them.
    """

    def __init__(self, controller: IssuanceController, clock: ManualClock):
        self.controller = controller
        self.clock = clock
        self.skipped: List[int] = []

    def run(self, timestamps: Iterable[int]) -> List[AdjustmentRecord]:
        records: List[AdjustmentRecord] = []
        for timestamp in sorted(timestamps):
            self.clock.set(timestamp)
            try:
                record = self.controller.execute_adjustment()
            except DelayNotPassed as exc:
                logger.info("Skipping call at %s: %s", timestamp, exc)
                self.skipped.append(timestamp)
                continue
            records.append(record)
        return records
