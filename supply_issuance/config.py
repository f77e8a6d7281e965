from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigValidationError
from .fixed_point import MAX_UINT256, RATIO_PRECISION, SECONDS_IN_YEAR


@dataclass(frozen=True)
class IssuanceConfig:
    """Tunable issuance parameters shared by all convergence strategies."""

    target_ratio: int = 2 * 10**17  # 0.2 of total supply
    max_adjustment_per_second: int = 10**12  # fraction of supply per second, EXTRA_PRECISION scaled
    execute_adjustment_delay: int = 0
    recovery_time: int = SECONDS_IN_YEAR
    convergence_horizon: int = SECONDS_IN_YEAR
    strategy: str = "linear"
    bridge_destination: Optional[str] = None

    def validate(self) -> "IssuanceConfig":
        if not 0 <= self.target_ratio <= RATIO_PRECISION:
            raise ConfigValidationError(
                f"target ratio {self.target_ratio} must be between 0 and {RATIO_PRECISION}"
            )
        if not 0 <= self.max_adjustment_per_second <= MAX_UINT256:
            raise ConfigValidationError(
                f"max adjustment per second {self.max_adjustment_per_second} must be a uint256"
            )
        if self.execute_adjustment_delay < 0:
            raise ConfigValidationError(
                f"execute adjustment delay {self.execute_adjustment_delay} must not be negative"
            )
        if self.recovery_time <= 0:
            raise ConfigValidationError(f"recovery time {self.recovery_time} must be positive")
        if self.convergence_horizon <= 0:
            raise ConfigValidationError(
                f"convergence horizon {self.convergence_horizon} must be positive"
            )
        if self.bridge_destination is not None and not self.bridge_destination:
            raise ConfigValidationError("bridge destination must be a non-empty identifier or None")
        return self
