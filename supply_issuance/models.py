from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import IssuanceConfig


class Direction(Enum):
    MINT = "mint"
    BURN = "burn"


@dataclass(frozen=True)
class PoolSnapshot:
    """Balances read once at the start of an execution."""

    pool: str
    common_pool_balance: int
    token_total_supply: int
    timestamp: int


@dataclass(frozen=True)
class RatioReading:
    """Pool ratio relative to the target, scaled by EXTRA_PRECISION."""

    current_ratio: int
    direction: Direction


@dataclass
class AdjustmentState:
    """Mutable controller state; owned and mutated by the controller only."""

    previous_adjustment_second: int
    recent_bridge_transaction_id: Optional[str] = None


@dataclass(frozen=True)
class AdjustmentContext:
    """Context passed to a convergence strategy for a single execution."""

    snapshot: PoolSnapshot
    reading: RatioReading
    config: IssuanceConfig
    elapsed_seconds: int


@dataclass(frozen=True)
class AdjustmentRecord:
    """Outcome of one successful execution."""

    timestamp: int
    direction: Direction
    amount: int
    raw_amount: int
    balance_before: int
    balance_after: int
    total_supply_after: int
    elapsed_seconds: int
    strategy: str
    bridge_transaction_id: Optional[str] = None

    @property
    def signed_amount(self) -> int:
        return self.amount if self.direction is Direction.MINT else -self.amount
