from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Type

from ..config import IssuanceConfig
from ..errors import UnknownStrategyError
from ..models import AdjustmentContext


class ConvergenceStrategy(ABC):
    """Interface for pluggable convergence strategies."""

    name: str = "base"
    description: str = ""

    def __init__(self, config: IssuanceConfig):
        self.config = config

    @abstractmethod
    def compute_adjustment(self, context: AdjustmentContext) -> int:
        """Return the raw signed amount: positive to mint, negative to burn."""


STRATEGY_REGISTRY: Dict[str, Type[ConvergenceStrategy]] = {}


def register_strategy(strategy_cls: Type[ConvergenceStrategy]) -> None:
    STRATEGY_REGISTRY[strategy_cls.name] = strategy_cls


def available_strategies() -> List[str]:
    return sorted(STRATEGY_REGISTRY)


def build_strategy(name: str, config: IssuanceConfig) -> ConvergenceStrategy:
    """Instantiate the strategy registered as ``name`` for a validated ``config``."""
    try:
        strategy_cls = STRATEGY_REGISTRY[name]
    except KeyError as exc:
        raise UnknownStrategyError(
            f"Unknown strategy '{name}'. Available: {available_strategies()}"
        ) from exc
    # Strategies read ratio bounds and periods straight from the config
    return strategy_cls(config.validate())
