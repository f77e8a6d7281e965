from .base import (
    STRATEGY_REGISTRY,
    ConvergenceStrategy,
    available_strategies,
    build_strategy,
    register_strategy,
)
from .linear import LinearStrategy, convergence_amount
from .recovery import RecoveryTimeStrategy

DEFAULT_STRATEGY = LinearStrategy.name

__all__ = [
    "ConvergenceStrategy",
    "STRATEGY_REGISTRY",
    "available_strategies",
    "build_strategy",
    "register_strategy",
    "convergence_amount",
    "LinearStrategy",
    "RecoveryTimeStrategy",
    "DEFAULT_STRATEGY",
]
