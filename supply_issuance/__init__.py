from .bridge import BridgeNotifier, BridgeTransport, NullTransport, RecordingTransport
from .config import IssuanceConfig
from .controller import AdjustmentPlan, IssuanceController, initialize
from .data import format_record, format_records, load_schedule, records_to_frame
from .errors import (
    ArithmeticOverflow,
    AuthorizationFailed,
    BridgeError,
    ConfigValidationError,
    DelayNotPassed,
    DivideByZero,
    IssuanceError,
    ReentrantCall,
    UnknownStrategyError,
)
from .fixed_point import EXTRA_PRECISION, RATIO_PRECISION, SECONDS_IN_YEAR
from .models import AdjustmentRecord, AdjustmentState, Direction, PoolSnapshot, RatioReading
from .scheduler import AdjustmentScheduler, build_schedule
from .strategies import (
    DEFAULT_STRATEGY,
    LinearStrategy,
    RecoveryTimeStrategy,
    available_strategies,
    build_strategy,
    register_strategy,
)

__all__ = [
    "AdjustmentPlan",
    "AdjustmentRecord",
    "AdjustmentScheduler",
    "AdjustmentState",
    "ArithmeticOverflow",
    "AuthorizationFailed",
    "BridgeError",
    "BridgeNotifier",
    "BridgeTransport",
    "ConfigValidationError",
    "DEFAULT_STRATEGY",
    "DelayNotPassed",
    "Direction",
    "DivideByZero",
    "EXTRA_PRECISION",
    "IssuanceConfig",
    "IssuanceController",
    "IssuanceError",
    "LinearStrategy",
    "NullTransport",
    "PoolSnapshot",
    "RATIO_PRECISION",
    "RatioReading",
    "RecordingTransport",
    "RecoveryTimeStrategy",
    "ReentrantCall",
    "SECONDS_IN_YEAR",
    "UnknownStrategyError",
    "available_strategies",
    "build_schedule",
    "build_strategy",
    "format_record",
    "format_records",
    "initialize",
    "load_schedule",
    "records_to_frame",
    "register_strategy",
]
