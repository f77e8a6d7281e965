from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, replace
from typing import Deque, Optional

from .bridge import BridgeNotifier, BridgeTransport
from .collaborators import (
    UPDATE_SETTINGS_ROLE,
    Authorizer,
    Clock,
    FundsManager,
    SystemClock,
    TokenLedger,
    TokenManager,
)
from .config import IssuanceConfig
from .errors import BridgeError, ConfigValidationError, DivideByZero, ReentrantCall
from .gate import DelayGate
from .guard import GuardDecision, OvershootGuard
from .models import (
    AdjustmentContext,
    AdjustmentRecord,
    AdjustmentState,
    Direction,
    PoolSnapshot,
    RatioReading,
)
from .ratio import calculate_ratio
from .strategies import ConvergenceStrategy, build_strategy

logger = logging.getLogger(__name__)

# Most recent adjustment records kept in memory; older ones are dropped
RECORD_HISTORY = 1024


@dataclass(frozen=True)
class AdjustmentPlan:
    """Everything computed for an execution before anything is mutated."""

    snapshot: PoolSnapshot
    reading: RatioReading
    elapsed_seconds: int
    raw_amount: int
    guard: GuardDecision

    @property
    def direction(self) -> Direction:
        return self.reading.direction


class IssuanceController:
    """Core runtime that feeds pool snapshots into the chosen convergence strategy."""

    def __init__(
        self,
        token_manager: TokenManager,
        funds_manager: FundsManager,
        token: TokenLedger,
        config: IssuanceConfig,
        authorizer: Authorizer,
        clock: Clock | None = None,
        transport: BridgeTransport | None = None,
        record_history: int = RECORD_HISTORY,
    ):
        self._config = config.validate()
        self._strategy: ConvergenceStrategy = build_strategy(config.strategy, config)
        self._token_manager = token_manager
        self._funds_manager = funds_manager
        self._token = token
        self.authorizer = authorizer
        self.clock = clock or SystemClock()
        self.bridge = BridgeNotifier(transport)
        self._state = AdjustmentState(previous_adjustment_second=self.clock.now())
        self._gate = DelayGate(self._state)
        self._executing = False
        self.records: Deque[AdjustmentRecord] = deque(maxlen=record_history)

    # -- accessors -----------------------------------------------------

    @property
    def config(self) -> IssuanceConfig:
        return self._config

    @property
    def target_ratio(self) -> int:
        return self._config.target_ratio

    @property
    def max_adjustment_per_second(self) -> int:
        return self._config.max_adjustment_per_second

    @property
    def recovery_time(self) -> int:
        return self._config.recovery_time

    @property
    def execute_adjustment_delay(self) -> int:
        return self._config.execute_adjustment_delay

    @property
    def bridge_destination(self) -> Optional[str]:
        return self._config.bridge_destination

    @property
    def strategy(self) -> ConvergenceStrategy:
        return self._strategy

    @property
    def token_manager(self) -> TokenManager:
        return self._token_manager

    @property
    def funds_manager(self) -> FundsManager:
        return self._funds_manager

    @property
    def token(self) -> TokenLedger:
        return self._token

    @property
    def state(self) -> AdjustmentState:
        return replace(self._state)

    @property
    def previous_adjustment_second(self) -> int:
        return self._state.previous_adjustment_second

    @property
    def recent_bridge_transaction_id(self) -> Optional[str]:
        return self._state.recent_bridge_transaction_id

    # -- settings ------------------------------------------------------

    def _update_config(self, caller: object, **changes) -> IssuanceConfig:
        self.authorizer.require(caller, UPDATE_SETTINGS_ROLE)
        config = replace(self._config, **changes).validate()
        strategy = build_strategy(config.strategy, config)
        self._config = config
        self._strategy = strategy
        logger.info("Settings updated by %r: %s", caller, changes)
        return config

    def update_target_ratio(self, caller: object, target_ratio: int) -> None:
        self._update_config(caller, target_ratio=target_ratio)

    def update_max_adjustment_per_second(self, caller: object, rate: int) -> None:
        self._update_config(caller, max_adjustment_per_second=rate)

    def update_recovery_time(self, caller: object, seconds: int) -> None:
        self._update_config(caller, recovery_time=seconds)

    def update_execute_adjustment_delay(self, caller: object, seconds: int) -> None:
        self._update_config(caller, execute_adjustment_delay=seconds)

    def update_bridge_destination(self, caller: object, destination: Optional[str]) -> None:
        self._update_config(caller, bridge_destination=destination)

    def update_strategy(self, caller: object, name: str) -> None:
        self._update_config(caller, strategy=name)

    def update_funds_manager(self, caller: object, funds_manager: FundsManager) -> None:
        self.authorizer.require(caller, UPDATE_SETTINGS_ROLE)
        if funds_manager is None:
            raise ConfigValidationError("funds manager must not be None")
        self._funds_manager = funds_manager
        logger.info("Funds manager updated by %r: pool is now %s", caller, funds_manager.funds_owner())

    update_vault = update_funds_manager

    # -- execution -----------------------------------------------------

    def _snapshot(self, now: int) -> PoolSnapshot:
        pool = self._funds_manager.funds_owner()
        total_supply = self._token.total_supply()
        if total_supply == 0:
            raise DivideByZero("token total supply is zero")
        return PoolSnapshot(
            pool=pool,
            common_pool_balance=self._token.balance_of(pool),
            token_total_supply=total_supply,
            timestamp=now,
        )

    def _plan(self, now: int) -> AdjustmentPlan:
        cfg = self._config
        snapshot = self._snapshot(now)
        elapsed = self._gate.check(now, cfg.execute_adjustment_delay)
        reading = calculate_ratio(snapshot.common_pool_balance, snapshot.token_total_supply, cfg.target_ratio)
        context = AdjustmentContext(snapshot=snapshot, reading=reading, config=cfg, elapsed_seconds=elapsed)
        raw_amount = self._strategy.compute_adjustment(context)
        guard = OvershootGuard(cfg.target_ratio).apply(raw_amount, snapshot)
        return AdjustmentPlan(
            snapshot=snapshot,
            reading=reading,
            elapsed_seconds=elapsed,
            raw_amount=raw_amount,
            guard=guard,
        )

    def preview_adjustment(self) -> AdjustmentPlan:
        """Compute what execute_adjustment would do now without mutating anything."""
        return self._plan(self.clock.now())

    def _apply_delta(self, pool: str, delta: int) -> None:
        if delta > 0:
            self._token_manager.mint(pool, delta)
        elif delta < 0:
            self._token_manager.burn(pool, -delta)

    def execute_adjustment(self) -> AdjustmentRecord:
        if self._executing:
            raise ReentrantCall("execute_adjustment is already running")
        self._executing = True
        try:
            return self._execute()
        finally:
            self._executing = False

    def _execute(self) -> AdjustmentRecord:
        now = self.clock.now()
        plan = self._plan(now)
        snapshot = plan.snapshot
        delta = plan.guard.amount
        previous_state = replace(self._state)

        self._apply_delta(snapshot.pool, delta)
        self._gate.advance(now)

        try:
            transaction_id = self.bridge.notify(self._config.bridge_destination, delta, now)
        except BridgeError:
            self._state.previous_adjustment_second = previous_state.previous_adjustment_second
            self._state.recent_bridge_transaction_id = previous_state.recent_bridge_transaction_id
            logger.warning("Bridge notification failed, reverting delta %s on %s", delta, snapshot.pool)
            try:
                self._apply_delta(snapshot.pool, -delta)
            except Exception as undo_exc:
                logger.error("Could not revert delta %s on %s: %s", delta, snapshot.pool, undo_exc)
                raise BridgeError(
                    f"bridge notification failed and delta {delta} on {snapshot.pool} could not be reverted"
                ) from undo_exc
            raise

        if transaction_id is not None:
            self._state.recent_bridge_transaction_id = transaction_id

        record = AdjustmentRecord(
            timestamp=now,
            direction=plan.direction,
            amount=abs(delta),
            raw_amount=abs(plan.raw_amount),
            balance_before=snapshot.common_pool_balance,
            balance_after=snapshot.common_pool_balance + delta,
            total_supply_after=snapshot.token_total_supply + delta,
            elapsed_seconds=plan.elapsed_seconds,
            strategy=self._strategy.name,
            bridge_transaction_id=transaction_id,
        )
        self.records.append(record)
        logger.info(
            "%s %s after %ss (raw %s, clamped=%s): pool %s -> %s",
            record.direction.value,
            record.amount,
            record.elapsed_seconds,
            record.raw_amount,
            plan.guard.clamped,
            record.balance_before,
            record.balance_after,
        )
        return record


def initialize(
    token_manager: TokenManager,
    funds_manager: FundsManager,
    token: TokenLedger,
    config: IssuanceConfig,
    authorizer: Authorizer,
    clock: Clock | None = None,
    transport: BridgeTransport | None = None,
    record_history: int = RECORD_HISTORY,
) -> IssuanceController:
    """Validate the configuration and wire a controller to its collaborators."""
    controller = IssuanceController(
        token_manager,
        funds_manager,
        token,
        config,
        authorizer=authorizer,
        clock=clock,
        transport=transport,
        record_history=record_history,
    )
    logger.info(
        "Issuance initialized: target ratio %s, strategy %s, pool %s",
        config.target_ratio,
        config.strategy,
        funds_manager.funds_owner(),
    )
    return controller
