from __future__ import annotations

import math

import pytest

from supply_issuance.config import IssuanceConfig
from supply_issuance.errors import ConfigValidationError, UnknownStrategyError
from supply_issuance.fixed_point import EXTRA_PRECISION, ONE_DAY, RATIO_PRECISION, SECONDS_IN_YEAR
from supply_issuance.models import AdjustmentContext, PoolSnapshot
from supply_issuance.ratio import calculate_ratio
from supply_issuance.strategies import (
    LinearStrategy,
    RecoveryTimeStrategy,
    available_strategies,
    build_strategy,
    convergence_amount,
)

from .helpers import INITIAL_TARGET_RATIO, TOKEN, TOTAL_SUPPLY


def _context(balance, elapsed, config, total_supply=TOTAL_SUPPLY):
    snapshot = PoolSnapshot("vault", balance, total_supply, 0)
    reading = calculate_ratio(balance, total_supply, config.target_ratio)
    return AdjustmentContext(snapshot=snapshot, reading=reading, config=config, elapsed_seconds=elapsed)


def reference_adjustment(balance, total_supply, target_ratio, recovery_time, elapsed):
    """Float model of the recovery-time trajectory, in whole tokens."""
    current = balance / total_supply
    if current > target_ratio:
        shared = recovery_time * math.sqrt((1 - target_ratio) * (current - target_ratio))
        ratio = (current * recovery_time**2 + (1 - target_ratio) * elapsed**2 - 2 * elapsed * shared) / recovery_time**2
        return -(balance - ratio * total_supply) / (1 - ratio)
    shared = recovery_time * math.sqrt(target_ratio * (target_ratio - current))
    ratio = (current * recovery_time**2 + 2 * elapsed * shared - target_ratio * elapsed**2) / recovery_time**2
    return (ratio * total_supply - balance) / (1 - ratio)


def test_registry_lists_both_strategies():
    assert available_strategies() == ["linear", "recovery_time"]
    assert isinstance(build_strategy("linear", IssuanceConfig()), LinearStrategy)
    assert isinstance(build_strategy("recovery_time", IssuanceConfig()), RecoveryTimeStrategy)


def test_unknown_strategy():
    with pytest.raises(UnknownStrategyError, match="Unknown strategy 'pid'"):
        build_strategy("pid", IssuanceConfig())


def test_build_strategy_validates_config():
    with pytest.raises(ConfigValidationError):
        build_strategy("linear", IssuanceConfig(target_ratio=RATIO_PRECISION + 1))
    with pytest.raises(ConfigValidationError):
        build_strategy("recovery_time", IssuanceConfig(recovery_time=0))


def test_convergence_amount_floors():
    assert convergence_amount(3, 10, 7) == 0
    assert convergence_amount(10**9, ONE_DAY, EXTRA_PRECISION) == 10**9 * ONE_DAY


class TestLinearStrategy:
    def setup_method(self):
        self.config = IssuanceConfig(target_ratio=INITIAL_TARGET_RATIO, max_adjustment_per_second=10**12)
        self.strategy = LinearStrategy(self.config)
        self.rate = 5 * 10**17 // SECONDS_IN_YEAR

    def test_burn_is_negative(self):
        amount = self.strategy.compute_adjustment(_context(30 * TOKEN, 10 * ONE_DAY, self.config))
        assert amount == -(self.rate * 10 * ONE_DAY * TOTAL_SUPPLY // EXTRA_PRECISION)

    def test_mint_is_positive(self):
        amount = self.strategy.compute_adjustment(_context(10 * TOKEN, 16 * ONE_DAY, self.config))
        assert amount == self.rate * 16 * ONE_DAY * TOTAL_SUPPLY // EXTRA_PRECISION

    def test_zero_elapsed(self):
        assert self.strategy.compute_adjustment(_context(30 * TOKEN, 0, self.config)) == 0

    def test_amount_grows_linearly_with_time(self):
        one = self.strategy.compute_adjustment(_context(30 * TOKEN, ONE_DAY, self.config))
        ten = self.strategy.compute_adjustment(_context(30 * TOKEN, 10 * ONE_DAY, self.config))
        assert abs(ten - 10 * one) <= 10


class TestRecoveryTimeStrategy:
    def setup_method(self):
        self.config = IssuanceConfig(
            target_ratio=INITIAL_TARGET_RATIO,
            recovery_time=SECONDS_IN_YEAR,
            strategy="recovery_time",
        )
        self.strategy = RecoveryTimeStrategy(self.config)

    @pytest.mark.parametrize("balance,days", [(30, 10), (30, 5), (10, 16), (10, 8), (60, 30), (1, 3)])
    def test_matches_closed_form(self, balance, days):
        amount = self.strategy.compute_adjustment(_context(balance * TOKEN, days * ONE_DAY, self.config))
        expected = reference_adjustment(balance, 100, 0.2, SECONDS_IN_YEAR, days * ONE_DAY)
        assert amount / TOKEN == pytest.approx(expected, abs=1e-3)

    def test_settles_on_supply_adjusted_target_after_vertex(self):
        amount = self.strategy.compute_adjustment(_context(30 * TOKEN, 1000 * ONE_DAY, self.config))
        # burning x leaves (30 - x) / (100 - x) == 0.2
        assert amount == -(30 * TOKEN - 20 * TOKEN) * 10 // 8

    def test_zero_elapsed(self):
        assert self.strategy.compute_adjustment(_context(30 * TOKEN, 0, self.config)) == 0

    def test_full_supply_target_mints_the_gap(self):
        config = IssuanceConfig(target_ratio=EXTRA_PRECISION, strategy="recovery_time")
        amount = RecoveryTimeStrategy(config).compute_adjustment(_context(40 * TOKEN, 1000 * ONE_DAY, config))
        assert amount == 60 * TOKEN
