from __future__ import annotations

import pytest

from supply_issuance.errors import DivideByZero
from supply_issuance.fixed_point import EXTRA_PRECISION, MAX_UINT256, RATIO_PRECISION
from supply_issuance.models import Direction
from supply_issuance.ratio import calculate_ratio, pool_ratio, target_amount

from .helpers import INITIAL_TARGET_RATIO, TOKEN, TOTAL_SUPPLY


def test_ratio_above_target_burns():
    reading = calculate_ratio(30 * TOKEN, TOTAL_SUPPLY, INITIAL_TARGET_RATIO)
    assert reading.current_ratio == 15 * 10**17
    assert reading.direction is Direction.BURN


def test_ratio_below_target_mints():
    reading = calculate_ratio(10 * TOKEN, TOTAL_SUPPLY, INITIAL_TARGET_RATIO)
    assert reading.current_ratio == 5 * 10**17
    assert reading.direction is Direction.MINT


def test_ratio_on_target_is_one():
    reading = calculate_ratio(20 * TOKEN, TOTAL_SUPPLY, INITIAL_TARGET_RATIO)
    assert reading.current_ratio == EXTRA_PRECISION
    assert reading.direction is Direction.MINT


def test_small_pool_keeps_precision():
    # 1 wei in a large supply would truncate to zero without the scale-up
    reading = calculate_ratio(1, TOKEN, 10**12)
    assert reading.current_ratio == 10**6


@pytest.mark.parametrize(
    "balance,total_supply,target_ratio",
    [
        (0, 1, 10**17),
        (5 * TOKEN, 7 * TOKEN, 7 * 10**17),
        (71 * TOKEN, 100 * TOKEN, 7 * 10**17),
        (99 * TOKEN, 100 * TOKEN, RATIO_PRECISION),
        (3, 1_000_003, 3 * 10**12),
        (999_999 * TOKEN, 10**6 * TOKEN, 5 * 10**17),
    ],
)
def test_direction_matches_sign_of_ratio_gap(balance, total_supply, target_ratio):
    reading = calculate_ratio(balance, total_supply, target_ratio)
    above = balance * RATIO_PRECISION > target_ratio * total_supply
    assert (reading.direction is Direction.BURN) == above


def test_zero_supply_raises():
    with pytest.raises(DivideByZero):
        calculate_ratio(10, 0, INITIAL_TARGET_RATIO)


def test_zero_target_ratio():
    assert calculate_ratio(1, TOTAL_SUPPLY, 0).current_ratio == MAX_UINT256
    assert calculate_ratio(1, TOTAL_SUPPLY, 0).direction is Direction.BURN
    assert calculate_ratio(0, TOTAL_SUPPLY, 0).direction is Direction.MINT


def test_pool_ratio_and_target_amount():
    assert pool_ratio(30 * TOKEN, TOTAL_SUPPLY) == 3 * 10**17
    assert target_amount(TOTAL_SUPPLY, INITIAL_TARGET_RATIO) == 20 * TOKEN
