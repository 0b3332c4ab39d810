"""Tests for position sizing, profit targets and risk accounting."""

import math

import numpy as np
import pytest

from trading.risk import (
    compute_fixed_risk_amount,
    compute_position_sizing,
    compute_risk_based_shares,
)
from trading.targets import compute_profit_target


class TestPositionSizing:
    """Tests for compute_position_sizing."""

    @pytest.fixture
    def rows(self):
        return compute_position_sizing(10000, 100, 95, [5, 10, 15, 20])

    def test_one_row_per_allocation(self, rows):
        assert [r.allocation_percent for r in rows] == [5, 10, 15, 20]

    def test_ten_percent_allocation(self, rows):
        row = rows[1]

        assert row.shares == pytest.approx(10.0)
        assert row.risk_amount == pytest.approx(50.0)
        assert row.risk_percent == pytest.approx(0.5)

    def test_twenty_percent_allocation(self, rows):
        row = rows[3]

        assert row.shares == pytest.approx(20.0)
        assert row.risk_amount == pytest.approx(100.0)
        assert row.risk_percent == pytest.approx(1.0)

    def test_fractional_shares(self):
        row = compute_position_sizing(10000, 30, 28.5, [5])[0]

        assert row.shares == pytest.approx(500 / 30)
        assert row.risk_amount == pytest.approx(1.5 * 500 / 30)

    def test_zero_entry_price_gives_nan(self):
        row = compute_position_sizing(10000, 0, 0, [10])[0]

        assert math.isnan(row.shares)
        assert math.isnan(row.risk_amount)

    def test_zero_portfolio_gives_nan_percent(self):
        row = compute_position_sizing(0, 100, 95, [10])[0]

        assert row.shares == 0
        assert math.isnan(row.risk_percent)

    def test_missing_stop_propagates(self):
        row = compute_position_sizing(10000, 100, np.nan, [10])[0]

        assert row.shares == pytest.approx(10.0)
        assert math.isnan(row.risk_amount)
        assert math.isnan(row.risk_percent)

    def test_empty_allocations(self):
        assert compute_position_sizing(10000, 100, 95, []) == []


class TestFixedRisk:
    """Tests for fixed-percentage risk accounting."""

    def test_fixed_risk_amount(self):
        assert compute_fixed_risk_amount(10000, 2) == pytest.approx(200.0)

    def test_fixed_risk_amount_missing(self):
        assert math.isnan(compute_fixed_risk_amount(10000, np.nan))

    def test_risk_based_shares(self):
        assert compute_risk_based_shares(200, 100, 95) == 40

    def test_risk_based_shares_rounds_down(self):
        assert compute_risk_based_shares(199.99, 100, 95) == 39

    def test_risk_based_shares_stop_at_entry(self):
        assert compute_risk_based_shares(200, 100, 100) == 0

    def test_risk_based_shares_stop_above_entry(self):
        assert compute_risk_based_shares(200, 100, 105) == 0

    def test_risk_based_shares_missing(self):
        assert compute_risk_based_shares(np.nan, 100, 95) == 0
        assert compute_risk_based_shares(200, 100, np.nan) == 0


class TestProfitTarget:
    """Tests for compute_profit_target."""

    def test_two_to_one(self):
        assert compute_profit_target(100, 95, 2) == pytest.approx(110.0)

    def test_three_to_one(self):
        assert compute_profit_target(100, 93, 3) == pytest.approx(121.0)

    @pytest.mark.parametrize("entry,stop,ratio", [
        (100, 95, 2),
        (52.4, 49.1, 1.5),
        (8.75, 8.2, 4),
    ])
    def test_reward_is_ratio_times_risk(self, entry, stop, ratio):
        target = compute_profit_target(entry, stop, ratio)

        assert target - entry == pytest.approx(ratio * (entry - stop))

    def test_missing_ratio(self):
        assert math.isnan(compute_profit_target(100, 95, np.nan))
