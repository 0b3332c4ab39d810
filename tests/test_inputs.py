"""Tests for input parsing and the immutable input record."""

import dataclasses
import math

import pytest

from trading.config import PlannerConfig, RiskMode
from trading.inputs import TradeInputs, parse_number


class TestParseNumber:
    """Tests for parse_number."""

    def test_decimal_text(self):
        assert parse_number("102.5") == 102.5

    def test_surrounding_whitespace(self):
        assert parse_number(" 7 ") == 7.0

    def test_thousands_separator(self):
        assert parse_number("10,000") == 10000.0

    def test_number_passthrough(self):
        assert parse_number(5) == 5.0
        assert isinstance(parse_number(5), float)

    @pytest.mark.parametrize("value", ["", "   ", None, "abc", "12abc", True])
    def test_unparseable_is_nan(self, value):
        assert math.isnan(parse_number(value))


class TestTradeInputs:
    """Tests for TradeInputs."""

    @pytest.fixture
    def inputs(self):
        return TradeInputs.from_text(
            portfolio_value="10000",
            entry_price="100",
            atr_percentage="5",
            low_of_day="90",
            profit_ratio="2",
        )

    def test_from_text_parses_values(self, inputs):
        assert inputs.portfolio_value == 10000.0
        assert inputs.entry_price == 100.0
        assert inputs.profit_ratio == 2.0

    def test_unset_fields_are_nan(self, inputs):
        assert math.isnan(inputs.risk_percentage)
        assert math.isnan(TradeInputs().entry_price)

    def test_from_text_rejects_unknown_field(self):
        with pytest.raises(TypeError):
            TradeInputs.from_text(bogus="1")

    def test_inputs_are_frozen(self, inputs):
        with pytest.raises(dataclasses.FrozenInstanceError):
            inputs.entry_price = 101.0

    def test_with_changes_returns_new_record(self, inputs):
        changed = inputs.with_changes(entry_price="101.5")

        assert changed.entry_price == 101.5
        assert inputs.entry_price == 100.0
        assert changed.portfolio_value == inputs.portfolio_value

    def test_with_changes_clears_on_bad_text(self, inputs):
        changed = inputs.with_changes(atr_percentage="")

        assert math.isnan(changed.atr_percentage)

    def test_with_changes_rejects_unknown_field(self, inputs):
        with pytest.raises(ValueError, match="Unknown input fields"):
            inputs.with_changes(stop="95")

    def test_missing_fields_table_mode(self, inputs):
        assert inputs.missing_fields(RiskMode.ALLOCATION_TABLE) == []

    def test_missing_fields_fixed_mode(self, inputs):
        assert inputs.missing_fields(RiskMode.FIXED_PERCENTAGE) == ["risk_percentage"]

    def test_missing_fields_reports_all(self):
        inputs = TradeInputs.from_text(entry_price="100", low_of_day="abc")

        assert inputs.missing_fields(RiskMode.ALLOCATION_TABLE) == [
            "portfolio_value",
            "atr_percentage",
            "low_of_day",
            "profit_ratio",
        ]


class TestConfig:
    """Tests for RiskMode and PlannerConfig."""

    def test_mode_from_short_name(self):
        assert RiskMode.from_name("table") is RiskMode.ALLOCATION_TABLE
        assert RiskMode.from_name("fixed") is RiskMode.FIXED_PERCENTAGE

    def test_mode_from_enum_name(self):
        assert RiskMode.from_name("FIXED_PERCENTAGE") is RiskMode.FIXED_PERCENTAGE

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown risk mode"):
            RiskMode.from_name("merged")

    def test_default_config_is_valid(self):
        config = PlannerConfig()
        config.validate()

        assert config.max_loss_pct == 7.0
        assert config.allocation_percentages == (5, 10, 15, 20)

    def test_empty_allocations(self):
        with pytest.raises(ValueError, match="must not be empty"):
            PlannerConfig(allocation_percentages=()).validate()

    def test_non_positive_allocation(self):
        with pytest.raises(ValueError, match="must be positive"):
            PlannerConfig(allocation_percentages=(5, 0)).validate()

    @pytest.mark.parametrize("max_loss", [0, -1, 100])
    def test_bad_max_loss(self, max_loss):
        with pytest.raises(ValueError, match="max_loss_pct"):
            PlannerConfig(max_loss_pct=max_loss).validate()
