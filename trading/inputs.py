"""Trade inputs as entered by the user, parsed to floats.

Anything that doesn't parse becomes NaN rather than raising, so a half
filled-in form simply produces a plan that isn't ready yet.
"""

import math
from dataclasses import dataclass, fields, replace
from typing import List, Union

import numpy as np

from .config import RiskMode

Number = Union[str, float, int, None]


def parse_number(value: Number) -> float:
    """Parse user text (or a number) to float, NaN when it isn't one.

    Args:
        value: Raw field value, e.g. "102.5", "", None or 102.5

    Returns:
        The parsed float, or np.nan for empty/non-numeric input
    """
    if value is None or isinstance(value, bool):
        return np.nan
    if isinstance(value, (int, float)):
        return float(value)

    text = str(value).strip().replace(",", "")
    if not text:
        return np.nan
    try:
        return float(text)
    except ValueError:
        return np.nan


@dataclass(frozen=True)
class TradeInputs:
    """Immutable snapshot of the planner form.

    Attributes:
        portfolio_value: Total capital available
        entry_price: Intended entry price per share
        atr_percentage: ATR as a percentage of price, for the volatility stop
        low_of_day: Session low, used as an alternative stop
        profit_ratio: Reward-to-risk multiple for the profit target
        risk_percentage: Percent of portfolio to risk (fixed-risk mode only)
    """
    portfolio_value: float = np.nan
    entry_price: float = np.nan
    atr_percentage: float = np.nan
    low_of_day: float = np.nan
    profit_ratio: float = np.nan
    risk_percentage: float = np.nan

    @classmethod
    def from_text(cls, **values: Number) -> "TradeInputs":
        """Build inputs from raw field values; unknown names raise TypeError."""
        return cls(**{name: parse_number(value) for name, value in values.items()})

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    def with_changes(self, **values: Number) -> "TradeInputs":
        """Return a new record with the given fields re-parsed and replaced."""
        unknown = set(values) - set(self.field_names())
        if unknown:
            raise ValueError(f"Unknown input fields: {sorted(unknown)}")
        return replace(self, **{name: parse_number(v) for name, v in values.items()})

    def required_fields(self, mode: RiskMode) -> List[str]:
        """Fields that must be filled in before a plan can be shown."""
        required = [
            "portfolio_value",
            "entry_price",
            "atr_percentage",
            "low_of_day",
            "profit_ratio",
        ]
        if mode is RiskMode.FIXED_PERCENTAGE:
            required.append("risk_percentage")
        return required

    def missing_fields(self, mode: RiskMode) -> List[str]:
        """Required fields that are empty or not a finite number."""
        return [
            name for name in self.required_fields(mode)
            if not math.isfinite(getattr(self, name))
        ]
