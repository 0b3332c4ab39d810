"""Risk management utilities for position sizing and risk accounting."""

import math
from dataclasses import dataclass
from typing import Iterable, List

import numpy as np


@dataclass(frozen=True)
class PositionDetail:
    """One row of the position sizing table.

    Attributes:
        allocation_percent: Share of the portfolio put into the position (10 = 10%)
        shares: Shares bought with that allocation (fractional)
        risk_amount: Dollars lost if the stop is hit
        risk_percent: risk_amount as a percentage of the portfolio
    """
    allocation_percent: float
    shares: float
    risk_amount: float
    risk_percent: float


def _divide(numerator: float, denominator: float) -> float:
    """Division that returns NaN instead of raising on a zero denominator."""
    if denominator == 0 or math.isnan(denominator):
        return np.nan
    return numerator / denominator


def compute_position_sizing(
    portfolio_value: float,
    entry_price: float,
    stop_loss_price: float,
    allocation_percentages: Iterable[float],
) -> List[PositionDetail]:
    """Size a position for each portfolio allocation percentage.

    Args:
        portfolio_value: Total account equity in dollars
        entry_price: Expected entry price
        stop_loss_price: Stop loss price
        allocation_percentages: Percentages of the portfolio to allocate, e.g. [5, 10]

    Returns:
        One PositionDetail per allocation, in the given order. Missing
        inputs show up as NaN fields rather than an exception.
    """
    risk_per_share = entry_price - stop_loss_price

    rows = []
    for pct in allocation_percentages:
        position_value = portfolio_value * (pct / 100)
        shares = _divide(position_value, entry_price)
        risk_amount = risk_per_share * shares
        risk_percent = _divide(risk_amount, portfolio_value) * 100

        rows.append(PositionDetail(
            allocation_percent=pct,
            shares=shares,
            risk_amount=risk_amount,
            risk_percent=risk_percent,
        ))

    return rows


def compute_fixed_risk_amount(portfolio_value: float, risk_percentage: float) -> float:
    """Dollar amount risked per trade when risk is a fixed percentage.

    Args:
        portfolio_value: Total account equity in dollars
        risk_percentage: Percent of the portfolio to risk (2 = 2%)

    Returns:
        portfolio_value * risk_percentage / 100, NaN if either is missing
    """
    return portfolio_value * risk_percentage / 100


def compute_risk_based_shares(
    risk_amount: float,
    entry_price: float,
    stop_loss_price: float,
) -> int:
    """Whole shares that risk exactly `risk_amount` at the stop.

    Args:
        risk_amount: Dollars willing to lose on the trade
        entry_price: Expected entry price
        stop_loss_price: Stop loss price

    Returns:
        Number of shares (rounded down), 0 when the stop isn't below entry
        or any input is missing
    """
    risk_per_share = entry_price - stop_loss_price

    if not math.isfinite(risk_amount) or not math.isfinite(risk_per_share):
        return 0
    if risk_per_share <= 0 or risk_amount <= 0:
        return 0

    return int(risk_amount // risk_per_share)
