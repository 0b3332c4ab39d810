"""Trade plan assembly: inputs in, stop/target/sizing out.

A plan is rebuilt from scratch every time an input changes. Nothing is
cached between builds; the calculations are cheap and pure.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from .config import PlannerConfig, RiskMode
from .inputs import Number, TradeInputs
from .risk import (
    PositionDetail,
    compute_fixed_risk_amount,
    compute_position_sizing,
    compute_risk_based_shares,
)
from .stops import StopLoss, compute_stop_loss
from .targets import compute_profit_target

logger = logging.getLogger(__name__)

# Labels as shown next to each input box
FIELD_LABELS: Dict[str, str] = {
    "portfolio_value": "Portfolio Value ($)",
    "entry_price": "Entry Price ($)",
    "atr_percentage": "ATR Percentage (%)",
    "low_of_day": "Low of Day ($)",
    "profit_ratio": "Profit/Risk Ratio",
    "risk_percentage": "Risk Percentage (%)",
}

# Short names accepted by the interactive session
FIELD_ALIASES: Dict[str, str] = {
    "portfolio": "portfolio_value",
    "entry": "entry_price",
    "price": "entry_price",
    "atr": "atr_percentage",
    "low": "low_of_day",
    "lod": "low_of_day",
    "ratio": "profit_ratio",
    "risk": "risk_percentage",
}


@dataclass
class TradePlan:
    """Everything derived from one snapshot of the inputs.

    Attributes:
        inputs: The inputs this plan was built from
        mode: Risk accounting mode
        stop_loss: Selected stop (unrounded) and its candidates
        stop_price: Stop rounded to cents; drives sizing and the target
        profit_target: Target price
        positions: Sizing table rows, one per allocation percentage
        fixed_risk_amount: Dollars at risk in fixed-percentage mode, else None
        risk_based_shares: Whole shares fixed_risk_amount buys at the stop, else None
        missing: Required fields that were empty or non-numeric
    """
    inputs: TradeInputs
    mode: RiskMode
    stop_loss: StopLoss
    stop_price: float
    profit_target: float
    positions: List[PositionDetail] = field(default_factory=list)
    fixed_risk_amount: Optional[float] = None
    risk_based_shares: Optional[int] = None
    missing: List[str] = field(default_factory=list)

    @property
    def is_ready(self) -> bool:
        """True when every required input is filled in and all figures are finite."""
        if self.missing or not self.stop_loss.is_valid:
            return False

        values = [self.stop_price, self.profit_target]
        for row in self.positions:
            values.extend([row.shares, row.risk_amount, row.risk_percent])
        if self.mode is RiskMode.FIXED_PERCENTAGE:
            values.append(self.fixed_risk_amount)

        return all(v is not None and math.isfinite(v) for v in values)

    def to_frame(self) -> pd.DataFrame:
        """Sizing table as a DataFrame, one row per allocation percentage."""
        return pd.DataFrame(
            [
                {
                    "allocation_pct": row.allocation_percent,
                    "shares": row.shares,
                    "position_value": row.shares * self.inputs.entry_price,
                    "risk_amount": row.risk_amount,
                    "risk_pct": row.risk_percent,
                }
                for row in self.positions
            ],
            columns=["allocation_pct", "shares", "position_value", "risk_amount", "risk_pct"],
        )

    def summary_lines(self) -> List[str]:
        """Formatted plan, one line per entry. Figures are shown to two decimals."""
        if not self.is_ready:
            labels = [FIELD_LABELS[name] for name in self.missing]
            if labels:
                return [f"Insufficient input: enter {', '.join(labels)}"]
            return ["Insufficient input: the entered values don't produce a plan"]

        lines = [
            "=" * 50,
            "TRADE PLAN",
            "=" * 50,
            f"Stop Loss: ${self.stop_price:.2f} ({self.stop_loss.label})",
            f"Profit Target: ${self.profit_target:.2f} "
            f"({self.inputs.profit_ratio:g}:1 ratio)",
            "-" * 50,
            f"{'Position Size':<28}{'Risk'}",
        ]

        for row in self.positions:
            size = f"{row.allocation_percent:g}%: {row.shares:.2f} shares"
            if self.mode is RiskMode.ALLOCATION_TABLE:
                lines.append(f"{size:<28}${row.risk_amount:.2f} ({row.risk_percent:.2f}%)")
            else:
                lines.append(size)

        if self.mode is RiskMode.FIXED_PERCENTAGE:
            lines.append("-" * 50)
            lines.append(
                f"Fixed Risk: ${self.fixed_risk_amount:,.2f} "
                f"({self.inputs.risk_percentage:g}% of portfolio)"
            )
            lines.append(f"Shares at Stop: {self.risk_based_shares}")

        lines.append("=" * 50)
        return lines

    def print_summary(self) -> None:
        """Print the plan, or an insufficient-input notice if it isn't ready."""
        for line in self.summary_lines():
            print(line)


def build_plan(
    inputs: TradeInputs,
    mode: RiskMode = RiskMode.ALLOCATION_TABLE,
    config: Optional[PlannerConfig] = None,
) -> TradePlan:
    """Compute stop, target and sizing for one snapshot of the inputs.

    The selected stop is rounded to cents before it is used for sizing and
    the profit target, so every figure agrees with the stop that's displayed.

    Args:
        inputs: Parsed trade inputs (NaN for anything missing)
        mode: Risk accounting mode
        config: Planner settings (default: 7% cap, 5/10/15/20% table)

    Returns:
        TradePlan; check `is_ready` before displaying it
    """
    if config is None:
        config = PlannerConfig()
    config.validate()

    stop_loss = compute_stop_loss(
        inputs.entry_price,
        inputs.atr_percentage,
        inputs.low_of_day,
        max_loss_pct=config.max_loss_pct,
    )
    stop_price = round(stop_loss.price, 2)

    profit_target = compute_profit_target(inputs.entry_price, stop_price, inputs.profit_ratio)
    positions = compute_position_sizing(
        inputs.portfolio_value,
        inputs.entry_price,
        stop_price,
        config.allocation_percentages,
    )

    fixed_risk_amount = None
    risk_based_shares = None
    if mode is RiskMode.FIXED_PERCENTAGE:
        fixed_risk_amount = compute_fixed_risk_amount(
            inputs.portfolio_value, inputs.risk_percentage
        )
        risk_based_shares = compute_risk_based_shares(
            fixed_risk_amount, inputs.entry_price, stop_price
        )

    missing = inputs.missing_fields(mode)
    if missing:
        logger.debug("Plan not ready, missing: %s", ", ".join(missing))
    else:
        logger.debug(
            "Stop candidates: atr=%.4f lod=%.4f cap=%.4f -> %s",
            stop_loss.atr_stop, stop_loss.lod_stop, stop_loss.cap_stop, stop_loss.label,
        )

    return TradePlan(
        inputs=inputs,
        mode=mode,
        stop_loss=stop_loss,
        stop_price=stop_price,
        profit_target=profit_target,
        positions=positions,
        fixed_risk_amount=fixed_risk_amount,
        risk_based_shares=risk_based_shares,
        missing=missing,
    )


class PlannerSession:
    """Holds the current inputs and rebuilds the plan on every change.

    Example:
        session = PlannerSession()
        session.update("entry", "100")
        plan = session.update("atr", "5")
        plan.is_ready  # False until every field is filled in
    """

    def __init__(
        self,
        inputs: Optional[TradeInputs] = None,
        mode: RiskMode = RiskMode.ALLOCATION_TABLE,
        config: Optional[PlannerConfig] = None,
    ):
        self.inputs = inputs if inputs is not None else TradeInputs()
        self.mode = mode
        self.config = config if config is not None else PlannerConfig()
        self.plan = build_plan(self.inputs, self.mode, self.config)

    @staticmethod
    def resolve_field(name: str) -> str:
        """Map a short alias ("atr") or full field name to the field name."""
        key = name.strip().lower().replace("-", "_")
        key = FIELD_ALIASES.get(key, key)
        if key not in FIELD_LABELS:
            valid = ", ".join(sorted(set(FIELD_ALIASES) | set(FIELD_LABELS)))
            raise ValueError(f"Unknown field: {name!r} (expected one of: {valid})")
        return key

    def update(self, name: str, value: Number) -> TradePlan:
        """Replace one input and return the freshly built plan."""
        key = self.resolve_field(name)
        self.inputs = self.inputs.with_changes(**{key: value})
        self.plan = build_plan(self.inputs, self.mode, self.config)
        return self.plan

    def set_mode(self, mode: RiskMode) -> TradePlan:
        """Switch risk mode and rebuild the plan."""
        self.mode = mode
        self.plan = build_plan(self.inputs, self.mode, self.config)
        return self.plan
