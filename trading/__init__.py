"""Trade planning: stop-loss selection, profit targets and position sizing."""

from .config import PlannerConfig, RiskMode, DEFAULT_ALLOCATIONS
from .inputs import TradeInputs, parse_number
from .stops import StopLoss, StopRationale, compute_stop_loss
from .targets import compute_profit_target
from .risk import (
    PositionDetail,
    compute_position_sizing,
    compute_fixed_risk_amount,
    compute_risk_based_shares,
)
from .plan import TradePlan, PlannerSession, build_plan
from .chart import plot_trade_plan

__all__ = [
    "PlannerConfig",
    "RiskMode",
    "DEFAULT_ALLOCATIONS",
    "TradeInputs",
    "parse_number",
    "StopLoss",
    "StopRationale",
    "compute_stop_loss",
    "compute_profit_target",
    "PositionDetail",
    "compute_position_sizing",
    "compute_fixed_risk_amount",
    "compute_risk_based_shares",
    "TradePlan",
    "PlannerSession",
    "build_plan",
    "plot_trade_plan",
]
