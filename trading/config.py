"""Planner configuration: stop cap, allocation table and risk mode."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class RiskMode(Enum):
    """How risk is reported alongside the plan.

    ALLOCATION_TABLE reads risk off each row of the allocation table.
    FIXED_PERCENTAGE takes a single risk percentage of the portfolio,
    independent of the table.
    """
    ALLOCATION_TABLE = "table"
    FIXED_PERCENTAGE = "fixed"

    @classmethod
    def from_name(cls, name: str) -> "RiskMode":
        """Look up a mode by its short name ("table" or "fixed")."""
        for mode in cls:
            if mode.value == name or mode.name == name:
                return mode
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown risk mode: {name!r} (expected one of: {valid})")


DEFAULT_ALLOCATIONS: Tuple[float, ...] = (5, 10, 15, 20)


@dataclass(frozen=True)
class PlannerConfig:
    """Settings shared by every plan.

    Attributes:
        max_loss_pct: Hard cap on the loss from entry to stop, in percent
        allocation_percentages: Portfolio percentages shown in the sizing table
    """
    max_loss_pct: float = 7.0
    allocation_percentages: Tuple[float, ...] = DEFAULT_ALLOCATIONS

    def validate(self) -> None:
        """Raise ValueError if the configuration can't produce a plan."""
        if not 0 < self.max_loss_pct < 100:
            raise ValueError(
                f"max_loss_pct must be between 0 and 100, got {self.max_loss_pct}"
            )
        if not self.allocation_percentages:
            raise ValueError("allocation_percentages must not be empty")
        bad = [p for p in self.allocation_percentages if p <= 0]
        if bad:
            raise ValueError(f"Allocation percentages must be positive: {bad}")
