"""Stop-loss selection for long entries.

Three candidate stops are computed and the highest one (smallest loss) wins:

- ATR-based:   entry * (100 - atr%) / 100
- Low of Day:  the session low, used directly
- 7% Max Loss: entry * 0.93

Candidates are compared in that order and a later candidate wins a tie, so
the max-loss cap beats both others when they are equal.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np


class StopRationale(Enum):
    """Which candidate produced the stop."""
    ATR = "ATR-based"
    LOW_OF_DAY = "Low of Day"
    MAX_LOSS_CAP = "7% Max Loss"


@dataclass(frozen=True)
class StopLoss:
    """Selected stop and the candidates it was chosen from.

    Attributes:
        price: Stop price, NaN if any input was missing
        rationale: Winning candidate, None when price is NaN
        atr_stop: Volatility stop candidate
        lod_stop: Low-of-day candidate
        cap_stop: Max-loss cap candidate
        max_loss_pct: Cap used for cap_stop, in percent
    """
    price: float
    rationale: Optional[StopRationale]
    atr_stop: float = np.nan
    lod_stop: float = np.nan
    cap_stop: float = np.nan
    max_loss_pct: float = 7.0

    @property
    def is_valid(self) -> bool:
        return self.rationale is not None and math.isfinite(self.price)

    @property
    def label(self) -> str:
        """Display text for the rationale, e.g. "ATR-based"."""
        if self.rationale is None:
            return ""
        if self.rationale is StopRationale.MAX_LOSS_CAP:
            return f"{self.max_loss_pct:g}% Max Loss"
        return self.rationale.value


def compute_stop_loss(
    entry_price: float,
    atr_percentage: float,
    low_of_day: float,
    max_loss_pct: float = 7.0,
) -> StopLoss:
    """Pick the highest of the ATR, low-of-day and max-loss stops.

    Args:
        entry_price: Intended entry price
        atr_percentage: ATR as a percentage of price (5 means 5%)
        low_of_day: Session low price
        max_loss_pct: Loss cap in percent of entry

    Returns:
        StopLoss with price NaN and no rationale if any input is NaN
    """
    atr_stop = entry_price * ((100 - atr_percentage) / 100)
    lod_stop = low_of_day
    cap_stop = entry_price * ((100 - max_loss_pct) / 100)

    candidates = [
        (atr_stop, StopRationale.ATR),
        (lod_stop, StopRationale.LOW_OF_DAY),
        (cap_stop, StopRationale.MAX_LOSS_CAP),
    ]

    if any(math.isnan(price) for price, _ in candidates):
        return StopLoss(
            price=np.nan,
            rationale=None,
            atr_stop=atr_stop,
            lod_stop=lod_stop,
            cap_stop=cap_stop,
            max_loss_pct=max_loss_pct,
        )

    price, rationale = candidates[0]
    for candidate, tag in candidates[1:]:
        if candidate >= price:
            price, rationale = candidate, tag

    return StopLoss(
        price=price,
        rationale=rationale,
        atr_stop=atr_stop,
        lod_stop=lod_stop,
        cap_stop=cap_stop,
        max_loss_pct=max_loss_pct,
    )
