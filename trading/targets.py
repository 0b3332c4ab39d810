"""Profit target from a reward-to-risk multiple."""


def compute_profit_target(
    entry_price: float,
    stop_loss_price: float,
    profit_ratio: float,
) -> float:
    """Price that makes `profit_ratio` times the risk taken.

    A 2:1 ratio with entry 100 and stop 95 risks 5 to make 10, so the target
    is 110. NaN inputs give a NaN target.
    """
    risk = entry_price - stop_loss_price
    return entry_price + risk * profit_ratio
