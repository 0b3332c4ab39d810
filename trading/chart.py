"""Chart of a trade plan: price levels plus risk per allocation."""

from typing import Optional

import matplotlib.pyplot as plt

from .config import RiskMode
from .plan import TradePlan


def plot_trade_plan(
    plan: TradePlan,
    title: str = "Trade Plan",
    save_path: Optional[str] = None,
    show: bool = True
):
    """Plot the plan's price levels and the risk of each allocation.

    Args:
        plan: A ready TradePlan from build_plan()
        title: Chart title
        save_path: Path to save chart (optional)
        show: Whether to display the chart

    Returns:
        The matplotlib Figure
    """
    if not plan.is_ready:
        raise ValueError("Cannot plot a trade plan with missing inputs")

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6),
                                   gridspec_kw={'width_ratios': [2, 3]})

    entry = plan.inputs.entry_price
    stop = plan.stop_loss

    # Price ladder
    levels = [
        ("Profit Target", plan.profit_target, "green", "-"),
        ("Entry", entry, "blue", "-"),
        ("ATR Stop", stop.atr_stop, "orange", ":"),
        ("Low of Day", stop.lod_stop, "purple", ":"),
        (f"{stop.max_loss_pct:g}% Cap", stop.cap_stop, "gray", ":"),
        (f"Stop ({stop.label})", plan.stop_price, "red", "-"),
    ]
    for label, price, color, style in levels:
        ax1.axhline(price, color=color, linestyle=style, linewidth=2 if style == "-" else 1)
        ax1.text(1.01, price, f"{label}: ${price:.2f}", color=color,
                 transform=ax1.get_yaxis_transform(), va="center", fontsize=9)

    ax1.axhspan(plan.stop_price, entry, color="red", alpha=0.1)
    ax1.axhspan(entry, plan.profit_target, color="green", alpha=0.1)

    prices = [price for _, price, _, _ in levels]
    padding = (max(prices) - min(prices)) * 0.1 or entry * 0.01
    ax1.set_ylim(min(prices) - padding, max(prices) + padding)
    ax1.set_xticks([])
    ax1.set_ylabel("Price")
    ax1.set_title(f"{title}\n{plan.inputs.profit_ratio:g}:1 reward/risk")
    ax1.grid(True, axis="y", alpha=0.3)

    # Risk per allocation
    table = plan.to_frame()
    labels = [f"{pct:g}%" for pct in table["allocation_pct"]]
    bars = ax2.bar(labels, table["risk_amount"], color="orange", alpha=0.7)
    for bar, shares, risk_pct in zip(bars, table["shares"], table["risk_pct"]):
        ax2.text(bar.get_x() + bar.get_width() / 2, bar.get_height(),
                 f"{shares:.2f} sh\n{risk_pct:.2f}%", ha="center", va="bottom", fontsize=9)

    if plan.mode is RiskMode.FIXED_PERCENTAGE:
        ax2.axhline(plan.fixed_risk_amount, color="red", linestyle="dashed",
                    label=f"Fixed risk ${plan.fixed_risk_amount:,.2f}")
        ax2.legend()

    ax2.set_xlabel("Portfolio Allocation")
    ax2.set_ylabel("Risk ($)")
    ax2.set_title("Risk by Position Size")
    ax2.grid(True, axis="y", alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150)
        print(f"Chart saved to: {save_path}")

    if show:
        plt.show(block=False)
        plt.pause(0.1)

    return fig
