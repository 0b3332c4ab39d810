"""Main entry point for trade planning."""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from trading import (
    PlannerConfig,
    PlannerSession,
    RiskMode,
    TradeInputs,
    build_plan,
    plot_trade_plan,
)
from trading.config import DEFAULT_ALLOCATIONS

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure console logging; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)-15s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def run_interactive(
    session: PlannerSession,
    input_func: Callable[[str], str] = input,
) -> None:
    """
    Edit the plan one field at a time, reprinting it after every change.

    Commands:
        field=value   update a field (e.g. entry=101.5, atr=4)
        mode=table|fixed  switch risk mode
        show          print the current plan
        quit          leave the session

    Args:
        session: Session holding the current inputs
        input_func: Prompt function (replaced in tests)
    """
    print("Enter field=value to update, 'show' to print the plan, 'quit' to exit.")
    print("Fields: portfolio, entry, atr, low, ratio, risk")

    while True:
        try:
            line = input_func("> ").strip()
        except EOFError:
            break

        if not line:
            continue
        if line.lower() in ("quit", "exit", "q"):
            break
        if line.lower() == "show":
            session.plan.print_summary()
            continue
        if "=" not in line:
            print("Expected field=value, 'show' or 'quit'")
            continue

        name, value = (part.strip() for part in line.split("=", 1))
        try:
            if name.lower() == "mode":
                plan = session.set_mode(RiskMode.from_name(value.lower()))
            else:
                plan = session.update(name, value)
        except ValueError as exc:
            print(f"Error: {exc}")
            continue

        plan.print_summary()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Trade Planner: stop loss, profit target and position sizing")
    parser.add_argument("--portfolio", type=str, help="Portfolio value ($)")
    parser.add_argument("--entry", type=str, help="Entry price ($)")
    parser.add_argument("--atr", type=str, help="ATR percentage (%%)")
    parser.add_argument("--low", type=str, help="Low of day ($)")
    parser.add_argument("--ratio", type=str, help="Profit/risk ratio")
    parser.add_argument(
        "--risk-pct",
        type=str,
        help="Percent of portfolio to risk (fixed mode only)",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in RiskMode],
        default=RiskMode.ALLOCATION_TABLE.value,
        help="Risk accounting: per-allocation table or fixed percentage (default: table)",
    )
    parser.add_argument(
        "--allocations",
        type=float,
        nargs="+",
        default=list(DEFAULT_ALLOCATIONS),
        help="Portfolio allocation percentages for the sizing table (default: 5 10 15 20)",
    )
    parser.add_argument(
        "--max-loss",
        type=float,
        default=7.0,
        help="Maximum loss from entry to stop in percent (default: 7)",
    )
    parser.add_argument("--save-csv", type=str, help="Save the sizing table to this CSV file")
    parser.add_argument("--chart", type=str, help="Save a chart of the plan to this file")
    parser.add_argument("--show", action="store_true", help="Display the chart")
    parser.add_argument("--interactive", action="store_true", help="Edit inputs field by field")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    config = PlannerConfig(
        max_loss_pct=args.max_loss,
        allocation_percentages=tuple(args.allocations),
    )
    try:
        config.validate()
    except ValueError as exc:
        parser.error(str(exc))

    mode = RiskMode.from_name(args.mode)
    logger.debug(
        "Risk mode: %s, allocations: %s, max loss: %g%%",
        mode.value, config.allocation_percentages, config.max_loss_pct,
    )
    inputs = TradeInputs.from_text(
        portfolio_value=args.portfolio,
        entry_price=args.entry,
        atr_percentage=args.atr,
        low_of_day=args.low,
        profit_ratio=args.ratio,
        risk_percentage=args.risk_pct,
    )

    if args.interactive:
        run_interactive(PlannerSession(inputs, mode, config))
        return 0

    plan = build_plan(inputs, mode, config)
    plan.print_summary()

    if not plan.is_ready:
        return 1

    if args.save_csv:
        plan.to_frame().to_csv(args.save_csv, index=False)
        print(f"\nSizing table saved to {args.save_csv}")

    if args.chart or args.show:
        plot_trade_plan(plan, save_path=args.chart, show=args.show)

    return 0


if __name__ == "__main__":
    sys.exit(main())
