"""CLI entry point for the backtest host.

Usage:
    python -m sma_backtest --candles data/btc_1h.csv
    python -m sma_backtest --candles data/btc_1h.csv --short 5 --long 20 -o results.json
    python -m sma_backtest --candles data/btc_1h.csv --fixed-amount 1000 --take-profit 0.08
"""

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation

from sma_core.strategy import create_strategy

from sma_backtest.config import get_backtest_settings
from sma_backtest.engine import BacktestEngine
from sma_backtest.report import ReportFormatter
from sma_backtest.stats import StatisticsCalculator
from sma_backtest.storage import load_candles_csv


def parse_decimal(value: str) -> Decimal:
    """Parse a decimal CLI argument."""
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m sma_backtest",
        description="Backtest the SMA crossover strategy over a CSV of candles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Defaults come from SMA_BACKTEST_* environment variables (or .env).

Examples:
  python -m sma_backtest --candles data/btc_1h.csv
  python -m sma_backtest --candles data/btc_1h.csv --short 5 --long 20 -o results.json
        """,
    )
    parser.add_argument(
        "--candles",
        type=str,
        required=True,
        help="CSV file with open,high,low,close[,timestamp,volume] columns",
    )
    parser.add_argument("--strategy", type=str, default=None, help="Registered strategy name")

    # Strategy parameters
    parser.add_argument("--short", type=int, default=None, help="Short SMA period")
    parser.add_argument("--long", type=int, default=None, help="Long SMA period")
    parser.add_argument(
        "--stop-loss", type=parse_decimal, default=None,
        help="Stop-loss as a fraction of entry price (e.g. 0.02)",
    )
    parser.add_argument(
        "--take-profit", type=parse_decimal, default=None,
        help="Take-profit as a fraction of entry price (e.g. 0.05)",
    )
    parser.add_argument(
        "--order-size", type=parse_decimal, default=None,
        help="Fraction of available capital per entry (e.g. 0.5)",
    )

    # Account
    parser.add_argument("--capital", type=parse_decimal, default=None, help="Initial capital")
    parser.add_argument(
        "--fixed-amount", type=parse_decimal, default=None,
        help="Fixed capital per trade (0 = use order size)",
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file path for JSON results",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Run a backtest; returns the process exit code."""
    try:
        settings = get_backtest_settings()
        config = settings.to_strategy_config(
            short_period=args.short,
            long_period=args.long,
            stop_loss_pct=args.stop_loss,
            take_profit_pct=args.take_profit,
            order_size_pct=args.order_size,
        )
        strategy = create_strategy(args.strategy or settings.strategy_name)
        engine = BacktestEngine(
            strategy=strategy,
            config=config,
            initial_capital=args.capital if args.capital is not None else settings.initial_capital,
            fixed_trade_amount=(
                args.fixed_amount if args.fixed_amount is not None else settings.fixed_trade_amount
            ),
        )
        candles = load_candles_csv(args.candles)
    except (KeyError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    print(f"\nBacktest: {args.candles} ({len(candles)} candles)")
    print(f"Strategy: {strategy.name} v{strategy.version}")
    print(f"SMA periods: {config.short_period}/{config.long_period}")

    result = StatisticsCalculator().calculate(engine.run(candles))
    ReportFormatter.print_console(result)

    if args.output:
        ReportFormatter.save_json(result, args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
