#!/usr/bin/env python3
"""
CLI tool for calculating trading metrics.
Usage: python trading/show_metrics.py COMMAND [options]
"""

import os
import sys
import json
import math
import logging
import argparse
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from trading.trade_store import TradeStore
from trading.metrics_aggregator import compose_trade_metrics
from trading.calculations.ratios import (
    calculate_dividend_yield,
    calculate_pe_ratio,
    COMMON,
    PREFERRED
)

load_dotenv()

logger = logging.getLogger(__name__)


def _setup_logging() -> None:
    """Configure logging from TRADING_LOG_LEVEL."""
    log_level = os.getenv('TRADING_LOG_LEVEL', 'WARNING').upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Calculate stock trading metrics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python trading/show_metrics.py dividend-yield 100 Common --last-dividend 8
  python trading/show_metrics.py dividend-yield 100 Preferred --fixed-dividend 0.02 --par-value 100
  python trading/show_metrics.py pe-ratio 100 8
  python trading/show_metrics.py trades --trade "2024-01-01 10:00:00" 100 B 50 --format json
        """
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    dy = subparsers.add_parser('dividend-yield', help='Dividend yield for a stock')
    dy.add_argument('price', type=int, help='Stock price')
    dy.add_argument('trade_type', help=f'{COMMON} or {PREFERRED}')
    dy.add_argument('--last-dividend', type=float, default=0.0,
                    help='Last dividend (Common)')
    dy.add_argument('--fixed-dividend', type=float, default=0.0,
                    help='Fixed dividend rate (Preferred)')
    dy.add_argument('--par-value', type=int, default=0,
                    help='Par value (Preferred)')

    pe = subparsers.add_parser('pe-ratio', help='P/E ratio for a stock')
    pe.add_argument('price', type=int, help='Stock price')
    pe.add_argument('dividend', type=float, help='Dividend')

    tr = subparsers.add_parser('trades', help='VWAP and geometric mean for a set of trades')
    tr.add_argument('--trade',
                    nargs=4,
                    action='append',
                    default=[],
                    metavar=('TIMESTAMP', 'QUANTITY', 'SIDE', 'PRICE'),
                    help='Trade to record (repeatable), timestamp as "YYYY-MM-DD HH:MM:SS"')
    tr.add_argument('--window-minutes', type=int,
                    help='VWAP window in minutes (default: TRADE_VWAP_WINDOW_MINUTES or 15)')
    tr.add_argument('--format',
                    choices=['summary', 'full', 'json'],
                    default='summary',
                    help='Output format (default: summary)')

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    _setup_logging()
    args = build_parser().parse_args(argv)

    try:
        if args.command == 'dividend-yield':
            result = calculate_dividend_yield(
                args.price,
                args.trade_type,
                args.last_dividend,
                args.fixed_dividend,
                args.par_value
            )
            print(f"Dividend Yield ({args.trade_type}): {result:.6f}")

        elif args.command == 'pe-ratio':
            result = calculate_pe_ratio(args.price, args.dividend)
            print(f"P/E Ratio: {result:.6f}")

        else:
            store = _build_store(args.trade, args.window_minutes)
            metrics = compose_trade_metrics(store)

            if args.format == 'json':
                print(_to_json(metrics))
            elif args.format == 'full':
                _display_full_metrics(store, metrics)
            else:
                _display_summary_metrics(metrics)

    # InvalidTradeTypeError and TimestampFormatError are ValueErrors, as is a non-integer QUANTITY/PRICE
    except (ValueError, ZeroDivisionError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0


def _build_store(raw_trades, window_minutes) -> TradeStore:
    store = TradeStore(window_minutes=window_minutes)
    for timestamp, quantity, side, price in raw_trades:
        store.record_trade(timestamp, int(quantity), side, int(price))
    logger.info(f"Loaded {len(store)} trades")
    return store


def _to_json(metrics: dict) -> str:
    """Strict JSON: NaN/inf (e.g. geometric mean of a negative product) become null."""
    def _clean(value):
        if isinstance(value, dict):
            return {k: _clean(v) for k, v in value.items()}
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value

    return json.dumps(_clean(metrics), indent=2, allow_nan=False)


def _display_summary_metrics(metrics: dict):
    """Display concise summary of trade metrics."""
    print(f"Trade Metrics (as of {metrics['as_of']})")
    print("=" * 50)
    print(f"Trades recorded: {metrics['trade_count']}")
    print(f"Trades in last {metrics['window_minutes']} minutes: {metrics['window_trade_count']}")

    vwap = metrics['volume_weighted_price']
    if vwap is not None:
        print(f"Volume Weighted Stock Price: {vwap:.4f}")
    else:
        print("Volume Weighted Stock Price: No Trades Found")

    geo_mean = metrics['geometric_mean']
    if geo_mean is not None:
        print(f"Geometric Mean: {geo_mean:.4f}")
    else:
        print("Geometric Mean: No Trades Found")

    print(f"Buy volume: {metrics['buy_volume']}  Sell volume: {metrics['sell_volume']}")


def _display_full_metrics(store: TradeStore, metrics: dict):
    """Display trade table followed by complete metrics."""
    frame = store.to_dataframe()
    if frame.empty:
        print("No trades recorded")
    else:
        print(frame.to_string(index=False))
    print()
    print(_to_json(metrics))


if __name__ == '__main__':
    sys.exit(main())
