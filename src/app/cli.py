from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict

from core.backtest import run_backtest
from core.config import DEFAULT_STRATEGY, LOG_LEVEL, PERIODS_PER_YEAR
from engine.errors import InvalidParameter
from strategies.registry import STRATEGY_REGISTRY, build_strategy


def _parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Run an SMA crossover + RSI backtest over one price series."
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--symbol", help="Market pair, e.g. EUR/USD (read from PRICES_DIR).")
    src.add_argument("--path", help="CSV or JSON price file.")

    p.add_argument(
        "--strategy",
        default=DEFAULT_STRATEGY,
        choices=sorted(STRATEGY_REGISTRY),
    )
    p.add_argument("--fast", type=int, default=10, help="Fast SMA period.")
    p.add_argument("--slow", type=int, default=30, help="Slow SMA period.")
    p.add_argument("--rsi", type=int, default=14, help="RSI period.")
    p.add_argument("--capital", type=float, default=10000.0, help="Initial capital.")
    p.add_argument(
        "--position-size",
        type=float,
        default=10.0,
        help="Percent of cash committed per BUY, in (0, 100].",
    )
    p.add_argument(
        "--periods-per-year",
        type=float,
        default=PERIODS_PER_YEAR,
        help="Sharpe annualisation factor (252 for daily bars).",
    )
    p.add_argument("--start", help="Inclusive start timestamp.")
    p.add_argument("--end", help="Inclusive end timestamp.")
    p.add_argument(
        "--series",
        action="store_true",
        help="Include full price/indicator/equity series in the output.",
    )
    return p.parse_args(argv)


def _build_config(args: argparse.Namespace) -> Dict[str, Any]:
    config: Dict[str, Any] = {"periods_per_year": args.periods_per_year}
    if args.symbol:
        config["symbol"] = args.symbol
    if args.path:
        config["path"] = args.path
    if args.start:
        config["start"] = args.start
    if args.end:
        config["end"] = args.end
    return config


def main(argv=None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    params = {
        "fast_period": args.fast,
        "slow_period": args.slow,
        "rsi_period": args.rsi,
        "initial_capital": args.capital,
        "position_size_pct": args.position_size,
    }

    try:
        strategy = build_strategy(args.strategy, params)
        report = run_backtest(strategy, _build_config(args))
    except (InvalidParameter, FileNotFoundError) as e:
        print(f"[backtest] ERROR: {e}", file=sys.stderr)
        return 2

    print(json.dumps(report.to_dict(include_series=args.series), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
