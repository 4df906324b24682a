import math
from typing import List, Sequence

import numpy as np

from .errors import require_positive_finite
from .models import BacktestResult, MetricsSummary, Signal

# Daily bars
DEFAULT_PERIODS_PER_YEAR = 252.0


def compute_metrics(
    result: BacktestResult,
    initial_capital: float,
    periods_per_year: float = DEFAULT_PERIODS_PER_YEAR,
) -> MetricsSummary:
    initial_capital = require_positive_finite("initial_capital", initial_capital)
    periods_per_year = require_positive_finite("periods_per_year", periods_per_year)

    final = result.final_capital
    net_profit = final - initial_capital
    total_return_pct = net_profit / initial_capital * 100.0

    buys = [t for t in result.trades if t.kind == Signal.BUY]
    sells = [t for t in result.trades if t.kind == Signal.SELL]
    wins = [t for t in sells if t.profit is not None and t.profit > 0]
    win_rate = (len(wins) / len(sells) * 100.0) if sells else 0.0

    returns = _step_returns(result.equity)
    volatility, sharpe = _volatility_and_sharpe(returns, periods_per_year)

    return MetricsSummary(
        total_return_pct=total_return_pct,
        net_profit=net_profit,
        final_capital=final,
        num_trades=len(buys),
        completed_trades=len(sells),
        profitable_trades=len(wins),
        win_rate=win_rate,
        max_drawdown_pct=_max_drawdown_pct(result.equity),
        volatility=volatility,
        volatility_pct=volatility * 100.0,
        sharpe_ratio=sharpe,
        returns=returns,
    )


def _max_drawdown_pct(values: Sequence[float]) -> float:
    if not values:
        return 0.0

    peak = values[0]
    max_dd = 0.0
    for v in values:
        peak = max(peak, v)
        if peak <= 0:
            continue
        max_dd = max(max_dd, (peak - v) / peak * 100.0)
    return max_dd


def _step_returns(equity: Sequence[float]) -> List[float]:
    return [
        (equity[i] - equity[i - 1]) / equity[i - 1]
        for i in range(1, len(equity))
    ]


def _volatility_and_sharpe(returns: List[float], periods_per_year: float):
    if not returns:
        return 0.0, 0.0

    arr = np.asarray(returns, dtype=float)
    std = float(arr.std())  # population (ddof=0)
    if std <= 0:
        return std, 0.0

    sharpe = float(arr.mean()) / std * math.sqrt(periods_per_year)
    return std, sharpe
