import logging
from typing import Sequence

from .errors import require_aligned, require_position_size, require_positive_finite
from .execution import apply_signal, liquidate
from .models import BacktestResult, PricePoint, Signal
from .portfolio import PortfolioState

logger = logging.getLogger(__name__)


def run_backtest(
    prices: Sequence[PricePoint],
    signals: Sequence[Signal],
    initial_capital: float,
    position_size_pct: float,
) -> BacktestResult:
    initial_capital = require_positive_finite("initial_capital", initial_capital)
    position_size_pct = require_position_size(position_size_pct)
    require_aligned("signals", signals, len(prices))

    portfolio = PortfolioState(initial_capital)

    # Fewer than two bars: nothing to trade against, equity stays [capital]
    if len(prices) < 2:
        return BacktestResult(
            trades=[],
            equity=list(portfolio.equity),
            final_capital=initial_capital,
        )

    # index 0 seeds the equity curve; trading starts at 1
    for idx in range(1, len(prices)):
        point = prices[idx]
        apply_signal(signals[idx], point, portfolio, position_size_pct)
        portfolio.equity.append(portfolio.mark_to_market(point.close))

    liquidate(prices[-1].close, portfolio)

    logger.debug(
        "[backtest] %d bars, %d trades, final capital %.2f",
        len(prices), len(portfolio.trade_log), portfolio.cash,
    )

    return BacktestResult(
        trades=portfolio.trade_log,
        equity=portfolio.equity,
        final_capital=portfolio.cash,
    )
