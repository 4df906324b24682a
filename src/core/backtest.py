import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from engine.backtest import run_backtest as simulate
from engine.metrics import compute_metrics
from engine.models import BacktestResult, MetricsSummary, PricePoint, Signal, StrategyParameters
from data.prices.load_prices import load_prices_for_config
from strategies.strategy import Strategy
from .config import PERIODS_PER_YEAR

logger = logging.getLogger(__name__)


@dataclass
class BacktestReport:
    parameters: StrategyParameters
    prices: List[PricePoint]
    signals: List[Signal]
    indicators: Dict[str, List[Optional[float]]]
    result: BacktestResult
    summary: MetricsSummary

    @property
    def latest_signal(self) -> Optional[Signal]:
        return self.signals[-1] if self.signals else None

    @property
    def latest_close(self) -> Optional[float]:
        return self.prices[-1].close if self.prices else None

    @property
    def latest_rsi(self) -> Optional[float]:
        rsi = self.indicators.get("rsi") or []
        return rsi[-1] if rsi else None

    def to_dict(self, include_series: bool = True) -> Dict[str, Any]:
        summary = asdict(self.summary)
        summary.pop("returns", None)

        out: Dict[str, Any] = {
            "parameters": asdict(self.parameters),
            "summary": summary,
            "latest": {
                "signal": self.latest_signal.value if self.latest_signal else None,
                "close": self.latest_close,
                "rsi": self.latest_rsi,
            },
            "trades": [
                {
                    "kind": t.kind.value,
                    "price": t.price,
                    "timestamp": t.timestamp.isoformat(),
                    "shares": t.shares,
                    "profit": t.profit,
                }
                for t in self.result.trades
            ],
        }

        if include_series:
            out["timestamps"] = [p.timestamp.isoformat() for p in self.prices]
            out["close"] = [p.close for p in self.prices]
            out["signals"] = [s.value for s in self.signals]
            out["indicators"] = self.indicators
            out["equity"] = self.result.equity

        return out


def run_strategy(
    strategy: Strategy,
    prices: Sequence[PricePoint],
    periods_per_year: float = PERIODS_PER_YEAR,
) -> BacktestReport:
    params = strategy.parameters
    prices = list(prices)

    output = strategy.on_prices(prices)
    result = simulate(
        prices,
        output.signals,
        params.initial_capital,
        params.position_size_pct,
    )
    summary = compute_metrics(result, params.initial_capital, periods_per_year)

    logger.info(
        "[backtest] %s: %d bars, %d trades, return %.2f%%, max DD %.2f%%",
        type(strategy).__name__,
        len(prices),
        len(result.trades),
        summary.total_return_pct,
        summary.max_drawdown_pct,
    )

    return BacktestReport(
        parameters=params,
        prices=prices,
        signals=output.signals,
        indicators=output.indicators,
        result=result,
        summary=summary,
    )


def run_backtest(strategy: Strategy, config: Dict[str, Any]) -> BacktestReport:
    prices = load_prices_for_config(config)
    periods_per_year = config.get("periods_per_year", PERIODS_PER_YEAR)
    return run_strategy(strategy, prices, periods_per_year)
