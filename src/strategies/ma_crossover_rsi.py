# src/strategies/ma_crossover_rsi.py

from typing import Any, Dict, Sequence

from engine.errors import require_finite
from engine.indicators import compute_rsi, compute_sma
from engine.models import PricePoint, StrategyParameters
from engine.signals import RSI_OVERBOUGHT, RSI_OVERSOLD, generate_signals
from .strategy import Strategy, StrategySignals


class MovingAverageCrossoverRSIStrategy(Strategy):
    """
    Go long when the fast SMA crosses above the slow SMA and RSI is not
    overbought; exit when it crosses back below and RSI is not oversold.
    """

    def __init__(self, params: Dict[str, Any] | None = None):
        super().__init__(params)

        self.fast_period: int = self.params.get("fast_period", 10)
        self.slow_period: int = self.params.get("slow_period", 30)
        self.rsi_period: int = self.params.get("rsi_period", 14)

        self.initial_capital: float = self.params.get("initial_capital", 10000.0)
        self.position_size_pct: float = self.params.get("position_size_pct", 10.0)

        self.overbought: float = require_finite(
            "overbought", self.params.get("overbought", RSI_OVERBOUGHT))
        self.oversold: float = require_finite(
            "oversold", self.params.get("oversold", RSI_OVERSOLD))

        # fail fast on bad params rather than mid-run
        self._parameters = StrategyParameters(
            fast_period=self.fast_period,
            slow_period=self.slow_period,
            rsi_period=self.rsi_period,
            initial_capital=self.initial_capital,
            position_size_pct=self.position_size_pct,
        )

    @property
    def parameters(self) -> StrategyParameters:
        return self._parameters

    def on_prices(self, prices: Sequence[PricePoint]) -> StrategySignals:
        fast = compute_sma(prices, self.fast_period)
        slow = compute_sma(prices, self.slow_period)
        rsi = compute_rsi(prices, self.rsi_period)

        signals = generate_signals(
            prices, fast, slow, rsi,
            overbought=self.overbought,
            oversold=self.oversold,
        )

        return StrategySignals(
            signals=signals,
            indicators={"fast_ma": fast, "slow_ma": slow, "rsi": rsi},
        )
