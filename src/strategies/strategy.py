from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from engine.models import IndicatorSeries, PricePoint, Signal, StrategyParameters


@dataclass
class StrategySignals:
    signals: List[Signal]
    indicators: Dict[str, IndicatorSeries] = field(default_factory=dict)


class Strategy:
    def __init__(self, params: Dict[str, Any] | None = None):
        self.params = params or {}

    @property
    def parameters(self) -> StrategyParameters:
        raise NotImplementedError

    def on_prices(
        self,
        prices: Sequence[PricePoint],   # ascending by timestamp
    ) -> StrategySignals:
        """
        Called once per backtest with the full price series.
        Must return one signal per price point plus the indicator
        series the signals were derived from.
        """
        raise NotImplementedError
