from typing import Any, Dict, Type

from engine.errors import InvalidParameter
from .ma_crossover_rsi import MovingAverageCrossoverRSIStrategy
from .strategy import Strategy

STRATEGY_REGISTRY: Dict[str, Type[Strategy]] = {
    "ma_crossover_rsi": MovingAverageCrossoverRSIStrategy,
}


def build_strategy(name: str, params: Dict[str, Any] | None = None) -> Strategy:
    StrategyClass = STRATEGY_REGISTRY.get(name)
    if StrategyClass is None:
        raise InvalidParameter("strategy", name, "unknown strategy")
    return StrategyClass(params)
