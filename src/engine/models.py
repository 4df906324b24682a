from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .errors import require_period, require_position_size, require_positive_finite

# One value per price index; None until the window has enough history.
IndicatorSeries = List[Optional[float]]


class Signal(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


@dataclass(frozen=True)
class PricePoint:
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass(frozen=True)
class Trade:
    kind: Signal            # Signal.BUY | Signal.SELL
    price: float
    timestamp: datetime
    shares: float
    profit: Optional[float] = None  # realized on SELL only


@dataclass
class BacktestResult:
    trades: List[Trade]
    equity: List[float]     # index-aligned with the price series
    final_capital: float


@dataclass(frozen=True)
class StrategyParameters:
    fast_period: int
    slow_period: int
    rsi_period: int
    initial_capital: float
    position_size_pct: float

    def __post_init__(self):
        require_period("fast_period", self.fast_period)
        require_period("slow_period", self.slow_period)
        require_period("rsi_period", self.rsi_period)
        require_positive_finite("initial_capital", self.initial_capital)
        require_position_size(self.position_size_pct)


@dataclass
class MetricsSummary:
    total_return_pct: float
    net_profit: float
    final_capital: float
    num_trades: int            # BUY fills
    completed_trades: int      # SELL fills
    profitable_trades: int
    win_rate: float
    max_drawdown_pct: float
    volatility: float          # population stddev of per-step returns
    volatility_pct: float
    sharpe_ratio: float
    returns: List[float] = field(default_factory=list)
