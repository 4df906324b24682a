from typing import List, Optional, Sequence

from .errors import require_aligned, require_finite
from .models import IndicatorSeries, PricePoint, Signal

RSI_OVERBOUGHT = 70.0
RSI_OVERSOLD = 30.0


def generate_signals(
    prices: Sequence[PricePoint],
    fast_ma: IndicatorSeries,
    slow_ma: IndicatorSeries,
    rsi: IndicatorSeries,
    overbought: float = RSI_OVERBOUGHT,
    oversold: float = RSI_OVERSOLD,
) -> List[Signal]:
    """
    One signal per price index from a fast/slow SMA crossover confirmed by RSI.

      BUY  : fast crosses above slow (prev fast <= prev slow, now fast > slow)
             and RSI < overbought
      SELL : fast crosses below slow (prev fast >= prev slow, now fast < slow)
             and RSI > oversold
      HOLD : anything else, including index 0 and any index where a current
             or previous MA reading (or the current RSI) is missing

    Missing readings are checked with `is None`, so 0.0 is a real value.
    """
    overbought = require_finite("overbought", overbought)
    oversold = require_finite("oversold", oversold)

    n = len(prices)
    require_aligned("fast_ma", fast_ma, n)
    require_aligned("slow_ma", slow_ma, n)
    require_aligned("rsi", rsi, n)

    signals: List[Signal] = []
    for i in range(n):
        if i == 0:
            signals.append(Signal.HOLD)
            continue
        signals.append(
            _signal_at(
                fast_ma[i - 1], slow_ma[i - 1],
                fast_ma[i], slow_ma[i], rsi[i],
                overbought, oversold,
            )
        )
    return signals


def _signal_at(
    prev_fast: Optional[float],
    prev_slow: Optional[float],
    curr_fast: Optional[float],
    curr_slow: Optional[float],
    curr_rsi: Optional[float],
    overbought: float,
    oversold: float,
) -> Signal:
    if None in (prev_fast, prev_slow, curr_fast, curr_slow, curr_rsi):
        return Signal.HOLD

    # the two crossovers need opposite current orderings, so at most one fires
    if prev_fast <= prev_slow and curr_fast > curr_slow and curr_rsi < overbought:
        return Signal.BUY
    if prev_fast >= prev_slow and curr_fast < curr_slow and curr_rsi > oversold:
        return Signal.SELL
    return Signal.HOLD
