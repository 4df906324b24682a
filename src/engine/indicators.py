from typing import List, Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .errors import require_period
from .models import IndicatorSeries, PricePoint

# Floor for the average loss so a pure uptrend does not divide by zero.
RSI_LOSS_FLOOR = 1e-4


def _closes(prices: Sequence[PricePoint]) -> np.ndarray:
    return np.asarray([p.close for p in prices], dtype=float)


def compute_sma(prices: Sequence[PricePoint], period: int) -> IndicatorSeries:
    """
    Simple moving average of close over a trailing window of `period` bars.

    Index i is None while i < period - 1, otherwise the mean of
    closes[i - period + 1 .. i]. A period longer than the series gives an
    all-None series.
    """
    require_period("period", period)

    n = len(prices)
    out: List = [None] * n
    if period > n:
        return out

    windows = sliding_window_view(_closes(prices), period)
    means = windows.sum(axis=1) / period
    out[period - 1:] = means.tolist()
    return out


def compute_rsi(prices: Sequence[PricePoint], period: int) -> IndicatorSeries:
    """
    Relative Strength Index over the `period` most recent close-to-close
    differences ending at each index.

      gain     = sum of positive differences in the window
      loss     = sum of |negative differences| in the window
      avg_*    = sum / period   (avg_loss floored to RSI_LOSS_FLOOR if zero)
      RSI      = 100 - 100 / (1 + avg_gain / avg_loss)

    Index i is None while i < period.
    """
    require_period("period", period)

    n = len(prices)
    out: List = [None] * n
    if period >= n:
        return out

    diffs = np.diff(_closes(prices))
    # row k holds the differences ending at price index k + period
    windows = sliding_window_view(diffs, period)

    gains = np.where(windows > 0, windows, 0.0).sum(axis=1)
    losses = np.where(windows < 0, -windows, 0.0).sum(axis=1)

    avg_gain = gains / period
    avg_loss = losses / period
    avg_loss[avg_loss == 0] = RSI_LOSS_FLOOR

    rs = avg_gain / avg_loss
    rsi = 100.0 - 100.0 / (1.0 + rs)

    out[period:] = rsi.tolist()
    return out
