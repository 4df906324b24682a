from datetime import datetime, timedelta, timezone

import pytest

from engine.models import PricePoint

START = datetime(2024, 1, 1, tzinfo=timezone.utc)

# Full round trip with fast=2, slow=3, rsi=2: BUY at index 6, SELL at index 9
ROUND_TRIP_CLOSES = [10, 12, 11, 10, 9, 11, 10, 12, 13, 10.8]

# Steady rise then fall; RSI(2) pins to the extremes at every crossover
RISE_FALL_CLOSES = [10, 10, 10, 12, 12, 14, 14, 11, 11, 9]


def make_prices(closes):
    return [
        PricePoint(
            timestamp=START + timedelta(days=i),
            open=float(c),
            high=float(c),
            low=float(c),
            close=float(c),
            volume=0.0,
        )
        for i, c in enumerate(closes)
    ]


def make_records(closes):
    return [
        {"timestamp": (START + timedelta(days=i)).isoformat(), "close": c}
        for i, c in enumerate(closes)
    ]


@pytest.fixture
def round_trip_prices():
    return make_prices(ROUND_TRIP_CLOSES)


@pytest.fixture
def rise_fall_prices():
    return make_prices(RISE_FALL_CLOSES)
