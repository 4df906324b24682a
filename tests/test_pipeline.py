import pytest

from conftest import ROUND_TRIP_CLOSES, RISE_FALL_CLOSES, make_prices, make_records
from core.backtest import run_backtest, run_strategy
from engine.models import Signal
from strategies.ma_crossover_rsi import MovingAverageCrossoverRSIStrategy

ROUND_TRIP_PARAMS = {
    "fast_period": 2,
    "slow_period": 3,
    "rsi_period": 2,
    "initial_capital": 1000.0,
    "position_size_pct": 50.0,
}


class TestRunStrategy:
    def test_round_trip(self, round_trip_prices):
        report = run_strategy(MovingAverageCrossoverRSIStrategy(ROUND_TRIP_PARAMS), round_trip_prices)

        assert [t.kind for t in report.result.trades] == [Signal.BUY, Signal.SELL]
        assert report.result.final_capital == pytest.approx(1040.0)

        s = report.summary
        assert s.total_return_pct == pytest.approx(4.0)
        assert s.net_profit == pytest.approx(40.0)
        assert s.win_rate == pytest.approx(100.0)
        assert s.num_trades == 1
        assert s.completed_trades == 1
        assert s.max_drawdown_pct == pytest.approx(110.0 / 1150.0 * 100.0)

    def test_latest_snapshot(self, round_trip_prices):
        report = run_strategy(MovingAverageCrossoverRSIStrategy(ROUND_TRIP_PARAMS), round_trip_prices)
        assert report.latest_signal is Signal.SELL
        assert report.latest_close == pytest.approx(10.8)
        assert report.latest_rsi == pytest.approx(100 - 100 / (1 + 1 / 2.2))

    def test_overbought_entry_means_no_trades(self, rise_fall_prices):
        report = run_strategy(MovingAverageCrossoverRSIStrategy(ROUND_TRIP_PARAMS), rise_fall_prices)
        assert report.result.trades == []
        assert report.result.final_capital == 1000.0
        assert report.summary.total_return_pct == 0.0

    def test_crossover_only_round_trip(self, rise_fall_prices):
        params = dict(ROUND_TRIP_PARAMS, overbought=101, oversold=-1)
        report = run_strategy(MovingAverageCrossoverRSIStrategy(params), rise_fall_prices)

        shares = 500.0 / 12.0
        assert report.result.final_capital == pytest.approx(500.0 + shares * 11.0)
        assert report.summary.win_rate == 0.0

    def test_empty_series(self):
        report = run_strategy(MovingAverageCrossoverRSIStrategy(), [])
        assert report.result.equity == [10000.0]
        assert report.latest_signal is None
        assert report.latest_close is None
        assert report.latest_rsi is None

    def test_to_dict(self, round_trip_prices):
        report = run_strategy(MovingAverageCrossoverRSIStrategy(ROUND_TRIP_PARAMS), round_trip_prices)
        out = report.to_dict()

        assert out["latest"]["signal"] == "SELL"
        assert out["trades"][0]["kind"] == "BUY"
        assert out["trades"][1]["profit"] == pytest.approx(40.0)
        assert out["signals"][6] == "BUY"
        assert len(out["equity"]) == len(ROUND_TRIP_CLOSES)
        assert out["indicators"]["slow_ma"][:2] == [None, None]
        assert "returns" not in out["summary"]

        light = report.to_dict(include_series=False)
        assert "equity" not in light and "signals" not in light


class TestRunBacktest:
    def test_inline_records(self):
        config = {"prices": make_records(ROUND_TRIP_CLOSES)}
        report = run_backtest(MovingAverageCrossoverRSIStrategy(ROUND_TRIP_PARAMS), config)
        assert report.result.final_capital == pytest.approx(1040.0)

    def test_periods_per_year_from_config(self):
        strategy = MovingAverageCrossoverRSIStrategy(ROUND_TRIP_PARAMS)
        daily = run_backtest(strategy, {"prices": make_records(ROUND_TRIP_CLOSES)})
        weekly = run_backtest(
            strategy, {"prices": make_records(ROUND_TRIP_CLOSES), "periods_per_year": 52})
        assert weekly.summary.sharpe_ratio == pytest.approx(
            daily.summary.sharpe_ratio * (52 / 252) ** 0.5)

    def test_repeatable(self):
        strategy = MovingAverageCrossoverRSIStrategy(ROUND_TRIP_PARAMS)
        prices = make_prices(RISE_FALL_CLOSES)
        assert run_strategy(strategy, prices).result == run_strategy(strategy, prices).result
