# src/app/backtests.py

from dataclasses import asdict

from flask import Blueprint, request, jsonify
from core.backtest import run_backtest
from core.config import DEFAULT_STRATEGY
from data.prices.markets import MARKET_OPTIONS
from engine.errors import InvalidParameter
from strategies.registry import STRATEGY_REGISTRY, build_strategy

bp = Blueprint("backtests", __name__)


@bp.errorhandler(InvalidParameter)
def _invalid_parameter(e: InvalidParameter):
    return jsonify({"error": str(e), "parameter": e.name}), 400


@bp.errorhandler(FileNotFoundError)
def _missing_prices(e: FileNotFoundError):
    return jsonify({"error": str(e)}), 404


@bp.route("/strategies", methods=["GET"])
def list_strategies():
    return jsonify({
        name: asdict(StrategyClass().parameters)
        for name, StrategyClass in STRATEGY_REGISTRY.items()
    })


@bp.route("/markets", methods=["GET"])
def list_markets():
    return jsonify(MARKET_OPTIONS)


@bp.route("/backtests", methods=["POST"])
def create_backtest():
    data = request.get_json(silent=True) or {}

    strategy_name = data.get("strategy", DEFAULT_STRATEGY)
    params = data.get("params", {})
    config = data.get("config", {})
    include_series = data.get("include_series", True)

    if not isinstance(params, dict) or not isinstance(config, dict):
        return jsonify({"error": "params and config must be objects"}), 400
    if not isinstance(include_series, bool):
        raise InvalidParameter("include_series", include_series, "must be a boolean")

    strategy = build_strategy(strategy_name, params)
    report = run_backtest(strategy, config)

    # Nothing is persisted; the caller keeps the result
    response = {
        "strategy": strategy_name,
        "num_trades": len(report.result.trades),
        **report.to_dict(include_series=include_series),
    }

    return jsonify(response)
