from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import numpy as np
import pandas as pd

from core.config import PRICES_DIR
from engine.errors import InvalidParameter
from engine.models import PricePoint
from .markets import symbol_to_stem

logger = logging.getLogger(__name__)

TIMESTAMP_COLUMNS = ("timestamp", "date", "time", "datetime")


def _read_file(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".json":
        with open(path, "r") as f:
            raw = json.load(f)
        if not isinstance(raw, list):
            raise InvalidParameter("path", str(path), "JSON price file must hold a list")
        return pd.DataFrame(raw)
    return pd.read_csv(path)


def _resolve_symbol_path(symbol: str, prices_dir: Path) -> Path:
    stem = symbol_to_stem(symbol)
    for suffix in (".csv", ".json"):
        path = prices_dir / f"{stem}{suffix}"
        if path.exists():
            return path
    raise FileNotFoundError(
        f"No price file for symbol {symbol!r} in {prices_dir} ({stem}.csv / {stem}.json)")


def _parse_timestamps(col: pd.Series) -> pd.Series:
    # numeric timestamps are epoch milliseconds
    if pd.api.types.is_numeric_dtype(col):
        return pd.to_datetime(col, unit="ms", utc=True, errors="coerce")
    return pd.to_datetime(col, utc=True, errors="coerce")


def _to_finite(col: pd.Series) -> pd.Series:
    # unparseable and infinite values both become NaN
    values = pd.to_numeric(col, errors="coerce").astype(float)
    return values.where(np.isfinite(values))


def frame_to_prices(df: pd.DataFrame) -> List[PricePoint]:
    """
    Turn an OHLCV frame into a clean, ascending price series:
      - rows without a parseable timestamp or a finite positive close are dropped
      - open/high/low default to close, volume to 0
      - duplicate timestamps keep the last row
    """
    if df.empty:
        return []

    df = df.rename(columns={c: str(c).strip().lower() for c in df.columns})

    ts_col = next((c for c in TIMESTAMP_COLUMNS if c in df.columns), None)
    if ts_col is None:
        raise InvalidParameter(
            "columns", list(df.columns), f"need one of {TIMESTAMP_COLUMNS}")
    if "close" not in df.columns:
        raise InvalidParameter("columns", list(df.columns), "need a close column")

    out = pd.DataFrame({"timestamp": _parse_timestamps(df[ts_col])})
    out["close"] = _to_finite(df["close"])
    for col in ("open", "high", "low"):
        if col in df.columns:
            out[col] = _to_finite(df[col]).fillna(out["close"])
        else:
            out[col] = out["close"]
    if "volume" in df.columns:
        out["volume"] = _to_finite(df["volume"]).fillna(0.0)
    else:
        out["volume"] = 0.0

    valid = out["timestamp"].notna() & out["close"].notna() & (out["close"] > 0)
    dropped = int((~valid).sum())
    if dropped:
        logger.warning(
            "[load_prices] dropped %d rows without a timestamp or finite positive close", dropped)
    out = out[valid]

    before = len(out)
    out = (
        out.sort_values("timestamp", kind="stable")
        .drop_duplicates(subset="timestamp", keep="last")
        .reset_index(drop=True)
    )
    if len(out) < before:
        logger.warning(
            "[load_prices] dropped %d duplicate timestamps", before - len(out))

    return [
        PricePoint(
            timestamp=row.timestamp.to_pydatetime(),
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=float(row.volume),
        )
        for row in out.itertuples(index=False)
    ]


def prices_from_records(records: List[Dict[str, Any]]) -> List[PricePoint]:
    if not isinstance(records, list):
        raise InvalidParameter("prices", type(records).__name__, "must be a list of records")
    clean = [r for r in records if isinstance(r, dict)]
    return frame_to_prices(pd.DataFrame(clean))


def _as_utc(name: str, value: Any):
    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError):
        raise InvalidParameter(name, value, "not a timestamp") from None
    if pd.isna(ts):
        raise InvalidParameter(name, value, "not a timestamp")
    ts = ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")
    return ts.to_pydatetime()


def _filter_range(prices: List[PricePoint], start: Any, end: Any) -> List[PricePoint]:
    if start is not None:
        lo = _as_utc("start", start)
        prices = [p for p in prices if p.timestamp >= lo]
    if end is not None:
        hi = _as_utc("end", end)
        prices = [p for p in prices if p.timestamp <= hi]
    return prices


def load_prices_for_config(
    config: Dict[str, Any],
    prices_dir: Path | None = None,
) -> List[PricePoint]:
    """
    Load a price series based on config.

    Config (first match wins):
      - config["prices"] = inline list of OHLCV records
      - config["path"]   = CSV or JSON file
      - config["symbol"] = market pair, read from <prices_dir>/<EUR_USD>.csv|json

    Optional config["start"] / config["end"] bound the series (inclusive).
    """
    if config.get("prices") is not None:
        prices = prices_from_records(config["prices"])
        source = "inline records"
    elif config.get("path"):
        path = Path(config["path"])
        if not path.exists():
            raise FileNotFoundError(f"Price file not found: {path}")
        prices = frame_to_prices(_read_file(path))
        source = str(path)
    elif config.get("symbol"):
        path = _resolve_symbol_path(config["symbol"], prices_dir or PRICES_DIR)
        prices = frame_to_prices(_read_file(path))
        source = str(path)
    else:
        raise InvalidParameter("config", sorted(config), "needs one of prices, path, symbol")

    prices = _filter_range(prices, config.get("start"), config.get("end"))

    logger.info("[load_prices] Loaded %d price points from %s", len(prices), source)
    return prices
