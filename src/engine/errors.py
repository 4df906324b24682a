import math
from typing import Any, Sized


class InvalidParameter(ValueError):
    """Raised when a caller passes a parameter the engine cannot work with."""

    def __init__(self, name: str, value: Any, reason: str):
        super().__init__(f"{name}={value!r}: {reason}")
        self.name = name
        self.value = value
        self.reason = reason


def require_period(name: str, value: Any) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameter(name, value, "must be an integer")
    if value < 1:
        raise InvalidParameter(name, value, "must be >= 1")
    return value


def require_finite(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(name, value, "must be a number")
    if not math.isfinite(value):
        raise InvalidParameter(name, value, "must be finite")
    return float(value)


def require_positive_finite(name: str, value: Any) -> float:
    require_finite(name, value)
    if value <= 0:
        raise InvalidParameter(name, value, "must be > 0")
    return float(value)


def require_position_size(value: Any) -> float:
    pct = require_positive_finite("position_size_pct", value)
    if pct > 100:
        raise InvalidParameter("position_size_pct", value, "must be in (0, 100]")
    return pct


def require_aligned(name: str, series: Sized, expected: int) -> None:
    if len(series) != expected:
        raise InvalidParameter(
            name,
            len(series),
            f"length must match the price series ({expected})",
        )
