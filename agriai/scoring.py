"""Soil/vegetation health scoring and trend classification.

Everything here is pure: no I/O, no shared state. The functions are total over
their documented input ranges and do not validate; out-of-range input such as
a negative moisture gives a consistent but meaningless number rather than an
error. Range checks belong to the request schemas.
"""
from __future__ import annotations

import math
from typing import Any, NamedTuple, Optional, Sequence

EXCELLENT = "excellent"
GOOD = "good"
FAIR = "fair"
POOR = "poor"

# (lower bound inclusive, status), checked top-down
STATUS_THRESHOLDS = ((80, EXCELLENT), (60, GOOD), (40, FAIR))

OPTIMAL_PH = 6.5

INCREASING = "increasing"
DECREASING = "decreasing"
STABLE = "stable"

PH_TREND_THRESHOLD = 0.1
SOIL_TREND_THRESHOLD = 5

# float noise sits far below this many decimal places for 0-100 inputs
SNAP_DIGITS = 9


def _snap(value: float) -> float:
    """Drop binary representation error, so 29.499999999999996 reads as 29.5."""
    return round(value, SNAP_DIGITS)


def round_half_away(value: float, ndigits: int = 0) -> float:
    """Round half away from zero, so 82.5 -> 83 and -0.125 -> -0.13 at 2 places."""
    factor = 10 ** ndigits
    scaled = _snap(abs(value) * factor)
    # + 0.0 turns a rounded -0.0 into 0.0
    return math.copysign(math.floor(scaled + 0.5), value) / factor + 0.0


def soil_health_score(ph: float, moisture: float, nitrogen: float, phosphorus: float, potassium: float) -> int:
    """Weighted 0-100 soil score: 30% pH, 40% moisture, 30% mean N/P/K.

    pH scores 100 at 6.5 and loses 10 points per unit of distance, floored at 0.
    """
    ph_score = max(0.0, 100 - abs(ph - OPTIMAL_PH) * 10)
    moisture_score = moisture
    nutrient_score = (nitrogen + phosphorus + potassium) / 3
    return int(round_half_away(ph_score * 0.3 + moisture_score * 0.4 + nutrient_score * 0.3))


def classify_health(value: float) -> str:
    for lower, status in STATUS_THRESHOLDS:
        if value >= lower:
            return status
    return POOR


class Trend(NamedTuple):
    direction: str
    magnitude: float

    def as_dict(self) -> dict:
        return {"trend": self.direction, "change": self.magnitude}


NO_TREND = Trend(STABLE, 0)


def trend(values: Sequence[Optional[float]], threshold: float = 0) -> Trend:
    """Compare only the first and last value of an ascending series."""
    if len(values) < 2:
        return NO_TREND
    first, last = values[0], values[-1]
    if first is None or last is None:
        return NO_TREND

    delta = _snap(last - first)
    if delta > threshold:
        direction = INCREASING
    elif delta < -threshold:
        direction = DECREASING
    else:
        direction = STABLE
    return Trend(direction, round_half_away(delta, 2))


def _get(sample: Any, name: str) -> Optional[float]:
    if isinstance(sample, dict):
        return sample.get(name)
    return getattr(sample, name, None)


def _nutrient_average(sample: Any) -> Optional[float]:
    values = [_get(sample, k) for k in ("nitrogen", "phosphorus", "potassium")]
    if any(v is None for v in values):
        return None
    return sum(values) / 3


def soil_trends(series: Sequence[Any]) -> dict:
    """Trends of pH, moisture, mean nutrients and health score.

    `series` holds soil readings (objects or dicts with ph_level, moisture,
    nitrogen, phosphorus, potassium, health_score) ordered by measurement
    date ascending.
    """
    return {
        "ph_level": trend([_get(s, "ph_level") for s in series], PH_TREND_THRESHOLD),
        "moisture": trend([_get(s, "moisture") for s in series], SOIL_TREND_THRESHOLD),
        "nutrients": trend([_nutrient_average(s) for s in series], SOIL_TREND_THRESHOLD),
        "health_score": trend([_get(s, "health_score") for s in series], SOIL_TREND_THRESHOLD),
    }


def temporal_trends(series: Sequence[Any]) -> dict:
    """Trends of vegetation health, moisture and temperature; any change counts."""
    return {
        "vegetation_health": trend([_get(s, "vegetation_health") for s in series]),
        "moisture": trend([_get(s, "moisture") for s in series]),
        "temperature": trend([_get(s, "temperature") for s in series]),
    }
