"""
Unit tests for soil health scoring, status classification and trends
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from agriai import scoring
from agriai.scoring import (
    classify_health, soil_health_score, soil_trends, temporal_trends, trend, round_half_away, Trend
)

pytestmark = pytest.mark.unit


@dataclass
class SoilSample:
    ph_level: float
    moisture: float
    nitrogen: float
    phosphorus: float
    potassium: float
    health_score: Optional[float] = None


@dataclass
class TemporalPoint:
    vegetation_health: float
    moisture: float
    temperature: float


class TestClassifyHealth:
    @pytest.mark.parametrize("value,expected", [
        (100, "excellent"),
        (80, "excellent"),
        (79.999, "good"),
        (60, "good"),
        (59.9, "fair"),
        (40, "fair"),
        (39.999, "poor"),
        (0, "poor"),
    ])
    def test_boundaries(self, value, expected):
        assert classify_health(value) == expected

    def test_monotonic(self):
        tiers = ["poor", "fair", "good", "excellent"]
        ranks = [tiers.index(classify_health(x / 10)) for x in range(0, 1001)]
        assert ranks == sorted(ranks)


class TestSoilHealthScore:
    def test_example_sample(self):
        # phScore 97, moisture 72, nutrients 85 -> 29.1 + 28.8 + 25.5 = 83.4
        score = soil_health_score(6.8, 72, 85, 78, 92)
        assert score == 83
        assert classify_health(score) == "excellent"

    def test_optimal_ph_gets_full_ph_weight(self):
        assert soil_health_score(6.5, 0, 0, 0, 0) == 30
        assert soil_health_score(6.5, 100, 100, 100, 100) == 100

    def test_ph_score_clamps_to_zero(self):
        assert soil_health_score(16.5, 100, 100, 100, 100) == 70
        assert soil_health_score(30, 100, 100, 100, 100) == 70

    @pytest.mark.parametrize("d", [0.3, 1.0, 2.5, 4.2, 6.5])
    def test_symmetric_in_ph_distance(self, d):
        assert soil_health_score(6.5 + d, 55, 40, 60, 70) == soil_health_score(6.5 - d, 55, 40, 60, 70)

    def test_rounds_half_away_from_zero(self):
        # 0.3 * 100 + 0.4 * 51.25 + 0.3 * 0 = 50.5
        assert soil_health_score(6.5, 51.25, 0, 0, 0) == 51

    @pytest.mark.parametrize("ph,expected", [(6.8, 30), (6.2, 30), (2.2, 18)])
    def test_decimal_half_rounds_up(self, ph, expected):
        # 29.5 and 17.5 exactly, though the float sums land just below
        assert soil_health_score(ph, 1, 0, 0, 0) == expected

    def test_out_of_range_input_does_not_raise(self):
        assert isinstance(soil_health_score(20, -10, -5, 0, 0), int)

    def test_returns_int(self):
        assert isinstance(soil_health_score(7.0, 50, 50, 50, 50), int)


class TestRoundHalfAway:
    @pytest.mark.parametrize("value,ndigits,expected", [
        (83.4, 0, 83),
        (82.5, 0, 83),
        (-82.5, 0, -83),
        (0.125, 2, 0.13),
        (-0.125, 2, -0.13),
        (7.2 - 6.8, 2, 0.4),
        (29.1 + 0.4, 0, 30),
        (1.005, 2, 1.01),
    ])
    def test_values(self, value, ndigits, expected):
        assert round_half_away(value, ndigits) == expected

    def test_no_negative_zero(self):
        assert str(round_half_away(-0.001, 2)) == "0.0"


class TestTrend:
    def test_empty_and_single_are_stable(self):
        assert trend([]) == Trend("stable", 0)
        assert trend([42]) == Trend("stable", 0)

    def test_only_first_and_last_matter(self):
        assert trend([10, 90, -50, 11], threshold=0) == Trend("increasing", 1)

    def test_threshold_is_a_dead_zone(self):
        assert trend([70, 72], threshold=5).direction == "stable"
        assert trend([70, 75], threshold=5).direction == "stable"
        assert trend([70, 75.5], threshold=5).direction == "increasing"
        assert trend([70, 64], threshold=5).direction == "decreasing"

    def test_change_equal_to_threshold_is_stable(self):
        assert trend([6.8, 6.9], threshold=0.1) == Trend("stable", 0.1)
        assert trend([7.0, 6.9], threshold=0.1) == Trend("stable", -0.1)
        assert trend([6.8, 6.95], threshold=0.1).direction == "increasing"

    def test_missing_endpoint_is_stable(self):
        assert trend([None, 3]) == scoring.NO_TREND

    def test_as_dict(self):
        assert Trend("decreasing", -1.5).as_dict() == {"trend": "decreasing", "change": -1.5}


class TestSoilTrends:
    def test_empty_and_single(self):
        for series in ([], [SoilSample(6.5, 50, 50, 50, 50, 60)]):
            result = soil_trends(series)
            assert set(result) == {"ph_level", "moisture", "nutrients", "health_score"}
            assert all(t == Trend("stable", 0) for t in result.values())

    def test_ph_increasing(self):
        result = soil_trends([{"ph_level": 6.8}, {"ph_level": 7.2}])
        assert result["ph_level"] == Trend("increasing", 0.4)

    def test_ph_within_threshold_is_stable(self):
        result = soil_trends([{"ph_level": 6.8}, {"ph_level": 6.85}])
        assert result["ph_level"].direction == "stable"
        assert result["ph_level"].magnitude == 0.05

    def test_moisture_small_change_is_stable(self):
        result = soil_trends([{"moisture": 70}, {"moisture": 72}])
        assert result["moisture"] == Trend("stable", 2)

    def test_metrics_are_independent(self):
        first = SoilSample(6.5, 80, 60, 60, 60, 70)
        last = SoilSample(6.5, 60, 72, 72, 72, 71)
        result = soil_trends([first, last])
        assert result["ph_level"].direction == "stable"
        assert result["moisture"] == Trend("decreasing", -20)
        assert result["nutrients"] == Trend("increasing", 12)
        assert result["health_score"] == Trend("stable", 1)


class TestTemporalTrends:
    def test_any_change_flips_direction(self):
        result = temporal_trends([TemporalPoint(75, 68, 22.5), TemporalPoint(75.01, 67.99, 22.5)])
        assert result["vegetation_health"] == Trend("increasing", 0.01)
        assert result["moisture"] == Trend("decreasing", -0.01)
        assert result["temperature"] == Trend("stable", 0)

    def test_empty_and_single(self):
        assert all(t == scoring.NO_TREND for t in temporal_trends([]).values())
        assert all(t == scoring.NO_TREND for t in temporal_trends([TemporalPoint(1, 2, 3)]).values())
