"""Unit tests for direction-aware trend classification."""

import pytest

from perf_compare.comparison.trend import (
    NOISE_FLOOR_PCT,
    better_when_for_key,
    classify_trend,
    compute_change,
    has_known_direction,
)
from perf_compare.schemas.comparison import BetterWhen, Trend


class TestBetterWhen:
    """Tests for better_when_for_key."""

    @pytest.mark.parametrize("key", ["throughput", "RPS", "tps_avg", "successRate", "checks_total_passes"])
    def test_higher_is_better(self, key):
        assert better_when_for_key(key) == BetterWhen.HIGHER

    @pytest.mark.parametrize("key", ["responseTimeAvg", "errorRate", "cpu", "score"])
    def test_lower_is_better(self, key):
        assert better_when_for_key(key) == BetterWhen.LOWER

    def test_known_direction(self):
        assert has_known_direction("latencyAvg")
        assert has_known_direction("throughput")
        assert not has_known_direction("score")


class TestComputeChange:
    """Tests for compute_change."""

    def test_percentage(self):
        assert compute_change(200, 300) == (100, 50.0)

    def test_zero_baseline(self):
        assert compute_change(0, 10) == (10, 0.0)

    def test_missing_side(self):
        assert compute_change(None, 10) == (None, None)
        assert compute_change(10, None) == (None, None)


class TestClassifyTrend:
    """Tests for classify_trend."""

    def test_response_time_regression_is_worse(self):
        result = classify_trend("responseTimeAvg", 200, 300)
        assert result.trend == Trend.WORSE
        assert result.better_when == BetterWhen.LOWER
        assert result.pct == 50.0

    def test_small_throughput_drop_is_same(self):
        result = classify_trend("throughput", 500, 480)
        assert result.trend == Trend.SAME
        assert result.pct == pytest.approx(-4.0)

    def test_throughput_gain_is_improved(self):
        assert classify_trend("throughput", 500, 600).trend == Trend.IMPROVED

    def test_latency_drop_is_improved(self):
        assert classify_trend("latencyAvg", 100, 80).trend == Trend.IMPROVED

    def test_unknown_name_treated_as_lower_is_better(self):
        assert classify_trend("score", 100, 150).trend == Trend.WORSE

    def test_missing_side_is_unknown(self):
        result = classify_trend("cpu", None, 50)
        assert result.trend == Trend.UNKNOWN
        assert result.change is None
        assert result.pct is None

    def test_zero_baseline_is_same(self):
        result = classify_trend("errorRate", 0, 0.2)
        assert result.trend == Trend.SAME
        assert result.change == 0.2

    @pytest.mark.parametrize("key", ["responseTimeAvg", "throughput", "score"])
    def test_within_noise_floor_is_same_in_either_direction(self, key):
        up = 100 * (1 + (NOISE_FLOOR_PCT - 0.1) / 100)
        down = 100 * (1 - (NOISE_FLOOR_PCT - 0.1) / 100)
        assert classify_trend(key, 100, up).trend == Trend.SAME
        assert classify_trend(key, 100, down).trend == Trend.SAME
