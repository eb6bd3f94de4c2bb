"""Unit tests for deterministic remediation tips."""

from perf_compare.comparison.suggestions import REBASELINE_TIP, suggestions_from_diffs


class TestSuggestionsFromDiffs:
    """Tests for suggestions_from_diffs."""

    def test_no_degradation_no_tips(self, make_diff):
        diffs = [make_diff("responseTimeAvg", 100, 90, pct=-10, trend="improved")]
        assert suggestions_from_diffs(diffs) == []

    def test_response_time_regression(self, make_diff):
        tips = suggestions_from_diffs([make_diff("responseTimeAvg", 100, 150, pct=50, trend="worse")])

        assert tips[0].startswith("Optimize slow endpoints")
        assert tips[1].startswith("Investigate database hotspots")
        assert tips[-1] == REBASELINE_TIP

    def test_multiple_families_without_duplicates(self, make_diff):
        diffs = [
            make_diff("api_p95", 100, 150, pct=50, trend="worse"),
            make_diff("latencyAvg", 100, 130, pct=30, trend="worse"),
            make_diff("memory", 100, 200, pct=100, trend="worse"),
        ]

        tips = suggestions_from_diffs(diffs)

        assert len(tips) == len(set(tips))
        assert any("heap snapshots" in tip for tip in tips)
        assert tips.count(REBASELINE_TIP) == 1

    def test_throughput_drop(self, make_diff):
        diffs = [make_diff("throughput", 500, 400, pct=-20, trend="worse", better_when="higher")]
        tips = suggestions_from_diffs(diffs)
        assert any("Scale horizontally" in tip for tip in tips)

    def test_threshold_filters_family_tips(self, make_diff):
        diffs = [make_diff("cpu", 100, 110, pct=10, trend="worse")]

        tips = suggestions_from_diffs(diffs, threshold_pct=20)

        assert tips == [REBASELINE_TIP]

    def test_unknown_pct_counts_as_significant(self, make_diff):
        diffs = [make_diff("errorRate", trend="worse")]
        tips = suggestions_from_diffs(diffs)
        assert any("circuit breakers" in tip for tip in tips)
