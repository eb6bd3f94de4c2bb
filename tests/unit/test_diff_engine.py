"""Unit tests for the diff engine and metric labels."""

from perf_compare.comparison import diff_reports, label_for_key, summarize, union_keys
from perf_compare.schemas.comparison import Trend
from perf_compare.schemas.report import PerformanceReport


def _report(name, **metrics):
    return PerformanceReport(name=name, timestamp="2024-05-01T12:00:00.000Z", metrics=metrics)


class TestUnionKeys:
    """Tests for union_keys."""

    def test_baseline_order_then_current_only(self):
        assert union_keys({"b": 1, "a": 2}, {"c": 3, "a": 4}) == ["b", "a", "c"]

    def test_no_duplicates(self):
        assert union_keys({"a": 1}, {"a": 2}) == ["a"]


class TestDiffReports:
    """Tests for diff_reports."""

    def test_one_diff_per_key_in_either_report(self):
        baseline = _report("base", responseTimeAvg=200, cpu=40)
        current = _report("cur", responseTimeAvg=300, throughput=100)

        result = diff_reports(baseline, current)

        assert [d.key for d in result.diffs] == ["responseTimeAvg", "cpu", "throughput"]

    def test_missing_sides_are_unknown(self):
        result = diff_reports(_report("base", cpu=40), _report("cur", rps=10))

        by_key = {d.key: d for d in result.diffs}
        assert by_key["cpu"].current is None
        assert by_key["cpu"].trend == Trend.UNKNOWN
        assert by_key["rps"].baseline is None
        assert by_key["rps"].trend == Trend.UNKNOWN
        assert by_key["rps"].change is None
        assert by_key["rps"].pct is None

    def test_values_and_summary(self):
        baseline = _report("base", responseTimeAvg=200, throughput=500, errorRate=0.01)
        current = _report("cur", responseTimeAvg=300, throughput=480, errorRate=0.01)

        result = diff_reports(baseline, current)

        response = result.diffs[0]
        assert response.label == "Avg Response Time (ms)"
        assert response.change == 100
        assert response.pct == 50.0
        assert response.trend == Trend.WORSE
        assert result.summary.worse == 1
        assert result.summary.same == 2
        assert result.summary.improved == 0
        assert result.summary.unknown == 0

    def test_wire_format_uses_better_when_alias(self):
        result = diff_reports(_report("b", throughput=100), _report("c", throughput=150))

        wire = result.to_wire()

        assert wire["diffs"][0] == {
            "key": "throughput",
            "label": "Throughput (req/s)",
            "baseline": 100.0,
            "current": 150.0,
            "change": 50.0,
            "pct": 50.0,
            "betterWhen": "higher",
            "trend": "improved",
        }
        assert wire["summary"]["improved"] == 1

    def test_empty_reports(self):
        result = diff_reports(_report("b"), _report("c"))
        assert result.diffs == []
        assert result.summary.improved == 0


class TestSummarize:
    """Tests for summarize."""

    def test_counts(self, make_diff):
        diffs = [make_diff("a", trend="worse"), make_diff("b", trend="worse"), make_diff("c")]
        summary = summarize(diffs)
        assert (summary.worse, summary.same, summary.improved, summary.unknown) == (2, 1, 0, 0)


class TestLabelForKey:
    """Tests for label_for_key."""

    def test_friendly_label(self):
        assert label_for_key("errorRate") == "Error Rate (%)"

    def test_camel_case_fallback(self):
        assert label_for_key("dashboardLoadTime") == "dashboard Load Time"

    def test_snake_case_fallback(self):
        assert label_for_key("api_response_ms") == "api response ms"

    def test_percentile_token_upper_cased(self):
        assert label_for_key("lcp_p95_ms") == "lcp P95 ms"
        assert label_for_key("apiP99") == "api P99"

    def test_bare_resource_names(self):
        assert label_for_key("CPU") == "CPU (%)"
        assert label_for_key("mem") == "Memory"
        assert label_for_key("memory_usage") == "memory usage"
