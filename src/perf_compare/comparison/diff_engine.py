"""Diff engine: two sanitized reports -> per-metric comparison records.

Keys are the union of both reports' metric names. A metric present on
only one side still gets a record, with the missing side set to None and
trend ``unknown``.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List

from perf_compare.comparison.labels import label_for_key
from perf_compare.comparison.trend import classify_trend
from perf_compare.schemas.comparison import (
    ComparisonResult,
    ComparisonSummary,
    MetricDiff,
    Trend,
)
from perf_compare.schemas.report import PerformanceReport

logger = logging.getLogger(__name__)


def union_keys(baseline: Dict[str, float], current: Dict[str, float]) -> List[str]:
    """Baseline keys in order, followed by keys only present in current."""
    keys = list(baseline)
    keys.extend(key for key in current if key not in baseline)
    return keys


def diff_metric(key: str, baseline: Dict[str, float], current: Dict[str, float]) -> MetricDiff:
    """Build the comparison record for a single metric key."""
    base_value = baseline.get(key)
    cur_value = current.get(key)
    classification = classify_trend(key, base_value, cur_value)
    return MetricDiff(
        key=key,
        label=label_for_key(key),
        baseline=base_value,
        current=cur_value,
        change=classification.change,
        pct=classification.pct,
        better_when=classification.better_when,
        trend=classification.trend,
    )


def summarize(diffs: Iterable[MetricDiff]) -> ComparisonSummary:
    """Tally diffs by trend."""
    counts = Counter(Trend(diff.trend) for diff in diffs)
    return ComparisonSummary(
        improved=counts[Trend.IMPROVED],
        worse=counts[Trend.WORSE],
        same=counts[Trend.SAME],
        unknown=counts[Trend.UNKNOWN],
    )


def diff_reports(baseline: PerformanceReport, current: PerformanceReport) -> ComparisonResult:
    """
    Compare two sanitized reports metric by metric.

    Args:
        baseline: Reference report
        current: Report under evaluation

    Returns:
        ComparisonResult with one MetricDiff per key in either report and
        the trend summary
    """
    keys = union_keys(baseline.metrics, current.metrics)
    diffs = [diff_metric(key, baseline.metrics, current.metrics) for key in keys]
    summary = summarize(diffs)

    logger.info(
        f"Compared '{baseline.name}' vs '{current.name}': {len(diffs)} metrics, "
        f"{summary.improved} improved, {summary.worse} worse, "
        f"{summary.same} same, {summary.unknown} unknown"
    )
    return ComparisonResult(diffs=diffs, summary=summary)
