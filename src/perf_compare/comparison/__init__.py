"""Baseline-vs-current comparison: trend classification and diffing."""

from perf_compare.comparison.diff_engine import diff_metric, diff_reports, summarize, union_keys
from perf_compare.comparison.labels import FRIENDLY_LABELS, label_for_key
from perf_compare.comparison.suggestions import suggestions_from_diffs
from perf_compare.comparison.trend import (
    NOISE_FLOOR_PCT,
    better_when_for_key,
    classify_trend,
    compute_change,
    has_known_direction,
)

__all__ = [
    "FRIENDLY_LABELS",
    "NOISE_FLOOR_PCT",
    "better_when_for_key",
    "classify_trend",
    "compute_change",
    "diff_metric",
    "diff_reports",
    "has_known_direction",
    "label_for_key",
    "suggestions_from_diffs",
    "summarize",
    "union_keys",
]
