"""
Metric extraction module.

Detects the shape of a raw performance report (simple, flat or k6 nested
statistical) and reduces it to a canonical name -> value map.
"""

from perf_compare.extraction.extractor import extract_metrics
from perf_compare.extraction.formats import detect_format
from perf_compare.extraction.nested_metrics import (
    NESTED_METRIC_SPECS,
    NestedMetricSpec,
    aggregate_checks,
    flatten_nested_metrics,
)
from perf_compare.extraction.normalizers import (
    coerce_metric_value,
    coerce_metrics,
    parse_numeric,
    should_be_positive,
)

__all__ = [
    "NESTED_METRIC_SPECS",
    "NestedMetricSpec",
    "aggregate_checks",
    "coerce_metric_value",
    "coerce_metrics",
    "detect_format",
    "extract_metrics",
    "flatten_nested_metrics",
    "parse_numeric",
    "should_be_positive",
]
