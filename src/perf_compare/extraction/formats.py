"""Report shape detection.

``detect_format`` decides which extraction path a document takes before any
extraction runs, so the three paths stay structurally separate.
"""

from typing import Any, Mapping

from perf_compare.extraction.nested_metrics import is_nested_metric
from perf_compare.extraction.normalizers import parse_numeric
from perf_compare.schemas.report import ReportFormat

# Top-level keys that describe the report rather than measure anything
RESERVED_REPORT_KEYS = frozenset({"name", "timestamp"})


def is_nested_statistical(metrics: Any) -> bool:
    """Every metric is a k6-style bundle (and there is at least one)."""
    return (
        isinstance(metrics, Mapping)
        and len(metrics) > 0
        and all(is_nested_metric(value) for value in metrics.values())
    )


def is_flat(document: Mapping[str, Any]) -> bool:
    """A strict majority of top-level keys hold numeric values."""
    if not document:
        return False
    numeric_keys = sum(1 for value in document.values() if parse_numeric(value) is not None)
    return numeric_keys > 0 and numeric_keys / len(document) > 0.5


def detect_format(document: Any) -> ReportFormat:
    """
    Classify a raw report document.

    Args:
        document: Parsed JSON document

    Returns:
        ReportFormat tag; UNKNOWN when no extraction path applies
    """
    if not isinstance(document, Mapping):
        return ReportFormat.UNKNOWN

    metrics = document.get("metrics")
    if is_nested_statistical(metrics):
        return ReportFormat.NESTED_STATISTICAL
    if isinstance(metrics, Mapping):
        return ReportFormat.SIMPLE
    if is_flat(document):
        return ReportFormat.FLAT
    return ReportFormat.UNKNOWN
