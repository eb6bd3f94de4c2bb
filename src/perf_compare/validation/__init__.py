"""Validation gate for raw reports and analysis requests."""

from perf_compare.validation.gate import (
    normalize_timestamp,
    parse_report_json,
    suggest_metric_fixes,
    validate_analysis_request,
    validate_report,
)

__all__ = [
    "normalize_timestamp",
    "parse_report_json",
    "suggest_metric_fixes",
    "validate_analysis_request",
    "validate_report",
]
