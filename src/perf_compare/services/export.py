"""Serialize comparison results for download or hand-off."""

import csv
import io
import json
import logging
from typing import Optional

from perf_compare.errors import ExportFormatError
from perf_compare.schemas.comparison import ComparisonResult

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("json", "csv")
CSV_HEADERS = ["Metric", "Baseline", "Current", "Change", "Percentage Change", "Trend"]
MISSING_VALUE = "N/A"


def _format_number(value: Optional[float]) -> str:
    if value is None:
        return MISSING_VALUE
    return f"{value:.10g}"


def _format_pct(value: Optional[float]) -> str:
    if value is None:
        return MISSING_VALUE
    return f"{value:.2f}%"


def comparison_to_csv(result: ComparisonResult) -> str:
    """One row per diff, in diff order."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for diff in result.diffs:
        writer.writerow(
            [
                diff.label,
                _format_number(diff.baseline),
                _format_number(diff.current),
                _format_number(diff.change),
                _format_pct(diff.pct),
                diff.trend,
            ]
        )
    return buffer.getvalue()


def export_comparison(result: ComparisonResult, fmt: str = "json") -> str:
    """
    Render a comparison as JSON or CSV text.

    Args:
        result: Comparison to export
        fmt: ``json`` (indented, wire field names) or ``csv``

    Returns:
        Serialized text

    Raises:
        ExportFormatError: If ``fmt`` is not supported
    """
    normalized = fmt.strip().lower()
    if normalized == "json":
        return json.dumps(result.to_wire(), indent=2)
    if normalized == "csv":
        return comparison_to_csv(result)

    raise ExportFormatError(
        f"Unsupported export format '{fmt}'. Supported: {', '.join(SUPPORTED_FORMATS)}"
    )
