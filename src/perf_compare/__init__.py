"""
perf-compare - Normalize, diff and explain performance test reports.

Reports in several shapes (simple metric maps, flat objects, k6 summary
exports) are reduced to a canonical PerformanceReport, compared metric by
metric with direction-aware trends, and optionally enriched with AI
insights that survive malformed model output.
"""

__version__ = "0.1.0"

from perf_compare.comparison import diff_reports
from perf_compare.extraction import extract_metrics
from perf_compare.insights import recover_insights
from perf_compare.validation import validate_report

__all__ = [
    "diff_reports",
    "extract_metrics",
    "recover_insights",
    "validate_report",
]
