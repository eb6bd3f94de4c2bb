"""Pydantic schemas for reports, comparisons and insights."""

from perf_compare.schemas.analysis import AnalysisResponse, ComparisonOutcome
from perf_compare.schemas.comparison import (
    BetterWhen,
    ComparisonResult,
    ComparisonSummary,
    MetricDiff,
    Trend,
    TrendClassification,
)
from perf_compare.schemas.insight import AIInsight
from perf_compare.schemas.report import ExtractionResult, PerformanceReport, ReportFormat
from perf_compare.schemas.validation import (
    AnalysisRequestValidation,
    ValidationErrorCode,
    ValidationResult,
)

__all__ = [
    "AIInsight",
    "AnalysisRequestValidation",
    "AnalysisResponse",
    "BetterWhen",
    "ComparisonOutcome",
    "ComparisonResult",
    "ComparisonSummary",
    "ExtractionResult",
    "MetricDiff",
    "PerformanceReport",
    "ReportFormat",
    "Trend",
    "TrendClassification",
    "ValidationErrorCode",
    "ValidationResult",
]
