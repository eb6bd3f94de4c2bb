"""AI insight generation, recovery of malformed output and rule-based fallback."""

from perf_compare.insights.fallback import generate_fallback_insights
from perf_compare.insights.generator import InsightGenerator, build_analysis_messages
from perf_compare.insights.recovery import (
    build_parsing_issue_insight,
    extract_metric_names,
    recover_insights,
    strip_code_fences,
)

__all__ = [
    "InsightGenerator",
    "build_analysis_messages",
    "build_parsing_issue_insight",
    "extract_metric_names",
    "generate_fallback_insights",
    "recover_insights",
    "strip_code_fences",
]
