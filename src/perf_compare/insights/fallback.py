"""Rule-based insights used when the text-generation service is unavailable."""

from typing import Any, Dict, List, Sequence

from perf_compare.schemas.comparison import MetricDiff, Trend
from perf_compare.schemas.insight import AIInsight

DEFAULT_DEGRADATION_THRESHOLD_PCT = 20.0
DEFAULT_CRITICAL_THRESHOLD_PCT = 50.0

FALLBACK_STEPS = [
    "Review recent deployments or configuration changes",
    "Check system resource utilization",
    "Analyze error logs for this time period",
]


def generate_fallback_insights(
    diffs: Sequence[MetricDiff],
    degradation_threshold_pct: float = DEFAULT_DEGRADATION_THRESHOLD_PCT,
    critical_threshold_pct: float = DEFAULT_CRITICAL_THRESHOLD_PCT,
) -> List[Dict[str, Any]]:
    """
    One ``anomaly`` insight per metric that degraded beyond the threshold.

    Args:
        diffs: Comparison records
        degradation_threshold_pct: Minimum |pct| for a worse metric to be reported
        critical_threshold_pct: Above this |pct| the severity is ``high``

    Returns:
        Insight dicts (empty when nothing degraded significantly)
    """
    insights: List[Dict[str, Any]] = []
    for diff in diffs:
        magnitude = abs(diff.pct or 0.0)
        if diff.trend != Trend.WORSE or magnitude <= degradation_threshold_pct:
            continue

        insight = AIInsight(
            type="anomaly",
            severity="high" if magnitude > critical_threshold_pct else "medium",
            confidence=0.8,
            title=f"Significant degradation in {diff.label}",
            description=(
                f"{diff.label} has degraded by {magnitude:.1f}%, "
                "which exceeds normal variation."
            ),
            actionable_steps=list(FALLBACK_STEPS),
            affected_metrics=[diff.key],
        )
        insights.append(insight.to_dict())
    return insights
