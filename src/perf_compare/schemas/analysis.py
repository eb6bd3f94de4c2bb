"""Response models for the end-to-end analysis service."""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from perf_compare.schemas.comparison import ComparisonResult, ComparisonSummary, MetricDiff
from perf_compare.schemas.report import PerformanceReport


class ComparisonOutcome(BaseModel):
    """Validated reports plus their comparison."""

    baseline: PerformanceReport
    current: PerformanceReport
    result: ComparisonResult
    warnings: List[str] = Field(default_factory=list)


class AnalysisResponse(BaseModel):
    """Comparison enriched with insights, ready to hand back to a caller."""

    diffs: List[MetricDiff]
    summary: ComparisonSummary
    ai_insights: List[Any] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    model: str = ""
    timestamp: str
    warnings: List[str] = Field(default_factory=list)
    metrics_count: Dict[str, int] = Field(default_factory=dict)

    def to_wire(self) -> Dict[str, Any]:
        """Dump with collaborator-facing field names (``aiInsights``, ``betterWhen``)."""
        data = self.model_dump(mode="json", by_alias=True)
        data["aiInsights"] = data.pop("ai_insights")
        return data
