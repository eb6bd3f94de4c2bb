"""Pydantic model for AI-generated (or synthesized) performance insights.

Insights parsed from model output are returned to callers as plain dicts;
this model is used to build the synthetic ones so their shape stays
consistent with what the prompt asks the model to produce.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AIInsight(BaseModel):
    """A structured, actionable finding about a performance comparison."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(description="Insight category, e.g. 'root_cause', 'parsing_issue'")
    severity: str = Field(default="medium", description="critical | high | medium | low")
    confidence: float = Field(default=0.7, ge=0.0, le=1.0)
    title: str
    description: str
    affected_metrics: List[str] = Field(default_factory=list)
    actionable_steps: Optional[List[str]] = None
    immediate_actions: Optional[List[str]] = None
    business_impact: Optional[str] = None
    priority_score: Optional[str] = Field(default=None, description="P1 (critical) .. P5")
    effort_estimate: Optional[str] = None
    expected_improvement: Optional[str] = None
    generated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-serializable dict without unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)
