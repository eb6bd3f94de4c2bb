"""Pydantic models for baseline-vs-current comparison results.

``MetricDiff`` serializes with the collaborator-facing field names
(``betterWhen``), so always dump with ``by_alias=True`` when producing
wire output.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BetterWhen(str, Enum):
    """Direction in which a metric is considered to improve."""

    LOWER = "lower"
    HIGHER = "higher"


class Trend(str, Enum):
    """Classification of a metric's change between two runs."""

    IMPROVED = "improved"
    WORSE = "worse"
    SAME = "same"
    UNKNOWN = "unknown"


class TrendClassification(BaseModel):
    """Output of the trend classifier for a single metric."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    better_when: BetterWhen
    trend: Trend
    change: Optional[float] = None
    pct: Optional[float] = None


class MetricDiff(BaseModel):
    """Per-metric comparison record (one per key in either report)."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        use_enum_values=True,
    )

    key: str
    label: str
    baseline: Optional[float] = None
    current: Optional[float] = None
    change: Optional[float] = None
    pct: Optional[float] = None
    better_when: BetterWhen = Field(alias="betterWhen")
    trend: Trend


class ComparisonSummary(BaseModel):
    """Tally of trends across all diffs."""

    improved: int = 0
    worse: int = 0
    same: int = 0
    unknown: int = 0


class ComparisonResult(BaseModel):
    """Diff engine output."""

    diffs: List[MetricDiff] = Field(default_factory=list)
    summary: ComparisonSummary = Field(default_factory=ComparisonSummary)

    def to_wire(self) -> Dict[str, Any]:
        """Dump with collaborator-facing field names."""
        return self.model_dump(mode="json", by_alias=True)
