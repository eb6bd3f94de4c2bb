"""Pydantic models for normalized performance reports.

A ``PerformanceReport`` is the canonical shape every input document is
reduced to, regardless of which load-testing tool produced it.
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class ReportFormat(str, Enum):
    """Shape of a raw report document, decided before any extraction runs."""

    SIMPLE = "simple"  # {"metrics": {"responseTimeAvg": 120, ...}}
    FLAT = "flat"  # {"responseTimeAvg": 120, "throughput": 500}
    NESTED_STATISTICAL = "nested_statistical"  # k6 summary export
    UNKNOWN = "unknown"


class PerformanceReport(BaseModel):
    """Sanitized, immutable report produced by the validation gate."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Report name (document name or caller fallback)")
    timestamp: str = Field(description="ISO-8601 timestamp of the test run")
    metrics: Dict[str, float] = Field(
        default_factory=dict,
        description="Metric name -> finite numeric value",
    )


class ExtractionResult(BaseModel):
    """Output of the metric extractor."""

    format: ReportFormat
    metrics: Dict[str, float] = Field(default_factory=dict)
    warnings: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.metrics
