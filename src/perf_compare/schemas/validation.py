"""Validation outcome models and the structural error taxonomy."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from perf_compare.schemas.report import PerformanceReport


class ValidationErrorCode(str, Enum):
    """Stable codes for structural validation failures."""

    NOT_AN_OBJECT = "NOT_AN_OBJECT"  # Input is not a JSON object
    INVALID_JSON = "INVALID_JSON"  # Raw text could not be decoded
    MISSING_METRICS = "MISSING_METRICS"  # No recognizable metrics container
    NO_VALID_METRICS = "NO_VALID_METRICS"  # Nothing numeric survived extraction


class ValidationResult(BaseModel):
    """Result of validating a single raw report."""

    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    error_codes: List[ValidationErrorCode] = Field(default_factory=list)
    sanitized: Optional[PerformanceReport] = None


class AnalysisRequestValidation(BaseModel):
    """Result of validating a baseline/current analysis request."""

    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    baseline: Optional[PerformanceReport] = None
    current: Optional[PerformanceReport] = None
    system_context: Dict[str, Any] = Field(default_factory=dict)
