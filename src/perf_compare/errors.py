"""Exception hierarchy for perf_compare."""

from typing import List, Optional


class PerfCompareError(Exception):
    """Base exception for perf_compare errors."""

    pass


class ReportValidationError(PerfCompareError):
    """Raised when one or both reports fail structural validation.

    Attributes:
        errors: Every structural error, prefixed with the failing side.
        warnings: Recoverable anomalies collected before the failure.
        sides: Which reports failed ("baseline", "current").
    """

    def __init__(
        self,
        errors: List[str],
        warnings: Optional[List[str]] = None,
        sides: Optional[List[str]] = None,
    ):
        self.errors = list(errors)
        self.warnings = list(warnings or [])
        self.sides = list(sides or [])
        super().__init__("; ".join(self.errors) or "Report validation failed")


class TextGenerationError(PerfCompareError):
    """Exception raised when the external text-generation call fails."""

    pass


class ConfigurationError(PerfCompareError):
    """Exception raised for missing or invalid configuration."""

    pass


class ExportFormatError(PerfCompareError, ValueError):
    """Exception raised for an unsupported export format."""

    pass
