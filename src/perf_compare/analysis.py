"""End-to-end analysis: validate both reports, diff them, add insights."""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from perf_compare.comparison import diff_reports, suggestions_from_diffs
from perf_compare.config.settings import AnalysisSettings, get_settings
from perf_compare.errors import ReportValidationError
from perf_compare.insights.generator import SOURCE_FALLBACK, InsightGenerator
from perf_compare.schemas.analysis import AnalysisResponse, ComparisonOutcome
from perf_compare.validation.gate import validate_analysis_request

logger = logging.getLogger(__name__)

RULE_BASED_MODEL = "rule-based"


class AnalysisService:
    """Comparison and insight pipeline over raw report documents."""

    def __init__(
        self,
        generator: Optional[InsightGenerator] = None,
        settings: Optional[AnalysisSettings] = None,
    ):
        self.settings = settings or get_settings()
        self.generator = generator or InsightGenerator(settings=self.settings)

    def compare(self, baseline_raw: Any, current_raw: Any) -> ComparisonOutcome:
        """
        Validate both documents and diff them.

        Args:
            baseline_raw: Parsed baseline report document
            current_raw: Parsed current report document

        Returns:
            ComparisonOutcome with sanitized reports, result and warnings

        Raises:
            ReportValidationError: If either report is structurally invalid
        """
        validation = validate_analysis_request({"baseline": baseline_raw, "current": current_raw})
        if not validation.valid:
            sides = [
                side
                for side, report in (("baseline", validation.baseline), ("current", validation.current))
                if report is None
            ]
            raise ReportValidationError(validation.errors, validation.warnings, sides)

        result = diff_reports(validation.baseline, validation.current)
        return ComparisonOutcome(
            baseline=validation.baseline,
            current=validation.current,
            result=result,
            warnings=validation.warnings,
        )

    def analyze(
        self,
        baseline_raw: Any,
        current_raw: Any,
        system_context: Optional[Mapping[str, Any]] = None,
        use_ai: bool = True,
    ) -> AnalysisResponse:
        """
        Compare two reports and attach insights and remediation tips.

        Args:
            baseline_raw: Parsed baseline report document
            current_raw: Parsed current report document
            system_context: Caller context forwarded to the prompt
            use_ai: When False only rule-based insights are produced

        Returns:
            AnalysisResponse

        Raises:
            ReportValidationError: If either report is structurally invalid
        """
        outcome = self.compare(baseline_raw, current_raw)
        diffs = outcome.result.diffs

        if use_ai:
            insights = self.generator.generate(diffs, system_context)
        else:
            insights = self.generator.fallback(diffs)

        model = (
            RULE_BASED_MODEL
            if self.generator.last_source == SOURCE_FALLBACK
            else self.generator.model
        )

        return AnalysisResponse(
            diffs=diffs,
            summary=outcome.result.summary,
            ai_insights=insights,
            suggestions=suggestions_from_diffs(diffs),
            model=model,
            timestamp=datetime.now(timezone.utc).isoformat(),
            warnings=outcome.warnings,
            metrics_count={
                "baseline": len(outcome.baseline.metrics),
                "current": len(outcome.current.metrics),
                "compared": len(diffs),
            },
        )
