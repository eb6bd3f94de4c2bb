"""AI insight generation for a metric comparison.

Renders the analysis prompt, calls the chat-completions endpoint (through a
caller-owned TTL cache) and recovers insights from whatever text comes
back. Any failure of the external call is downgraded to rule-based
fallback insights.
"""

import copy
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from perf_compare.config.settings import AnalysisSettings, get_settings
from perf_compare.errors import TextGenerationError
from perf_compare.insights.fallback import generate_fallback_insights
from perf_compare.insights.recovery import recover_insights
from perf_compare.schemas.comparison import MetricDiff, Trend
from perf_compare.services.openai_client import get_default_model, get_openai_client
from perf_compare.services.response_cache import ResponseCache
from perf_compare.utils.prompt_loader import load_prompt

logger = logging.getLogger(__name__)

MEDIUM_IMPACT_PCT = 10.0

ADVANCED_CONTEXT_KEYS = (
    "recent_changes",
    "performance_goals",
    "known_issues",
    "custom_focus",
    "business_criticality",
    "team",
    "urgency",
)

TREND_MARKERS = {
    Trend.IMPROVED.value: "+",
    Trend.WORSE.value: "-",
}

SOURCE_AI = "ai"
SOURCE_CACHE = "cache"
SOURCE_FALLBACK = "fallback"


def _format_value(value: Optional[float]) -> str:
    return "N/A" if value is None else f"{value:g}"


def impact_level(
    pct: Optional[float], high_threshold_pct: float, critical_threshold_pct: float
) -> str:
    """Bucket a percentage change as CRITICAL, HIGH, MEDIUM or NORMAL."""
    magnitude = abs(pct or 0.0)
    if magnitude > critical_threshold_pct:
        return "CRITICAL"
    if magnitude > high_threshold_pct:
        return "HIGH"
    if magnitude > MEDIUM_IMPACT_PCT:
        return "MEDIUM"
    return "NORMAL"


def build_analysis_messages(
    diffs: Sequence[MetricDiff],
    system_context: Optional[Mapping[str, Any]] = None,
    settings: Optional[AnalysisSettings] = None,
) -> List[Dict[str, str]]:
    """
    Render the analysis prompt for a set of comparison records.

    Args:
        diffs: Comparison records
        system_context: Free-form caller context (environment, stack, scale,
            recent_changes, team, ...)
        settings: Analysis settings (defaults to the cached settings)

    Returns:
        Chat-completions message list
    """
    settings = settings or get_settings()
    context = dict(system_context or {})
    high = settings.degradation_threshold_pct
    critical = settings.critical_threshold_pct

    degraded = [d for d in diffs if d.trend == Trend.WORSE]
    critical_count = sum(1 for d in degraded if abs(d.pct or 0.0) > critical)
    high_count = sum(1 for d in degraded if high < abs(d.pct or 0.0) <= critical)

    metric_lines = [
        {
            "trend_marker": TREND_MARKERS.get(str(d.trend), "="),
            "label": d.label,
            "baseline": _format_value(d.baseline),
            "current": _format_value(d.current),
            "pct": "N/A" if d.pct is None else f"{d.pct:.1f}%",
            "impact": impact_level(d.pct, high, critical),
        }
        for d in diffs
    ]

    prompt = load_prompt(
        settings.prompt_name,
        system_context=context,
        metric_lines=metric_lines,
        degraded_count=len(degraded),
        critical_count=critical_count,
        high_count=high_count,
        critical_threshold_pct=critical,
        high_threshold_pct=high,
        medium_threshold_pct=MEDIUM_IMPACT_PCT,
        max_insights=settings.max_insights,
        has_advanced_context=any(context.get(key) for key in ADVANCED_CONTEXT_KEYS),
    )
    return prompt["messages"]


class InsightGenerator:
    """Generates insights for comparisons, one cache per instance.

    Attributes:
        settings: Analysis settings in effect.
        cache: Response cache keyed by the rendered request.
        last_source: Where the most recent result came from
            (``ai``, ``cache`` or ``fallback``).
    """

    def __init__(
        self,
        client: Any = None,
        settings: Optional[AnalysisSettings] = None,
        cache: Optional[ResponseCache] = None,
        model: Optional[str] = None,
    ):
        self.settings = settings or get_settings()
        self.cache = cache or ResponseCache(self.settings.cache_ttl_seconds)
        self._client = client
        self._model = model or self.settings.model
        self.last_source: Optional[str] = None

    @property
    def model(self) -> str:
        """Model or deployment name, resolved from the environment if unset."""
        if not self._model:
            self._model = get_default_model()
        return self._model

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = get_openai_client()
        return self._client

    def _complete(self, messages: List[Dict[str, str]]) -> str:
        """Run the chat completion and return its text.

        Raises:
            TextGenerationError: On any client failure or an empty response.
        """
        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
            content = response.choices[0].message.content
        except Exception as e:
            raise TextGenerationError(f"Chat completion failed: {e}") from e

        if not content:
            raise TextGenerationError("Chat completion returned no content")
        return content

    def fallback(self, diffs: Sequence[MetricDiff]) -> List[Dict[str, Any]]:
        """Rule-based insights using the configured thresholds."""
        self.last_source = SOURCE_FALLBACK
        return generate_fallback_insights(
            diffs,
            degradation_threshold_pct=self.settings.degradation_threshold_pct,
            critical_threshold_pct=self.settings.critical_threshold_pct,
        )

    def generate(
        self,
        diffs: Sequence[MetricDiff],
        system_context: Optional[Mapping[str, Any]] = None,
    ) -> List[Any]:
        """
        Insights for a comparison.

        Args:
            diffs: Comparison records
            system_context: Caller context passed to the prompt

        Returns:
            Recovered AI insights (non-empty), or rule-based fallback
            insights (possibly empty) when the external call fails
        """
        messages = build_analysis_messages(diffs, system_context, self.settings)

        model = self.model
        payload = {"model": model, "messages": messages}
        cached = self.cache.get(payload)
        if cached is not None:
            self.last_source = SOURCE_CACHE
            return copy.deepcopy(cached)

        try:
            text = self._complete(messages)
        except TextGenerationError as e:
            logger.warning(f"Insight generation failed, using rule-based insights: {e}")
            return self.fallback(diffs)

        insights = recover_insights(text, diffs)
        self.cache.set(payload, copy.deepcopy(insights))
        self.last_source = SOURCE_AI
        logger.info(f"Generated {len(insights)} insight(s) with model '{model}'")
        return insights
