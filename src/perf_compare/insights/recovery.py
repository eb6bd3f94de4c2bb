"""Recover structured insights from free-form model output.

Model responses are supposed to be a bare JSON array of insight objects,
but in practice they arrive wrapped in prose, fenced in markdown, with
trailing commas, or not as JSON at all. ``recover_insights`` walks an
ordered ladder of strategies and always returns at least one insight.
"""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from perf_compare.schemas.comparison import MetricDiff, Trend
from perf_compare.schemas.insight import AIInsight

logger = logging.getLogger(__name__)

MAX_AFFECTED_METRICS = 10

TRAILING_COMMA_PATTERN = re.compile(r",(\s*[}\]])")

METRIC_SUFFIX_PATTERN = re.compile(
    r"(\w+_response_time|\w+_load_time|\w+_usage|\w+_rate)", re.IGNORECASE
)
AFFECTED_METRICS_PATTERN = re.compile(r'"affected_metrics":\s*\[(.*?)\]', re.IGNORECASE | re.DOTALL)
METRIC_KEY_PATTERN = re.compile(r'"metric_key\d*":\s*"([^"]+)"', re.IGNORECASE)
QUOTED_PATTERN = re.compile(r'"([^"]+)"')


def _field_pattern(field: str) -> re.Pattern:
    return re.compile(rf'{field}"?\s*:\s*"([^"]+)"', re.IGNORECASE)


TITLE_PATTERN = _field_pattern("title")
SEVERITY_PATTERN = _field_pattern("severity")
TYPE_PATTERN = _field_pattern("type")
DESCRIPTION_PATTERN = _field_pattern("description")

Strategy = Callable[[str, Sequence[MetricDiff]], Optional[List[Any]]]


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```) if present."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
    if text.endswith("```"):
        text = text[:-3].rstrip()
    return text


def _as_insight_list(parsed: Any) -> Optional[List[Any]]:
    """Accept a non-empty list, wrap a single object; reject anything else."""
    if isinstance(parsed, dict):
        return [parsed]
    if isinstance(parsed, list) and parsed:
        return parsed
    return None


def _array_slice(text: str) -> Optional[str]:
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def extract_metric_names(text: str, limit: int = MAX_AFFECTED_METRICS) -> List[str]:
    """
    Scrape metric-looking names out of arbitrary text.

    Picks up ``*_response_time``/``*_load_time``/``*_usage``/``*_rate``
    identifiers, entries of an ``"affected_metrics": [...]`` list and
    ``"metric_key": "..."`` values.

    Args:
        text: Raw model output
        limit: Maximum number of names returned

    Returns:
        Unique names in first-seen order
    """
    names: List[str] = []
    names.extend(METRIC_SUFFIX_PATTERN.findall(text))
    for inner in AFFECTED_METRICS_PATTERN.findall(text):
        names.extend(QUOTED_PATTERN.findall(inner))
    names.extend(METRIC_KEY_PATTERN.findall(text))
    return list(dict.fromkeys(names))[:limit]


def _degraded_keys(diffs_context: Sequence[MetricDiff]) -> List[str]:
    return [d.key for d in diffs_context if d.trend == Trend.WORSE][:MAX_AFFECTED_METRICS]


def _parse_direct(text: str, diffs_context: Sequence[MetricDiff]) -> Optional[List[Any]]:
    try:
        return _as_insight_list(json.loads(strip_code_fences(text)))
    except (ValueError, RecursionError) as e:
        logger.debug(f"Direct JSON parse failed: {e}")
        return None


def _parse_array_substring(
    text: str, diffs_context: Sequence[MetricDiff]
) -> Optional[List[Any]]:
    candidate = _array_slice(text)
    if candidate is None:
        logger.debug("No bracketed array found in response")
        return None
    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Array substring parse failed: {e}")
        return None
    return parsed if isinstance(parsed, list) and parsed else None


def _parse_type_pattern(text: str, diffs_context: Sequence[MetricDiff]) -> Optional[List[Any]]:
    candidate = _array_slice(text)
    if candidate is None:
        return None
    try:
        parsed = json.loads(TRAILING_COMMA_PATTERN.sub(r"\1", candidate))
    except (ValueError, RecursionError) as e:
        logger.debug(f"Type-pattern parse failed: {e}")
        return None
    return parsed if isinstance(parsed, list) and parsed else None


def _scrape_fields(text: str, diffs_context: Sequence[MetricDiff]) -> Optional[List[Any]]:
    title = TITLE_PATTERN.search(text)
    if not title:
        return None

    severity = SEVERITY_PATTERN.search(text)
    insight_type = TYPE_PATTERN.search(text)
    description = DESCRIPTION_PATTERN.search(text)

    insight = AIInsight(
        type=insight_type.group(1) if insight_type else "analysis",
        severity=severity.group(1) if severity else "medium",
        confidence=0.7,
        title=title.group(1),
        description=(
            description.group(1)
            if description
            else "Performance analysis completed - check logs for details"
        ),
        actionable_steps=["Review detailed analysis in backend logs"],
        affected_metrics=extract_metric_names(text) or _degraded_keys(diffs_context),
        business_impact="Performance analysis insights available",
        priority_score="P3",
        effort_estimate="medium",
    )
    return [insight.to_dict()]


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("direct", _parse_direct),
    ("array_substring", _parse_array_substring),
    ("type_pattern", _parse_type_pattern),
    ("field_scrape", _scrape_fields),
)


def build_parsing_issue_insight(
    text: str, diffs_context: Sequence[MetricDiff] = ()
) -> Dict[str, Any]:
    """
    Build the terminal ``parsing_issue`` insight used when nothing parses.

    Args:
        text: Raw model output (scraped for metric names)
        diffs_context: Comparison records; degraded keys are used when the
            text names no metrics

    Returns:
        Insight dict
    """
    insight = AIInsight(
        type="parsing_issue",
        severity="medium",
        confidence=0.6,
        title="AI Analysis Generated (Format Issue)",
        description=(
            "AI provided detailed performance analysis but output format needs "
            "adjustment. Check backend logs for complete analysis."
        ),
        immediate_actions=[
            "Review backend console for complete AI analysis",
            "Check JSON formatting in AI response",
            "Verify prompt format compliance",
        ],
        affected_metrics=extract_metric_names(text) or _degraded_keys(diffs_context),
        business_impact="Performance insights available - see logs for detailed recommendations",
        priority_score="P3",
        effort_estimate="low",
        expected_improvement="Display formatting fix needed",
    )
    return insight.to_dict()


def _stamp(insights: List[Any], generated_at: str) -> List[Any]:
    stamped: List[Any] = []
    for item in insights:
        if isinstance(item, dict) and "generated_at" not in item:
            item = {**item, "generated_at": generated_at}
        stamped.append(item)
    return stamped


def recover_insights(
    raw_text: Optional[str], diffs_context: Sequence[MetricDiff] = ()
) -> List[Any]:
    """
    Turn raw model output into a non-empty, JSON-serializable insight list.

    Never raises. Parsed arrays are passed through as-is (non-dict elements
    included); dict elements are stamped with ``generated_at``.

    Args:
        raw_text: Model response text
        diffs_context: Comparison records the response was generated for

    Returns:
        List with at least one element
    """
    text = raw_text or ""
    generated_at = datetime.now(timezone.utc).isoformat()

    insights: Optional[List[Any]] = None
    for name, strategy in STRATEGIES:
        logger.debug(f"Trying insight recovery strategy: {name}")
        insights = strategy(text, diffs_context)
        if insights is not None:
            logger.info(f"Recovered {len(insights)} insight(s) via '{name}' strategy")
            break

    if insights is None:
        logger.warning("All insight parsing strategies failed, using parsing_issue fallback")
        insights = [build_parsing_issue_insight(text, diffs_context)]

    insights = _stamp(insights, generated_at)

    try:
        json.dumps(insights, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning(f"Recovered insights are not JSON-serializable ({e}), using fallback")
        insights = _stamp([build_parsing_issue_insight(text, diffs_context)], generated_at)

    return insights
