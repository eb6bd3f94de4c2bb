"""Directionality-aware trend classification.

Whether a metric should go up or down is inferred from its name alone;
there is no schema. Names that don't match the higher-is-better pattern
(including custom ones such as "score") are treated as lower-is-better.
"""

import re
from typing import Optional, Tuple

from perf_compare.schemas.comparison import BetterWhen, Trend, TrendClassification

HIGHER_IS_BETTER_PATTERN = re.compile(r"(throughput|rps|tps|success|pass)", re.IGNORECASE)
LOWER_IS_BETTER_PATTERN = re.compile(
    r"(latency|response|time|p\d+|error|fail|cpu|mem(ory)?)", re.IGNORECASE
)

# Changes smaller than this (in percent) are measurement jitter
NOISE_FLOOR_PCT = 5.0


def better_when_for_key(key: str) -> BetterWhen:
    """Infer the improvement direction from a metric name."""
    if HIGHER_IS_BETTER_PATTERN.search(key):
        return BetterWhen.HIGHER
    return BetterWhen.LOWER


def has_known_direction(key: str) -> bool:
    """False for names matching neither pattern; those default to lower-is-better."""
    return bool(HIGHER_IS_BETTER_PATTERN.search(key) or LOWER_IS_BETTER_PATTERN.search(key))


def compute_change(
    baseline: Optional[float], current: Optional[float]
) -> Tuple[Optional[float], Optional[float]]:
    """
    Absolute and percentage change between two values.

    ``pct`` is 0 when the baseline is exactly 0; ``change`` still carries the
    absolute difference.

    Returns:
        (change, pct), both None unless both sides are present
    """
    if baseline is None or current is None:
        return None, None
    change = current - baseline
    pct = 0.0 if baseline == 0 else change / baseline * 100
    return change, pct


def classify_trend(
    key: str, baseline: Optional[float], current: Optional[float]
) -> TrendClassification:
    """
    Decide whether a metric improved, got worse, or stayed the same.

    Args:
        key: Metric name
        baseline: Baseline value, None if absent from the baseline report
        current: Current value, None if absent from the current report

    Returns:
        TrendClassification with direction, trend, change and pct
    """
    better_when = better_when_for_key(key)
    change, pct = compute_change(baseline, current)

    if change is None or pct is None:
        trend = Trend.UNKNOWN
    elif abs(pct) < NOISE_FLOOR_PCT:
        trend = Trend.SAME
    elif better_when == BetterWhen.LOWER:
        trend = Trend.IMPROVED if change < 0 else Trend.WORSE
    else:
        trend = Trend.IMPROVED if change > 0 else Trend.WORSE

    return TrendClassification(better_when=better_when, trend=trend, change=change, pct=pct)
