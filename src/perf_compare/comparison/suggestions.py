"""Deterministic remediation tips derived from degraded metrics.

These complement (and stand in for) model-generated insights: each rule
matches a family of metric names and fires when any metric in that family
got worse by at least ``threshold_pct``.
"""

import re
from typing import List, Optional, Pattern, Sequence, Tuple

from perf_compare.comparison.trend import NOISE_FLOOR_PCT
from perf_compare.schemas.comparison import MetricDiff, Trend

SUGGESTION_RULES: Tuple[Tuple[Pattern[str], Tuple[str, ...]], ...] = (
    (
        re.compile(r"response|latency|p95|p99|time", re.IGNORECASE),
        (
            "Optimize slow endpoints: add caching (CDN/app), reduce payloads, "
            "and batch or parallelize dependent calls.",
            "Investigate database hotspots: add indexes, analyze slow queries, "
            "and consider pagination.",
        ),
    ),
    (
        re.compile(r"throughput|rps|tps", re.IGNORECASE),
        (
            "Scale horizontally: increase instances or use autoscaling.",
            "Enable keep-alive and connection pooling to reduce overhead.",
        ),
    ),
    (
        re.compile(r"error|fail", re.IGNORECASE),
        (
            "Add circuit breakers, timeouts, and retries to improve resiliency.",
            "Check dependency health (DB, cache, 3rd-party) and increase capacity "
            "or rate limits.",
        ),
    ),
    (
        re.compile(r"cpu", re.IGNORECASE),
        (
            "Profile CPU hotspots; optimize algorithms and avoid unnecessary "
            "JSON/serialization.",
            "Enable gzip/br compression and HTTP/2 to reduce CPU spent on IO.",
        ),
    ),
    (
        re.compile(r"mem|memory", re.IGNORECASE),
        (
            "Find leaks with heap snapshots; reuse buffers; stream large payloads "
            "instead of loading into memory.",
            "Tune GC and object lifetimes; avoid retaining large arrays/maps.",
        ),
    ),
)

REBASELINE_TIP = (
    "Baseline again with controlled environment (same dataset, warm cache) "
    "to ensure fair comparison."
)


def _significantly_worse(diff: MetricDiff, threshold_pct: float) -> bool:
    return diff.trend == Trend.WORSE and (diff.pct is None or abs(diff.pct) >= threshold_pct)


def suggestions_from_diffs(
    diffs: Sequence[MetricDiff], threshold_pct: Optional[float] = None
) -> List[str]:
    """
    Build a de-duplicated list of remediation tips.

    Args:
        diffs: Comparison records
        threshold_pct: Minimum |pct| for a degraded metric to count
            (defaults to the noise floor)

    Returns:
        Tips in rule order, with a generic re-baseline tip appended when
        anything got worse
    """
    threshold = NOISE_FLOOR_PCT if threshold_pct is None else threshold_pct
    tips: List[str] = []

    for pattern, rule_tips in SUGGESTION_RULES:
        if any(pattern.search(d.key) and _significantly_worse(d, threshold) for d in diffs):
            tips.extend(tip for tip in rule_tips if tip not in tips)

    if any(d.trend == Trend.WORSE for d in diffs):
        tips.append(REBASELINE_TIP)

    return tips
