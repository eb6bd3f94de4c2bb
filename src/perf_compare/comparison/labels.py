"""Human-readable labels for metric keys."""

import re
from typing import Dict

FRIENDLY_LABELS: Dict[str, str] = {
    "responseTimeAvg": "Avg Response Time (ms)",
    "responseTimeP95": "p95 Response Time (ms)",
    "responseTimeP99": "p99 Response Time (ms)",
    "latencyAvg": "Avg Latency (ms)",
    "throughput": "Throughput (req/s)",
    "rps": "Requests per Second",
    "errorRate": "Error Rate (%)",
    "failures": "Failures (%)",
    "cpu": "CPU (%)",
    "memory": "Memory (MB)",
}

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_PERCENTILE_TOKEN = re.compile(r"\b(p\d{2})\b", re.IGNORECASE)
_BARE_CPU = re.compile(r"^cpu$", re.IGNORECASE)
_BARE_MEMORY = re.compile(r"^mem(ory)?$", re.IGNORECASE)


def label_for_key(key: str) -> str:
    """
    Return the friendly label for a metric key.

    Unknown keys are split on camelCase boundaries and underscores, and the
    first percentile token is upper-cased:
    ``dashboardLoadTime`` -> ``dashboard Load Time``, ``api_p95_ms`` -> ``api P95 ms``.
    """
    if key in FRIENDLY_LABELS:
        return FRIENDLY_LABELS[key]
    label = _CAMEL_BOUNDARY.sub(r"\1 \2", key).replace("_", " ")
    label = _PERCENTILE_TOKEN.sub(lambda m: m.group(1).upper(), label, count=1)
    label = _BARE_CPU.sub("CPU (%)", label)
    return _BARE_MEMORY.sub("Memory", label)
