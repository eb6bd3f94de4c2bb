"""Allow-list for flattening k6-style nested statistical metrics.

A k6 summary export carries one statistical bundle per metric, often
hundreds of them (one per check, group, URL tag...). Only the metrics
listed in ``NESTED_METRIC_SPECS`` make it into the canonical map; each
entry names the statistical fields to pull and how to rename them.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Tuple

NESTED_METRIC_TYPES = frozenset({"rate", "trend", "counter", "gauge"})

AVG_P95: Tuple[str, ...] = ("avg", "p(95)")
FULL_STATS: Tuple[str, ...] = ("avg", "p(95)", "min", "max", "p(90)", "med")


def stat_suffix(field_name: str) -> str:
    """Turn a k6 statistic name into a key fragment: 'p(95)' -> 'p95'."""
    return field_name.replace("(", "").replace(")", "")


def _avg_p95(prefix: str) -> Callable[[str, str], str]:
    def rename(metric_name: str, field_name: str) -> str:
        return f"{prefix}_p95_ms" if field_name == "p(95)" else f"{prefix}_avg_ms"

    return rename


def _fixed(key: str) -> Callable[[str, str], str]:
    def rename(metric_name: str, field_name: str) -> str:
        return key

    return rename


def _templated(template: str) -> Callable[[str, str], str]:
    def rename(metric_name: str, field_name: str) -> str:
        return template.format(stat=stat_suffix(field_name))

    return rename


@dataclass(frozen=True)
class NestedMetricSpec:
    """Extraction rule for one allow-listed nested metric."""

    fields: Tuple[str, ...]
    rename: Callable[[str, str], str]
    include_thresholds: bool = False


NESTED_METRIC_SPECS: Dict[str, NestedMetricSpec] = {
    # Core Web Vitals (browser module)
    "browser_web_vital_fcp": NestedMetricSpec(AVG_P95, _avg_p95("fcp")),
    "browser_web_vital_lcp": NestedMetricSpec(AVG_P95, _avg_p95("lcp")),
    "browser_web_vital_cls": NestedMetricSpec(("avg",), _fixed("cls_avg")),
    "browser_web_vital_fid": NestedMetricSpec(AVG_P95, _avg_p95("fid")),
    "browser_web_vital_inp": NestedMetricSpec(AVG_P95, _avg_p95("inp")),
    "browser_web_vital_ttfb": NestedMetricSpec(AVG_P95, _avg_p95("ttfb")),
    # Test-app web vitals
    "test_app_web_vital_fcp": NestedMetricSpec(FULL_STATS, _templated("test_app_fcp_{stat}")),
    "test_app_web_vital_lcp": NestedMetricSpec(FULL_STATS, _templated("test_app_lcp_{stat}")),
    "test_app_web_vital_cls": NestedMetricSpec(FULL_STATS, _templated("test_app_cls_{stat}")),
    "test_app_web_vital_inp": NestedMetricSpec(FULL_STATS, _templated("test_app_inp_{stat}")),
    "test_app_web_vital_ttfb": NestedMetricSpec(FULL_STATS, _templated("test_app_ttfb_{stat}")),
    # Response times
    "login_response_time": NestedMetricSpec(
        FULL_STATS, _templated("login_response_{stat}_ms"), include_thresholds=True
    ),
    "dashboard_load_time": NestedMetricSpec(FULL_STATS, _templated("dashboard_load_{stat}_ms")),
    "api_response_time": NestedMetricSpec(FULL_STATS, _templated("api_response_{stat}_ms")),
    "users_api_response_time": NestedMetricSpec(
        FULL_STATS, _templated("users_api_response_{stat}_ms")
    ),
    "database_query_time": NestedMetricSpec(FULL_STATS, _templated("database_query_{stat}_ms")),
    # System resources
    "memory_usage_mb": NestedMetricSpec(FULL_STATS, _templated("memory_usage_{stat}_mb")),
    "cpu_utilization_percent": NestedMetricSpec(
        FULL_STATS, _templated("cpu_utilization_{stat}_pct")
    ),
    "javascript_heap_size_mb": NestedMetricSpec(FULL_STATS, _templated("js_heap_size_{stat}_mb")),
    # UI interactions
    "websocket_connection_time": NestedMetricSpec(
        FULL_STATS, _templated("websocket_connection_{stat}_ms")
    ),
    "meeting_creation_time": NestedMetricSpec(FULL_STATS, _templated("meeting_creation_{stat}_ms")),
    "calendar_navigation_time": NestedMetricSpec(
        FULL_STATS, _templated("calendar_navigation_{stat}_ms")
    ),
    "notification_processing_time": NestedMetricSpec(
        FULL_STATS, _templated("notification_processing_{stat}_ms")
    ),
    "resource_load_time": NestedMetricSpec(FULL_STATS, _templated("resource_load_{stat}_ms")),
    "profile_load_time": NestedMetricSpec(FULL_STATS, _templated("profile_load_{stat}_ms")),
    # HTTP
    "test_app_http_req_failed": NestedMetricSpec(
        ("rate",), _fixed("test_app_http_req_failed_rate")
    ),
    "browser_http_req_duration": NestedMetricSpec(AVG_P95, _avg_p95("http_req")),
    "browser_http_req_failed": NestedMetricSpec(("rate",), _fixed("http_req_failed_rate")),
    # Page load (older scripts)
    "page_load_time": NestedMetricSpec(AVG_P95, _avg_p95("page_load")),
    "navigation_time": NestedMetricSpec(("avg",), _fixed("navigation_avg_ms")),
    "login_time": NestedMetricSpec(AVG_P95, _avg_p95("login"), include_thresholds=True),
    # Success rates
    "successful_requests": NestedMetricSpec(
        ("rate",), _fixed("successful_requests_rate"), include_thresholds=True
    ),
    "errors": NestedMetricSpec(("rate",), _fixed("error_rate"), include_thresholds=True),
    "checks": NestedMetricSpec(("rate",), _fixed("checks_rate")),
    # Volume context
    "iterations": NestedMetricSpec(("count",), _fixed("total_iterations")),
    "requests": NestedMetricSpec(("count",), _fixed("total_requests")),
}


def is_nested_metric(value: Any) -> bool:
    """Return True if value looks like a k6 statistical bundle."""
    return (
        isinstance(value, Mapping)
        and value.get("type") in NESTED_METRIC_TYPES
        and isinstance(value.get("values"), Mapping)
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def flatten_nested_metrics(metrics: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Flatten allow-listed nested metrics into a flat name -> value map.

    Metrics absent from ``NESTED_METRIC_SPECS`` are dropped silently.
    Values are returned raw; numeric coercion happens downstream.

    Args:
        metrics: The document's ``metrics`` mapping

    Returns:
        Flat mapping of renamed keys to raw statistic values
    """
    flat: Dict[str, Any] = {}

    for metric_name, metric in metrics.items():
        spec = NESTED_METRIC_SPECS.get(metric_name)
        if spec is None or not is_nested_metric(metric):
            continue

        values = metric["values"]
        for field_name in spec.fields:
            value = values.get(field_name)
            if _is_number(value):
                flat[spec.rename(metric_name, field_name)] = value

        thresholds = metric.get("thresholds")
        if spec.include_thresholds and isinstance(thresholds, Mapping) and thresholds:
            # A metric passes only if every threshold on it passed
            all_ok = all(
                isinstance(t, Mapping) and bool(t.get("ok")) for t in thresholds.values()
            )
            flat[f"{metric_name}_threshold_ok"] = 1 if all_ok else 0

    return flat


def _iter_checks(checks: Any) -> List[Mapping[str, Any]]:
    # k6 emits checks either as a list or keyed by check name
    if isinstance(checks, Mapping):
        return [c for c in checks.values() if isinstance(c, Mapping)]
    if isinstance(checks, list):
        return [c for c in checks if isinstance(c, Mapping)]
    return []


def aggregate_checks(document: Mapping[str, Any]) -> Dict[str, float]:
    """
    Summarize ``root_group.checks`` into pass/fail totals and a success ratio.

    Computed independently of the allow-list whenever checks are present.

    Args:
        document: The full k6 summary document

    Returns:
        Empty dict when there is no checks substructure, otherwise
        ``checks_total_passes``, ``checks_total_fails`` and ``checks_success_rate``
    """
    root_group = document.get("root_group")
    if not isinstance(root_group, Mapping) or "checks" not in root_group:
        return {}

    total_passes = 0.0
    total_fails = 0.0
    for check in _iter_checks(root_group["checks"]):
        passes = check.get("passes")
        fails = check.get("fails")
        total_passes += passes if _is_number(passes) else 0
        total_fails += fails if _is_number(fails) else 0

    total = total_passes + total_fails
    return {
        "checks_total_passes": total_passes,
        "checks_total_fails": total_fails,
        "checks_success_rate": total_passes / total if total > 0 else 0.0,
    }
