"""
Pytest fixtures shared by the perf_compare test suite.
"""

import json
from pathlib import Path

import pytest

from perf_compare.config import reset_settings_cache
from perf_compare.schemas.comparison import MetricDiff


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep tests away from any perf_compare.yaml or credentials on the host."""
    monkeypatch.setenv("PERF_COMPARE_CONFIG", str(tmp_path / "missing-perf_compare.yaml"))
    for var in (
        "PERF_COMPARE_MODEL",
        "AZURE_OPENAI_API_KEY",
        "AZURE_OPENAI_ENDPOINT",
        "AZURE_OPENAI_BASE_URL",
        "AZURE_OPENAI_DEPLOYMENT",
        "OPENAI_API_KEY",
        "OPENAI_MODEL",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def baseline_report():
    """Simple-format baseline report."""
    return {
        "name": "release-1.0",
        "timestamp": "2024-05-01T12:00:00Z",
        "metrics": {
            "responseTimeAvg": 200,
            "throughput": 500,
            "errorRate": 0.01,
        },
    }


@pytest.fixture
def current_report():
    """Simple-format current report with a response-time regression."""
    return {
        "name": "release-1.1",
        "timestamp": "2024-05-02T12:00:00Z",
        "metrics": {
            "responseTimeAvg": 300,
            "throughput": 480,
            "errorRate": 0.01,
        },
    }


@pytest.fixture
def k6_document():
    """Trimmed k6 summary export."""
    return {
        "root_group": {
            "name": "",
            "checks": [
                {"name": "status is 200", "passes": 9, "fails": 1},
                {"name": "body has token", "passes": 10, "fails": 0},
            ],
        },
        "state": {"testRunDurationMs": 30000},
        "metrics": {
            "browser_web_vital_lcp": {
                "type": "trend",
                "contains": "time",
                "values": {"avg": 1200, "p(95)": 2100, "min": 800, "max": 2500},
            },
            "login_response_time": {
                "type": "trend",
                "contains": "time",
                "values": {
                    "avg": 350,
                    "p(95)": 700,
                    "min": 120,
                    "max": 900,
                    "p(90)": 600,
                    "med": 320,
                },
                "thresholds": {"p(95)<2000": {"ok": True}},
            },
            "errors": {
                "type": "rate",
                "values": {"rate": 0.02, "passes": 2, "fails": 98},
                "thresholds": {"rate<0.05": {"ok": True}},
            },
            "http_reqs": {
                "type": "counter",
                "contains": "default",
                "values": {"count": 100, "rate": 10},
            },
        },
    }


@pytest.fixture
def make_diff():
    """Factory for MetricDiff records."""

    def _make(key, baseline=None, current=None, pct=None, trend="same", better_when="lower"):
        change = None if baseline is None or current is None else current - baseline
        return MetricDiff(
            key=key,
            label=key,
            baseline=baseline,
            current=current,
            change=change,
            pct=pct,
            better_when=better_when,
            trend=trend,
        )

    return _make


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document to a file under tmp_path and return its path."""

    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
