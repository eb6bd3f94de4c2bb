"""Unit tests for AI insight generation with a mocked chat client."""

from unittest.mock import MagicMock

import pytest

from perf_compare.config import AnalysisSettings
from perf_compare.insights.generator import (
    InsightGenerator,
    build_analysis_messages,
    impact_level,
)
from perf_compare.services.response_cache import ResponseCache


def _client_returning(content):
    client = MagicMock()
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    client.chat.completions.create.return_value = response
    return client


@pytest.fixture
def diffs(make_diff):
    return [
        make_diff("responseTimeAvg", 200, 400, pct=100, trend="worse"),
        make_diff("cpu", 40, 52, pct=30, trend="worse"),
        make_diff("throughput", 500, 480, pct=-4, better_when="higher"),
    ]


@pytest.fixture
def settings():
    return AnalysisSettings(model="test-model")


class TestImpactLevel:
    """Tests for impact bucketing."""

    def test_buckets(self):
        assert impact_level(60, 20, 50) == "CRITICAL"
        assert impact_level(-30, 20, 50) == "HIGH"
        assert impact_level(15, 20, 50) == "MEDIUM"
        assert impact_level(5, 20, 50) == "NORMAL"
        assert impact_level(None, 20, 50) == "NORMAL"


class TestBuildAnalysisMessages:
    """Tests for prompt rendering."""

    def test_system_and_user_messages(self, diffs, settings):
        messages = build_analysis_messages(diffs, {"environment": "staging"}, settings)

        assert [m["role"] for m in messages] == ["system", "user"]
        user = messages[1]["content"]
        assert "Environment: staging" in user
        assert "Technology Stack: web application" in user
        assert "responseTimeAvg: 200 -> 400 (100.0% change) [CRITICAL]" in user
        assert "cpu: 40 -> 52 (30.0% change) [HIGH]" in user
        assert "Total Degraded Metrics: 2 metrics" in user
        assert "Maximum 5 insights" in user

    def test_advanced_context_section(self, diffs, settings):
        messages = build_analysis_messages(
            diffs, {"recent_changes": "Upgraded ORM", "team": "backend"}, settings
        )

        user = messages[1]["content"]
        assert "ADVANCED CONTEXT PROVIDED BY USER" in user
        assert "Upgraded ORM" in user
        assert "Team Focus: backend team perspective needed" in user

    def test_no_advanced_context_by_default(self, diffs, settings):
        user = build_analysis_messages(diffs, None, settings)[1]["content"]
        assert "ADVANCED CONTEXT" not in user


class TestInsightGenerator:
    """Tests for InsightGenerator.generate."""

    def test_recovers_insights_from_response(self, diffs, settings):
        client = _client_returning('Sure! [{"title": "DB pool exhausted", "severity": "high"}]')
        generator = InsightGenerator(client=client, settings=settings)

        insights = generator.generate(diffs)

        assert insights[0]["title"] == "DB pool exhausted"
        assert generator.last_source == "ai"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 4096

    def test_cached_response_reused(self, diffs, settings):
        client = _client_returning('[{"title": "A"}]')
        generator = InsightGenerator(client=client, settings=settings)

        first = generator.generate(diffs)
        second = generator.generate(diffs)

        assert first == second
        assert client.chat.completions.create.call_count == 1
        assert generator.last_source == "cache"

    def test_cache_expiry_triggers_new_call(self, diffs, settings):
        now = [0.0]
        cache = ResponseCache(ttl_seconds=300, clock=lambda: now[0])
        client = _client_returning('[{"title": "A"}]')
        generator = InsightGenerator(client=client, settings=settings, cache=cache)

        generator.generate(diffs)
        now[0] = 301.0
        generator.generate(diffs)

        assert client.chat.completions.create.call_count == 2

    def test_client_error_falls_back_to_rules(self, diffs, settings):
        client = MagicMock()
        client.chat.completions.create.side_effect = RuntimeError("503 Service Unavailable")
        generator = InsightGenerator(client=client, settings=settings)

        insights = generator.generate(diffs)

        assert generator.last_source == "fallback"
        assert [i["affected_metrics"] for i in insights] == [["responseTimeAvg"], ["cpu"]]

    def test_empty_content_falls_back(self, diffs, settings):
        generator = InsightGenerator(client=_client_returning(""), settings=settings)
        insights = generator.generate(diffs)
        assert generator.last_source == "fallback"
        assert insights[0]["type"] == "anomaly"

    def test_missing_credentials_fall_back(self, diffs, settings):
        generator = InsightGenerator(settings=settings)

        insights = generator.generate(diffs)

        assert generator.last_source == "fallback"
        assert len(insights) == 2

    def test_malformed_output_still_yields_insight(self, diffs, settings):
        generator = InsightGenerator(client=_client_returning("no json at all"), settings=settings)

        insights = generator.generate(diffs)

        assert insights[0]["type"] == "parsing_issue"
        assert insights[0]["affected_metrics"] == ["responseTimeAvg", "cpu"]

    def test_model_resolved_from_environment(self, monkeypatch):
        monkeypatch.setenv("OPENAI_MODEL", "gpt-test")
        generator = InsightGenerator(client=MagicMock(), settings=AnalysisSettings())
        assert generator.model == "gpt-test"
