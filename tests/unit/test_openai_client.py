"""Unit tests for the text-generation client factory."""

from unittest.mock import patch

import pytest

from perf_compare.errors import ConfigurationError
from perf_compare.services.openai_client import (
    get_client_and_model,
    get_default_model,
    get_openai_client,
    is_azure_openai_configured,
)


class TestProviderSelection:
    """Tests for Azure vs OpenAI selection."""

    def test_no_credentials(self):
        assert not is_azure_openai_configured()
        with pytest.raises(ConfigurationError):
            get_openai_client()

    def test_azure_preferred(self, monkeypatch):
        monkeypatch.setenv("AZURE_OPENAI_API_KEY", "azure-key")
        monkeypatch.setenv("AZURE_OPENAI_BASE_URL", "https://res.openai.azure.com/openai/v1/")
        monkeypatch.setenv("OPENAI_API_KEY", "openai-key")

        with patch("openai.AzureOpenAI") as azure:
            get_openai_client()

        kwargs = azure.call_args.kwargs
        assert kwargs["azure_endpoint"] == "https://res.openai.azure.com"
        assert kwargs["api_key"] == "azure-key"

    def test_standard_openai(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "openai-key")

        with patch("openai.OpenAI") as openai_cls:
            get_openai_client()

        openai_cls.assert_called_once_with(api_key="openai-key")


class TestDefaultModel:
    """Tests for model resolution."""

    def test_openai_default(self):
        assert get_default_model() == "gpt-4o-mini"

    def test_azure_deployment(self, monkeypatch):
        monkeypatch.setenv("AZURE_OPENAI_API_KEY", "k")
        monkeypatch.setenv("AZURE_OPENAI_ENDPOINT", "https://res.openai.azure.com/")
        monkeypatch.setenv("AZURE_OPENAI_DEPLOYMENT", "perf-gpt")
        assert get_default_model() == "perf-gpt"

    def test_override(self, monkeypatch):
        monkeypatch.setenv("PERF_COMPARE_MODEL", "special")
        assert get_default_model() == "special"

    def test_client_and_model(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "k")
        with patch("openai.OpenAI"):
            _, model = get_client_and_model(model="explicit")
        assert model == "explicit"
