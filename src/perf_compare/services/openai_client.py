"""
Text-generation client factory.

Insight generation talks to a chat-completions endpoint. Azure OpenAI is
used when its credentials are present, the public OpenAI API otherwise.

Environment variables:
    AZURE_OPENAI_API_KEY      - Azure OpenAI API key
    AZURE_OPENAI_ENDPOINT     - Resource endpoint (e.g., https://xxx.openai.azure.com/)
    AZURE_OPENAI_BASE_URL     - Accepted in place of ENDPOINT (a /openai/v1 suffix is dropped)
    AZURE_OPENAI_API_VERSION  - API version (default: 2024-02-15-preview)
    AZURE_OPENAI_DEPLOYMENT   - Deployment used for analysis (default: gpt-4o)

    OPENAI_API_KEY            - OpenAI API key
    OPENAI_MODEL              - Model used for analysis (default: gpt-4o-mini)

    PERF_COMPARE_MODEL        - Overrides the model/deployment for either provider
"""

import logging
import os
from typing import Any, Optional, Tuple

from perf_compare.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2024-02-15-preview"
DEFAULT_AZURE_DEPLOYMENT = "gpt-4o"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
MODEL_OVERRIDE_ENV_VAR = "PERF_COMPARE_MODEL"


def _get_azure_endpoint() -> Optional[str]:
    """Azure endpoint with trailing slashes and API path suffixes removed."""
    endpoint = os.getenv("AZURE_OPENAI_ENDPOINT") or os.getenv("AZURE_OPENAI_BASE_URL")
    if not endpoint:
        return None

    endpoint = endpoint.rstrip("/")
    for suffix in ("/openai/v1", "/openai"):
        if endpoint.endswith(suffix):
            return endpoint[: -len(suffix)]
    return endpoint


def is_azure_openai_configured() -> bool:
    """True when both the Azure key and endpoint are set."""
    return bool(os.getenv("AZURE_OPENAI_API_KEY") and _get_azure_endpoint())


def get_openai_client(api_key: Optional[str] = None) -> Any:
    """
    Create a chat-completions client.

    Args:
        api_key: Optional OpenAI key override (ignored when Azure is configured).

    Returns:
        AzureOpenAI or OpenAI client instance.

    Raises:
        ConfigurationError: If no credentials are available.
    """
    if is_azure_openai_configured():
        from openai import AzureOpenAI

        endpoint = _get_azure_endpoint()
        logger.debug(f"Creating AzureOpenAI client for {endpoint[:30]}...")
        return AzureOpenAI(
            api_key=os.getenv("AZURE_OPENAI_API_KEY"),
            api_version=os.getenv("AZURE_OPENAI_API_VERSION", DEFAULT_API_VERSION),
            azure_endpoint=endpoint,
        )

    standard_api_key = api_key or os.getenv("OPENAI_API_KEY")
    if standard_api_key:
        from openai import OpenAI

        logger.debug("Creating OpenAI client")
        return OpenAI(api_key=standard_api_key)

    raise ConfigurationError(
        "No OpenAI credentials found. Set either:\n"
        "  - AZURE_OPENAI_API_KEY + AZURE_OPENAI_ENDPOINT (for Azure OpenAI)\n"
        "  - OPENAI_API_KEY (for standard OpenAI)"
    )


def get_default_model() -> str:
    """Model (OpenAI) or deployment (Azure) name used for analysis."""
    override = os.getenv(MODEL_OVERRIDE_ENV_VAR)
    if override:
        return override
    if is_azure_openai_configured():
        return os.getenv("AZURE_OPENAI_DEPLOYMENT", DEFAULT_AZURE_DEPLOYMENT)
    return os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)


def get_client_and_model(
    api_key: Optional[str] = None, model: Optional[str] = None
) -> Tuple[Any, str]:
    """
    Client plus the model name to call it with.

    Args:
        api_key: Optional API key override.
        model: Optional model override; defaults to get_default_model().

    Returns:
        Tuple of (client, model_name)
    """
    return get_openai_client(api_key), model or get_default_model()
