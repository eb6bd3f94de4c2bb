"""Services: text-generation client, response cache and export."""

from perf_compare.services.export import export_comparison
from perf_compare.services.openai_client import (
    get_client_and_model,
    get_default_model,
    get_openai_client,
    is_azure_openai_configured,
)
from perf_compare.services.response_cache import ResponseCache, cache_key

__all__ = [
    "ResponseCache",
    "cache_key",
    "export_comparison",
    "get_client_and_model",
    "get_default_model",
    "get_openai_client",
    "is_azure_openai_configured",
]
