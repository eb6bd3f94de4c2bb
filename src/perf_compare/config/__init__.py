"""Analysis settings management."""

from perf_compare.config.settings import (
    AnalysisSettings,
    get_settings,
    load_settings,
    reset_settings_cache,
)

__all__ = [
    "AnalysisSettings",
    "get_settings",
    "load_settings",
    "reset_settings_cache",
]
