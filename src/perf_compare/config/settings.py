"""Analysis settings schema and loader.

Settings are read from ``perf_compare.yaml`` in the working directory, or
from the file named by the ``PERF_COMPARE_CONFIG`` environment variable.
Every field has a default, so running without a config file is normal.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationInfo, field_validator

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PERF_COMPARE_CONFIG"
DEFAULT_CONFIG_FILENAME = "perf_compare.yaml"


class AnalysisSettings(BaseModel):
    """Tunables for insight generation and caching.

    Attributes:
        model: Model/deployment name. None means resolve from the environment.
        temperature: Sampling temperature for the chat completion.
        max_tokens: Completion token cap.
        prompt_name: Prompt template under ``perf_compare/prompts``.
        cache_ttl_seconds: Lifetime of cached responses.
        max_insights: Number of insights the prompt asks for.
        degradation_threshold_pct: Rule-based fallback reporting cut-off.
        critical_threshold_pct: Above this the fallback severity is ``high``.
    """

    model: Optional[str] = Field(default=None, description="Model or deployment name")
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4096, gt=0)
    prompt_name: str = Field(default="performance_analysis", min_length=1)
    cache_ttl_seconds: float = Field(default=300.0, gt=0)
    max_insights: int = Field(default=5, gt=0)
    degradation_threshold_pct: float = Field(default=20.0, ge=0)
    critical_threshold_pct: float = Field(default=50.0, ge=0)

    @field_validator("critical_threshold_pct")
    @classmethod
    def validate_critical_threshold(cls, v: float, info: ValidationInfo) -> float:
        """Critical threshold must not be below the degradation threshold."""
        degradation = info.data.get("degradation_threshold_pct")
        if degradation is not None and v < degradation:
            raise ValueError(
                f"critical_threshold_pct ({v}) must be >= degradation_threshold_pct ({degradation})"
            )
        return v


def _default_config_path() -> Path:
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / DEFAULT_CONFIG_FILENAME


def load_settings(config_path: Optional[Path] = None) -> AnalysisSettings:
    """Load analysis settings from YAML.

    Args:
        config_path: Optional explicit path. Defaults to ``$PERF_COMPARE_CONFIG``
            or ``./perf_compare.yaml``.

    Returns:
        AnalysisSettings (defaults when the file is missing or empty).

    Raises:
        ValueError: If the file exists but contains invalid configuration.
    """
    if config_path is None:
        config_path = _default_config_path()

    if not config_path.exists():
        logger.debug(f"No settings file at {config_path}, using defaults")
        return AnalysisSettings()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in settings file {config_path}: {e}")

    if data is None:
        logger.warning(f"Empty settings file at {config_path}")
        return AnalysisSettings()

    try:
        settings = AnalysisSettings.model_validate(data)
    except Exception as e:
        raise ValueError(f"Failed to load settings from {config_path}: {e}")

    logger.debug(f"Loaded analysis settings from {config_path}")
    return settings


# Cached settings (loaded once per session)
_cached_settings: Optional[AnalysisSettings] = None


def get_settings(force_reload: bool = False) -> AnalysisSettings:
    """Get the current analysis settings (cached).

    Args:
        force_reload: If True, reload from disk even if cached.
    """
    global _cached_settings

    if force_reload or _cached_settings is None:
        _cached_settings = load_settings()

    return _cached_settings


def reset_settings_cache() -> None:
    """Reset the settings cache."""
    global _cached_settings
    _cached_settings = None
