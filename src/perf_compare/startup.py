"""Centralized initialization for perf_compare entry points.

Loads environment variables from ``.env`` (OpenAI / Azure OpenAI
credentials) exactly once per process. The CLI and any embedding service
should call ensure_initialized() before touching the text-generation client.
"""

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Module-level state
_initialized: bool = False
_env_path: Optional[Path] = None


def _find_env_file(start_path: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest .env walking up from the working directory.

    Args:
        start_path: Starting directory. Defaults to the current directory.

    Returns:
        Path to the .env file, or None if there is none.
    """
    current = (start_path or Path.cwd()).resolve()
    for parent in [current] + list(current.parents):
        candidate = parent / ".env"
        if candidate.is_file():
            return candidate
    return None


def ensure_initialized(start_path: Optional[Path] = None) -> Optional[Path]:
    """Load .env once; later calls are no-ops.

    Variables already present in the environment are not overridden.

    Returns:
        The .env path that was loaded, or None.
    """
    global _initialized, _env_path

    if _initialized:
        return _env_path

    _env_path = _find_env_file(start_path)
    if _env_path:
        load_dotenv(_env_path)
        logger.debug(f"Loaded .env from {_env_path}")
    else:
        logger.debug("No .env file found")

    _initialized = True
    return _env_path


def reset_initialization() -> None:
    """Reset initialization state (for tests)."""
    global _initialized, _env_path
    _initialized = False
    _env_path = None
