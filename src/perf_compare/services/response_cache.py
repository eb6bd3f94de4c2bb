"""In-memory TTL cache for text-generation responses.

Entries are keyed by the SHA-256 of the canonical JSON of the request
payload. There is no partial invalidation: entries expire after the TTL or
all at once via clear().
"""

import hashlib
import json
import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300.0


def cache_key(payload: Any) -> str:
    """SHA-256 hex digest of the payload's canonical JSON form."""
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class ResponseCache:
    """Caller-owned response cache with a fixed time-to-live."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}

    def get(self, payload: Any) -> Optional[Any]:
        """Cached value for ``payload``, or None if absent or expired."""
        key = cache_key(payload)
        entry = self._entries.get(key)
        if entry is None:
            return None

        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            logger.debug(f"Cache entry {key[:12]} expired")
            return None

        logger.debug(f"Cache hit for {key[:12]}")
        return value

    def set(self, payload: Any, value: Any) -> None:
        """Store ``value`` for ``payload``, replacing any existing entry."""
        self._entries[cache_key(payload)] = (self._clock(), value)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
