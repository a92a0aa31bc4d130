"""
In-memory TTL cache for lookup results.

Entries are stored as ``(value, expires_at)`` tuples with a single dict
assignment, so concurrent readers never see a half-written entry. Equal keys
written from two requests at once simply overwrite each other.
"""

import time
from typing import Any, Callable, Dict, Optional, Tuple
import logging

from ceknik.coreutils.logging import mask_nik

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 5 * 60


class TTLCache:
    """Key/value store whose entries expire a fixed time after they are written"""

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            ttl_seconds: Lifetime of every entry from the moment it is set
            clock: Monotonic time source in seconds, injectable for tests
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if self._clock() >= expires_at:
            # Another request may have refreshed the key meanwhile; only drop ours
            if self._entries.get(key) is entry:
                self._entries.pop(key, None)
            logger.debug(f"Cache entry expired: {mask_nik(key)}")
            return None

        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (value, self._clock() + self.ttl_seconds)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
