"""
TTL-based in-memory cache for repository entities.
Provides per-entry expiration with lazy eviction on read.
"""

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

from portfolio.interfaces.cache import ICache

DEFAULT_TTL_SECONDS = 300


class InMemoryCache(ICache):
    """
    TTL-based cache scoped to a single repository.

    Features:
    - Per-entry TTL (time-to-live) expiration
    - Lazy eviction: an expired entry is deleted by the read that finds it
    - Thread-safe operations (check and evict happen under one lock)
    - Cache statistics tracking
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize the cache.

        Args:
            clock: Returns the current time in seconds. Injectable for tests.
        """
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._clock = clock
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def _lookup(self, key: str) -> Tuple[bool, Optional[Any]]:
        """
        Find an unexpired entry, evicting it if it has expired.

        Must be called with the lock held.
        """
        entry = self._entries.get(key)
        if entry is None:
            return False, None

        value, expires_at = entry
        if self._clock() > expires_at:
            del self._entries[key]
            return False, None

        return True, value

    async def get(self, key: str) -> Optional[Any]:
        with self._lock:
            found, value = self._lookup(key)
            if found:
                self._hits += 1
            else:
                self._misses += 1
            return value

    async def set(self, key: str, value: Any, ttl: float = DEFAULT_TTL_SECONDS) -> None:
        """Store ``value`` until ``ttl`` seconds from now.

        A ``ttl`` of zero or less is already expired: any existing entry for
        ``key`` is dropped and nothing is stored.
        """
        with self._lock:
            if ttl <= 0:
                self._entries.pop(key, None)
                return
            self._entries[key] = (value, self._clock() + ttl)

    async def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    async def has(self, key: str) -> bool:
        with self._lock:
            found, _ = self._lookup(key)
            return found

    def stats(self) -> dict:
        """
        Return cache statistics.

        Returns:
            Dictionary containing cache statistics:
            - backend: "memory"
            - size: Current number of stored entries (expired ones included
              until a read evicts them)
            - hits: Number of cache hits
            - misses: Number of cache misses
            - hit_rate: Ratio of hits to total lookups (0-1)
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = self._hits / total if total > 0 else 0.0

            return {
                "backend": "memory",
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": hit_rate,
            }

    def __len__(self) -> int:
        return len(self._entries)
