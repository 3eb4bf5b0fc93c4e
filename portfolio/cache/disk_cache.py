"""Persistent entity cache using DiskCache with async support.

This module provides an async-compatible wrapper around the DiskCache library
that satisfies the repository cache contract, keeping cached entities on disk
rather than in process memory. Each instance expects a directory of its own.
"""

import asyncio
from pathlib import Path
from typing import Any, Optional

from diskcache import Cache

from portfolio.interfaces.cache import ICache

DEFAULT_TTL_SECONDS = 300


class PersistentCache(ICache):
    """Persistent TTL cache using DiskCache.

    DiskCache stores an expiry time with every entry and never returns an
    entry past it, which gives the same observable expiry rules as
    ``InMemoryCache``. An asyncio.Lock serializes access from coroutines.

    Attributes:
        _cache: The underlying DiskCache instance
        _lock: Asyncio lock for async-safe operations

    Example:
        >>> cache = PersistentCache("tmp/cache/project")
        >>> await cache.set("entity:1", project, ttl=300)
        >>> await cache.get("entity:1")
    """

    def __init__(
        self,
        cache_dir: str = "tmp/cache",
        size_limit: int = 100 * 1024 * 1024,  # 100MB default
    ):
        """Initialize the persistent cache.

        Args:
            cache_dir: Directory path for storing cache data. Created if missing.
            size_limit: Maximum cache size in bytes. Least-recently-used
                       entries are evicted past this limit.
        """
        Path(cache_dir).mkdir(parents=True, exist_ok=True)

        self._cache = Cache(
            directory=cache_dir,
            size_limit=size_limit,
            eviction_policy="least-recently-used",
        )
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    async def get(self, key: str) -> Optional[Any]:
        """Retrieve a value, or None if it is missing or expired.

        Expired entries are removed by DiskCache when they are looked up.
        """
        async with self._lock:
            value = self._cache.get(key, default=None)
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
            return value

    async def set(self, key: str, value: Any, ttl: float = DEFAULT_TTL_SECONDS) -> None:
        """Store a value with a time-to-live in seconds.

        Note:
            Values must be serializable by pickle; pydantic entities are.
        """
        async with self._lock:
            self._cache.set(key, value, expire=ttl)

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._cache.delete(key)

    async def clear(self) -> None:
        """Clear all entries from the cache.

        Warning:
            This operation is irreversible and removes all persisted entries.
        """
        async with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    async def has(self, key: str) -> bool:
        async with self._lock:
            return key in self._cache

    def stats(self) -> dict:
        """Get cache statistics.

        Returns:
            A dictionary containing:
                - backend: "disk"
                - size: Number of entries in the cache
                - volume: Total size of cached data in bytes
                - directory: Path to the cache directory
                - hits / misses: Lookup counters for this process
        """
        return {
            "backend": "disk",
            "size": len(self._cache),
            "volume": self._cache.volume(),
            "directory": self._cache.directory,
            "hits": self._hits,
            "misses": self._misses,
        }

    def close(self) -> None:
        """Close the cache and release file handles.

        Note:
            After calling close(), the cache instance should not be used.
        """
        self._cache.close()
