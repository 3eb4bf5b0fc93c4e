"""
Cache interface for repository entity caching.

This module defines the contract a repository-scoped cache backend must
satisfy. Entries expire after a per-entry time-to-live and are evicted
lazily when a read discovers them expired.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class ICache(ABC):
    """
    Abstract interface for TTL cache backends.

    Implementations:
        - InMemoryCache: dict-backed store with a lock around check-and-evict
        - PersistentCache: DiskCache-based store in a per-repository directory

    Example:
        ```python
        await cache.set("entity:42", project, ttl=60)
        if await cache.has("entity:42"):
            project = await cache.get("entity:42")
        ```
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Retrieve a value from the cache.

        An entry found expired is deleted as a side effect.

        Args:
            key: The cache key

        Returns:
            The cached value if present and not expired, None otherwise
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: float = 300) -> None:
        """
        Store a value, overwriting any existing entry for the key.

        Args:
            key: The cache key
            value: The value to cache
            ttl: Time-to-live in seconds
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the entry for ``key`` if present."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Clear all entries from the cache."""
        pass

    @abstractmethod
    async def has(self, key: str) -> bool:
        """
        Check presence with the same expiry rules (and eviction) as ``get``.

        Returns:
            True if an unexpired entry exists
        """
        pass

    @abstractmethod
    def stats(self) -> dict:
        """
        Get cache statistics.

        Returns:
            Dictionary containing at least:
                - backend: Short backend name
                - size: Number of stored entries
                - hits / misses: Lookup counters
        """
        pass
