"""Cache package for the portfolio data layer.

Provides the TTL caches a repository can be wrapped with.
"""

from portfolio.cache.memory_cache import InMemoryCache
from portfolio.cache.disk_cache import PersistentCache

__all__ = [
    "InMemoryCache",
    "PersistentCache",
]
