"""
Component Factory for creating repository dependencies.
Provides abstract factory pattern for dependency injection and testing.
"""

import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Type, Union, cast

from pydantic import BaseModel

from portfolio.cache.disk_cache import PersistentCache
from portfolio.cache.memory_cache import InMemoryCache
from portfolio.config.repository_config import RepositoryConfig
from portfolio.interfaces.audit import IAuditSink
from portfolio.interfaces.cache import ICache
from portfolio.interfaces.store import IStore
from portfolio.repositories.audit import InMemoryAuditSink, LoggingAuditSink
from portfolio.repositories.stores import InMemoryStore, JsonFileStore
from portfolio.settings import Settings

# Sentinel value to distinguish between "not provided" and "explicitly None"
_NOT_PROVIDED = object()

# Content file backing each entity type
CONTENT_FILES = {
    "project": "projects.json",
    "technology": "technologies.json",
    "contact": "contact.json",
    "about": "about.json",
}


class ComponentFactory(ABC):
    """Abstract factory for creating repository components."""

    @abstractmethod
    def create_store(self, entity_type: str, model: Type[BaseModel]) -> IStore:
        """
        Create the backing store for an entity type.

        Args:
            entity_type: Registry name ("project", ...)
            model: Entity model the store yields

        Returns:
            Store implementing IStore
        """
        pass

    @abstractmethod
    def create_cache(self, entity_type: str, config: RepositoryConfig) -> Optional[ICache]:
        """
        Create the cache for one repository (None if caching is disabled).

        Args:
            entity_type: Registry name ("project", ...)
            config: Repository configuration

        Returns:
            Cache implementing ICache if enabled, None otherwise
        """
        pass

    @abstractmethod
    def create_audit_sink(self, entity_type: str, config: RepositoryConfig) -> Optional[IAuditSink]:
        """
        Create the audit sink for one repository (None if audit is disabled).

        Args:
            entity_type: Registry name ("project", ...)
            config: Repository configuration

        Returns:
            Sink implementing IAuditSink if enabled, None otherwise
        """
        pass


class DefaultComponentFactory(ComponentFactory):
    """Default factory implementation reading packaged content files."""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize default factory.

        Args:
            settings: Application settings (default: Settings() from environment)
        """
        self.settings = settings or Settings()

    def create_store(self, entity_type: str, model: Type[BaseModel]) -> IStore:
        """Create JSON file store under the configured content directory."""
        path = self.settings.content_path / CONTENT_FILES[entity_type]
        return JsonFileStore(path, model)

    def create_cache(self, entity_type: str, config: RepositoryConfig) -> Optional[ICache]:
        """Create memory or disk cache if enabled.

        Each disk cache gets a fresh directory of its own under
        ``cache_directory``. Entries left by an earlier process or by another
        repository are never read, since they may describe entities that
        repository's collection does not hold.
        """
        if not config.cache_enabled:
            return None

        if self.settings.cache_backend == "disk":
            base = Path(self.settings.cache_directory)
            base.mkdir(parents=True, exist_ok=True)
            return PersistentCache(
                cache_dir=tempfile.mkdtemp(prefix=f"{entity_type}-", dir=base),
                size_limit=self.settings.cache_size_limit,
            )
        return InMemoryCache()

    def create_audit_sink(self, entity_type: str, config: RepositoryConfig) -> Optional[IAuditSink]:
        """Create logging audit sink if enabled."""
        if not config.enable_audit_log:
            return None
        return LoggingAuditSink()


class InMemoryComponentFactory(ComponentFactory):
    """Factory for testing with seeded in-memory stores."""

    # Sentinel type alias for better type hints
    _SentinelOrCache = Union[object, ICache, None]
    _SentinelOrSink = Union[object, IAuditSink, None]

    def __init__(
        self,
        seed: Optional[Mapping[str, Iterable[Any]]] = None,
        cache: _SentinelOrCache = _NOT_PROVIDED,
        audit_sink: _SentinelOrSink = _NOT_PROVIDED,
    ):
        """
        Initialize test factory with optional seed data and components.

        Args:
            seed: Entities (or plain dicts) per entity type
            cache: Cache shared by every repository (or None to disable,
                   default creates one InMemoryCache per repository)
            audit_sink: Sink shared by every repository (or None to disable,
                        default creates one InMemoryAuditSink per repository)
        """
        self.seed = dict(seed or {})
        self.cache: InMemoryComponentFactory._SentinelOrCache = cache
        self.audit_sink: InMemoryComponentFactory._SentinelOrSink = audit_sink
        self.stores: Dict[str, InMemoryStore] = {}
        self.sinks: Dict[str, IAuditSink] = {}

    def create_store(self, entity_type: str, model: Type[BaseModel]) -> IStore:
        """Create in-memory store holding the seed for this entity type."""
        entities = [
            item if isinstance(item, model) else model.model_validate(item)
            for item in self.seed.get(entity_type, [])
        ]
        store = InMemoryStore(entities)
        self.stores[entity_type] = store
        return store

    def create_cache(self, entity_type: str, config: RepositoryConfig) -> Optional[ICache]:
        """Create provided or fresh in-memory cache."""
        if self.cache is not _NOT_PROVIDED:
            # Return the provided cache even if it's explicitly None
            return cast(Optional[ICache], self.cache)

        if not config.cache_enabled:
            return None
        return InMemoryCache()

    def create_audit_sink(self, entity_type: str, config: RepositoryConfig) -> Optional[IAuditSink]:
        """Create provided or fresh in-memory audit sink."""
        if self.audit_sink is not _NOT_PROVIDED:
            return cast(Optional[IAuditSink], self.audit_sink)

        if not config.enable_audit_log:
            return None
        sink = InMemoryAuditSink()
        self.sinks[entity_type] = sink
        return sink
