"""
Repository Factory for creating content repositories.
Provides memoized, configured repository creation by entity type name.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Type

from pydantic import BaseModel

from portfolio.config.repository_config import DEFAULT_REPOSITORY_CONFIG, RepositoryConfig
from portfolio.exceptions import UnknownEntityTypeException
from portfolio.factories.component_factory import ComponentFactory, DefaultComponentFactory
from portfolio.interfaces.repository import IRepository
from portfolio.models.about import AboutContent
from portfolio.models.contact import ContactInfo
from portfolio.models.project import Project
from portfolio.models.technology import Technology
from portfolio.repositories.about_repository import AboutRepository
from portfolio.repositories.base import EntityRepository
from portfolio.repositories.contact_repository import ContactRepository
from portfolio.repositories.decorators import AuditingRepository, CachingRepository
from portfolio.repositories.project_repository import ProjectRepository
from portfolio.repositories.technology_repository import TechnologyRepository


@dataclass(frozen=True)
class EntityRegistration:
    """How to build the repository for one entity type."""

    repository_class: Type[EntityRepository]
    model: Type[BaseModel]


ENTITY_TYPES: Dict[str, EntityRegistration] = {
    "project": EntityRegistration(ProjectRepository, Project),
    "technology": EntityRegistration(TechnologyRepository, Technology),
    "contact": EntityRegistration(ContactRepository, ContactInfo),
    "about": EntityRegistration(AboutRepository, AboutContent),
}


def normalize_entity_type(entity_type: str) -> str:
    return entity_type.strip().lower()


class RepositoryFactory:
    """Factory for creating repositories with injected components.

    Repositories are memoized by ``(entity_type, config)``: asking twice with
    an equal config returns the same instance, so its collection and cache
    are shared rather than duplicated.
    """

    def __init__(
        self,
        component_factory: Optional[ComponentFactory] = None,
        default_config: Optional[RepositoryConfig] = None,
    ):
        """
        Initialize repository factory.

        Args:
            component_factory: Factory for stores, caches and audit sinks
                               (default: DefaultComponentFactory)
            default_config: Config used when create() is called without one
        """
        self.component_factory = component_factory or DefaultComponentFactory()
        self.default_config = default_config or DEFAULT_REPOSITORY_CONFIG
        self._repositories: Dict[Tuple[str, RepositoryConfig], IRepository] = {}

    def create(self, entity_type: str, config: Optional[RepositoryConfig] = None) -> IRepository:
        """
        Create (or reuse) the repository for an entity type.

        Args:
            entity_type: "project", "technology", "contact" or "about"
                         (case-insensitive)
            config: Repository configuration (default: the factory default)

        Returns:
            Repository implementing IRepository, wrapped in caching and
            auditing decorators when the config enables them

        Raises:
            UnknownEntityTypeException: If the entity type is not supported
        """
        name = normalize_entity_type(entity_type)
        if name not in ENTITY_TYPES:
            raise UnknownEntityTypeException(entity_type)

        config = config or self.default_config
        key = (name, config)
        repository = self._repositories.get(key)
        if repository is None:
            repository = self._build(name, config)
            self._repositories[key] = repository
        return repository

    def _build(self, name: str, config: RepositoryConfig) -> IRepository:
        registration = ENTITY_TYPES[name]
        store = self.component_factory.create_store(name, registration.model)
        repository: IRepository = registration.repository_class(store, config=config)

        if config.cache_enabled:
            cache = self.component_factory.create_cache(name, config)
            if cache is not None:
                repository = CachingRepository(repository, cache, ttl=config.cache_ttl)

        if config.enable_audit_log:
            sink = self.component_factory.create_audit_sink(name, config)
            if sink is not None:
                repository = AuditingRepository(repository, sink, entity_type=name)

        return repository

    def clear(self) -> None:
        """Drop all memoized repository instances."""
        self._repositories.clear()

    def entity_types(self) -> List[str]:
        return list(ENTITY_TYPES)

    def supports(self, entity_type: str) -> bool:
        return normalize_entity_type(entity_type) in ENTITY_TYPES

    def create_project_repository(self, config: Optional[RepositoryConfig] = None) -> IRepository[Project]:
        return self.create("project", config)

    def create_technology_repository(self, config: Optional[RepositoryConfig] = None) -> IRepository[Technology]:
        return self.create("technology", config)

    def create_contact_repository(self, config: Optional[RepositoryConfig] = None) -> IRepository[ContactInfo]:
        return self.create("contact", config)

    def create_about_repository(self, config: Optional[RepositoryConfig] = None) -> IRepository[AboutContent]:
        return self.create("about", config)

    def __len__(self) -> int:
        return len(self._repositories)


# Singleton instance
_repository_factory: Optional[RepositoryFactory] = None


def get_repository_factory(
    component_factory: Optional[ComponentFactory] = None,
    default_config: Optional[RepositoryConfig] = None,
) -> RepositoryFactory:
    """
    Get or create repository factory singleton.

    Args:
        component_factory: Optional component factory (only used on first call)
        default_config: Optional default config (only used on first call)

    Returns:
        RepositoryFactory singleton instance
    """
    global _repository_factory
    if _repository_factory is None:
        _repository_factory = RepositoryFactory(
            component_factory=component_factory,
            default_config=default_config,
        )
    return _repository_factory


def reset_repository_factory() -> None:
    """Reset factory singleton (for testing)."""
    global _repository_factory
    _repository_factory = None


def create_repository(entity_type: str, config: Optional[RepositoryConfig] = None) -> IRepository:
    """Create a repository through the factory singleton."""
    return get_repository_factory().create(entity_type, config)
