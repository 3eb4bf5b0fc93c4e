"""Factory pattern implementation for repository creation.

This module provides factory classes for creating content repositories
with proper dependency injection and testability.
"""

from portfolio.factories.component_factory import (
    CONTENT_FILES,
    ComponentFactory,
    DefaultComponentFactory,
    InMemoryComponentFactory,
)
from portfolio.factories.repository_factory import (
    ENTITY_TYPES,
    EntityRegistration,
    RepositoryFactory,
    create_repository,
    get_repository_factory,
    reset_repository_factory,
)

__all__ = [
    "CONTENT_FILES",
    "ComponentFactory",
    "DefaultComponentFactory",
    "InMemoryComponentFactory",
    "ENTITY_TYPES",
    "EntityRegistration",
    "RepositoryFactory",
    "create_repository",
    "get_repository_factory",
    "reset_repository_factory",
]
