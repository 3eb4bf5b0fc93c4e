"""Repository pattern implementations for the content data layer.

This package provides the generic repository engine, its stores and
decorators, and the concrete repositories for each content entity type.
"""

from portfolio.repositories.base import EntityRepository, split_update_item
from portfolio.repositories.stores import InMemoryStore, JsonFileStore
from portfolio.repositories.audit import InMemoryAuditSink, LoggingAuditSink
from portfolio.repositories.decorators import (
    AuditingRepository,
    CachingRepository,
    RepositoryDecorator,
)
from portfolio.repositories.project_repository import ProjectRepository
from portfolio.repositories.technology_repository import TechnologyRepository
from portfolio.repositories.contact_repository import ContactRepository
from portfolio.repositories.about_repository import AboutRepository
from portfolio.repositories.registry import RepositoryRegistry

__all__ = [
    "EntityRepository",
    "split_update_item",
    "InMemoryStore",
    "JsonFileStore",
    "InMemoryAuditSink",
    "LoggingAuditSink",
    "RepositoryDecorator",
    "CachingRepository",
    "AuditingRepository",
    "ProjectRepository",
    "TechnologyRepository",
    "ContactRepository",
    "AboutRepository",
    "RepositoryRegistry",
]
