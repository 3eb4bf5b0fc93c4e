"""Entity models and envelope types for the portfolio data layer."""

from portfolio.models.common import (
    BaseEntity,
    DataError,
    DataResult,
    FilterParams,
    PageInfo,
    PaginatedResponse,
    PaginationParams,
    ValidationIssue,
    ValidationOutcome,
)
from portfolio.models.project import Project, ProjectData
from portfolio.models.technology import Technology, TechnologyData
from portfolio.models.contact import ContactInfo, ContactData
from portfolio.models.about import AboutContent, AboutData
from portfolio.models.events import RepositoryContext, RepositoryEvent

__all__ = [
    "BaseEntity",
    "DataError",
    "DataResult",
    "FilterParams",
    "PageInfo",
    "PaginatedResponse",
    "PaginationParams",
    "ValidationIssue",
    "ValidationOutcome",
    "Project",
    "ProjectData",
    "Technology",
    "TechnologyData",
    "ContactInfo",
    "ContactData",
    "AboutContent",
    "AboutData",
    "RepositoryContext",
    "RepositoryEvent",
]
