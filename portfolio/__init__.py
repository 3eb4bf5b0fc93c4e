"""Portfolio content data layer.

Async repositories over the site's content (projects, technologies, contact
and about), with TTL caching, validation and audit hooks.
"""

__version__ = "0.1.0"

from portfolio.config import RepositoryConfig, Settings, get_settings
from portfolio.exceptions import PortfolioException, UnknownEntityTypeException
from portfolio.factories import (
    RepositoryFactory,
    create_repository,
    get_repository_factory,
    reset_repository_factory,
)
from portfolio.models import DataError, DataResult, PaginatedResponse, PaginationParams
from portfolio.repositories import RepositoryRegistry

__all__ = [
    "__version__",
    "RepositoryConfig",
    "Settings",
    "get_settings",
    "PortfolioException",
    "UnknownEntityTypeException",
    "RepositoryFactory",
    "create_repository",
    "get_repository_factory",
    "reset_repository_factory",
    "DataError",
    "DataResult",
    "PaginatedResponse",
    "PaginationParams",
    "RepositoryRegistry",
]
