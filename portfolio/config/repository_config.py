"""
Configuration dataclasses for repositories.
Provides immutable configuration objects for dependency injection.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from portfolio.settings import Settings


@dataclass(frozen=True)
class RepositoryConfig:
    """Per-repository behavior flags.

    Frozen and hashable, so the factory can memoize repositories by
    ``(entity_type, config)``.
    """

    cache_enabled: bool = False
    cache_ttl: float = 300  # seconds
    validate_on_create: bool = True
    validate_on_update: bool = True
    enable_soft_delete: bool = False  # accepted but not acted on
    enable_audit_log: bool = False

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RepositoryConfig":
        """Create config from application settings."""
        return cls(
            cache_enabled=settings.cache_enabled,
            cache_ttl=settings.cache_ttl,
            validate_on_create=settings.validate_on_create,
            validate_on_update=settings.validate_on_update,
            enable_soft_delete=settings.enable_soft_delete,
            enable_audit_log=settings.enable_audit_log,
        )


DEFAULT_REPOSITORY_CONFIG = RepositoryConfig()
