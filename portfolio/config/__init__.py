"""Configuration module exports."""

from portfolio.settings import Settings, get_settings

from portfolio.config.repository_config import (
    DEFAULT_REPOSITORY_CONFIG,
    RepositoryConfig,
)

__all__ = [
    "Settings",
    "get_settings",
    "RepositoryConfig",
    "DEFAULT_REPOSITORY_CONFIG",
]
