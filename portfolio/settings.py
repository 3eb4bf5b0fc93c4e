"""
Settings module for the portfolio data layer.
Uses pydantic-settings for environment variable management.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONTENT_DIR = str(Path(__file__).parent / "content")


class Settings(BaseSettings):
    """Settings loaded from PORTFOLIO_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PORTFOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Content
    content_dir: str = DEFAULT_CONTENT_DIR

    # Cache Configuration
    cache_enabled: bool = False
    cache_ttl: float = 300  # seconds
    cache_backend: Literal["memory", "disk"] = "memory"
    cache_directory: str = "tmp/cache"
    cache_size_limit: int = 100 * 1024 * 1024  # 100MB

    # Repository behavior
    validate_on_create: bool = True
    validate_on_update: bool = True
    enable_soft_delete: bool = False
    enable_audit_log: bool = False

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @property
    def content_path(self) -> Path:
        """Return the content directory as an absolute Path."""
        return Path(self.content_dir).resolve()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
