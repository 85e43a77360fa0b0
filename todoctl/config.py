"""
Configuration for the todoctl client.

Values come from environment variables prefixed with TODOCTL_ or from a .env
file in the working directory. Command-line options override them.

This module uses Pydantic Settings for type-safe configuration management.
"""
import logging
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Client settings for todoctl.

    All configuration values can be set via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TODOCTL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================================
    # Logging Configuration
    # ============================================================================
    log_level: str = "WARNING"
    log_format: str = DEFAULT_LOG_FORMAT

    # ============================================================================
    # Output Configuration
    # ============================================================================
    color: bool = True

    # ============================================================================
    # Authentication
    # ============================================================================
    api_key: Optional[str] = None  # Sent as X-API-Key when set

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Optional[str]) -> str:
        """Upper-case the level name and reject names logging does not know."""
        if not v:
            return "WARNING"
        level = str(v).upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level '{v}'")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    return Settings()
