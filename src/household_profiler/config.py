"""Centralized configuration management using pydantic-settings.

Configuration is loaded from environment variables with sensible defaults.
All settings can be overridden via environment variables or a .env file.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development. Override via
    environment variables (prefixed with HP_) or .env file.

    Examples:
        HP_SQLITE_PATH=/var/lib/household/household.db
        HP_LOG_LEVEL=DEBUG
        HP_ENVIRONMENT=production
        HP_TIMEZONE=America/Chicago
    """

    model_config = SettingsConfigDict(
        env_prefix="HP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Household Profiler"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = Field(default=False, description="Enable debug mode")

    # Database
    sqlite_path: Path = Field(
        default=Path("household.db"),
        description="SQLite database file path",
    )

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: Literal["json", "console"] | None = Field(
        default=None,
        description="Log output format. Unset means json in production, console elsewhere",
    )
    log_file: Path | None = Field(default=None, description="Optional log file path")

    # API Server
    # Default binds to localhost; there is no authentication layer.
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_reload: bool = Field(
        default=False, description="Enable auto-reload (development only)"
    )

    # Household view
    household_name: str = Field(
        default="My Household",
        min_length=1,
        description="Display name of the synthetic household",
    )
    timezone: str | None = Field(
        default=None,
        description="IANA timezone reported by /household. Defaults to the host's local zone.",
    )

    @property
    def effective_log_format(self) -> Literal["json", "console"]:
        """``log_format`` if set, otherwise JSON in production and console elsewhere."""
        if self.log_format is not None:
            return self.log_format
        if self.environment == Environment.PRODUCTION:
            return "json"
        return "console"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.

    Returns:
        Configured Settings instance.
    """
    return Settings()
