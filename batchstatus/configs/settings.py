"""
Unified application settings.

Aggregates all configuration modules into a single Settings class and
holds the process-wide switches: environment, debug and logging.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from batchstatus.configs.base import BaseSettings
from batchstatus.configs.celery_config import CelerySettings
from batchstatus.configs.database import DatabaseSettings
from batchstatus.configs.retention import RetentionSettings
from batchstatus.configs.tracking import TrackingSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    environment: str = Field(
        default="development",
        description="Deployment environment; destructive resets are refused in production",
    )
    debug: bool = Field(
        default=False,
        description="Log at DEBUG and echo SQL statements",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_value_max_length: int = Field(
        default=500,
        gt=0,
        description="Characters kept from each structured log value (reject logs, messages)",
    )

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    retention: RetentionSettings = RetentionSettings()
    tracking: TrackingSettings = TrackingSettings()
    celery: CelerySettings = CelerySettings()

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug is on, LOG_LEVEL otherwise."""
        return "DEBUG" if self.debug else self.log_level.upper()

    @property
    def echo_sql(self) -> bool:
        """Whether the engine logs SQL statements."""
        return self.debug or self.database.echo_sql


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for the process lifetime.
    Environment variables loaded once at first use.

    Returns:
        Settings: Application settings instance

    Usage:
        from batchstatus.configs import get_settings
        settings = get_settings()
    """
    return Settings()
