"""
Database configuration settings.

Manages the relational store connection parameters for SQLAlchemy.
PostgreSQL is assembled from discrete fields; DATABASE_URL overrides
the whole URL (any async SQLAlchemy URL, e.g. sqlite+aiosqlite).
BATCH_TABLE_NAME names the table batch runs are stored in.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for the batch store
"""

from pydantic import Field

from batchstatus.configs.base import BaseSettings, settings_config


class DatabaseSettings(BaseSettings):
    """Batch store database configuration."""

    model_config = settings_config("POSTGRES_", populate_by_name=True)

    url: str | None = Field(
        default=None,
        validation_alias="DATABASE_URL",
        description="Full async SQLAlchemy URL; overrides the PostgreSQL fields",
    )
    table_name: str = Field(
        default="batch",
        validation_alias="BATCH_TABLE_NAME",
        max_length=63,
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="Name of the batch table",
    )

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="batchstatus", description="PostgreSQL database name")

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    sslmode: str = Field(default="prefer", description="SSL mode for PostgreSQL connections")

    @property
    def async_database_url(self) -> str:
        """
        Construct async database connection URL.

        Returns:
            str: SQLAlchemy async-compatible database URL (asyncpg uses 'ssl' param)
        """
        if self.url:
            return self.url
        ssl_param = "?ssl=require" if self.sslmode == "require" else ""
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}{ssl_param}"
        )

    @property
    def is_sqlite(self) -> bool:
        """True when the configured URL targets SQLite."""
        return self.async_database_url.startswith("sqlite")
