"""
Batch table bootstrap.

Checks for the configured batch table on startup and creates it when
absent. An unreachable database is reported as StoreConnectivityError
and never mistaken for a missing table.

Dependencies: sqlalchemy, batchstatus.configs
System role: Database schema initialization

Usage:
    python -m batchstatus.boundary.db.create_tables
"""

import asyncio

from sqlalchemy import Table, inspect
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from batchstatus.boundary.db.base import Base
from batchstatus.boundary.db.connection import get_async_engine
from batchstatus.boundary.db.errors import translate_db_error
from batchstatus.boundary.db.models.batch_model import BatchModel
from batchstatus.configs import get_settings
from batchstatus.core.exceptions import (
    BatchStoreError,
    SchemaBootstrapError,
    StoreConnectivityError,
)
from batchstatus.observability.logger import configure_logging, get_logger

logger = get_logger(__name__)


async def ensure_schema(engine: AsyncEngine | None = None, table: Table | None = None) -> bool:
    """
    Create the batch table if it does not exist.

    Idempotent: an existing table is left unchanged and reported as
    not created, so this is safe to call on every startup.

    Args:
        engine: Engine to bootstrap; defaults to the configured engine
        table: Table to look for and create; defaults to the mapped batch
            table named by BATCH_TABLE_NAME

    Returns:
        bool: True if the table was created by this call

    Raises:
        StoreConnectivityError: Database unreachable
        SchemaBootstrapError: Table missing and creation failed
    """
    engine = engine or get_async_engine()
    table = BatchModel.__table__ if table is None else table
    logger.info(f"{__name__}:ensure_schema - Looking for table {table.name}")

    try:
        conn = await engine.connect()
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"{__name__}:ensure_schema - {type(e).__name__}: {e}")
        raise StoreConnectivityError(
            "Batch store unreachable during schema bootstrap",
            operation="ensure_schema",
            details={"cause": f"{type(e).__name__}: {e}"},
        ) from e

    try:
        try:
            exists = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).has_table(table.name, schema=table.schema)
            )
        except (SQLAlchemyError, OSError) as e:
            raise translate_db_error(e, "ensure_schema") from e

        if exists:
            logger.info(f"{__name__}:ensure_schema - Table {table.name} found")
            return False

        logger.warning(f"{__name__}:ensure_schema - Table {table.name} not found, creating")
        try:
            await conn.run_sync(lambda sync_conn: table.create(sync_conn))
            await conn.commit()
        except (SQLAlchemyError, OSError) as e:
            await conn.rollback()
            if isinstance(e, OSError) or (isinstance(e, DBAPIError) and e.connection_invalidated):
                raise translate_db_error(e, "ensure_schema") from e
            raise SchemaBootstrapError(
                f"Could not create table {table.name}",
                operation="ensure_schema",
                details={"cause": f"{type(e).__name__}: {e}"},
            ) from e
    finally:
        await conn.close()

    logger.info(f"{__name__}:ensure_schema - Table {table.name} created")
    return True


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop the batch table and its data.

    WARNING: Irreversible data loss. Refused when ENVIRONMENT=production.

    Args:
        engine: Engine to use; defaults to the configured engine

    Raises:
        BatchStoreError: Running in production
    """
    if get_settings().is_production:
        raise BatchStoreError(
            "Refusing to drop batch tables in production",
            operation="drop_all_tables",
        )

    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info(f"{__name__}:drop_all_tables - All tables dropped")


if __name__ == "__main__":
    configure_logging()
    created = asyncio.run(ensure_schema())
    print("Batch table created." if created else "Batch table already present.")
