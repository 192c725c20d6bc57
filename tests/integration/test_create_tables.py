"""
Test suite for the batch table bootstrap.

System role: Verification of schema bootstrap idempotence and error kinds
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from sqlalchemy import MetaData, inspect
from sqlalchemy.ext.asyncio import create_async_engine

from batchstatus.boundary.db.create_tables import drop_all_tables, ensure_schema
from batchstatus.boundary.db.models.batch_model import BatchModel
from batchstatus.configs import Settings, get_settings
from batchstatus.core.exceptions import (
    BatchStoreError,
    SchemaBootstrapError,
    StoreConnectivityError,
)

TABLE = BatchModel.__tablename__


async def _table_names(engine) -> list[str]:
    async with engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


class TestEnsureSchema:
    """Test suite for ensure_schema()."""

    def test_mapped_table_should_follow_settings(self) -> None:
        """Test the ORM table is named by BATCH_TABLE_NAME."""
        assert TABLE == get_settings().database.table_name

    @pytest.mark.asyncio
    async def test_first_call_should_create_table(self, test_engine) -> None:
        """Test the table is created on an empty database."""
        assert await ensure_schema(test_engine) is True
        assert TABLE in await _table_names(test_engine)

    @pytest.mark.asyncio
    async def test_second_call_should_be_noop(self, test_engine) -> None:
        """Test bootstrap is idempotent."""
        await ensure_schema(test_engine)

        assert await ensure_schema(test_engine) is False
        assert await _table_names(test_engine) == [TABLE]

    @pytest.mark.asyncio
    async def test_custom_table_name_should_be_created_and_found(self, test_engine) -> None:
        """Test bootstrap looks for and creates the table under its configured name."""
        table = BatchModel.__table__.to_metadata(MetaData(), name="nightly_batches")

        assert await ensure_schema(test_engine, table) is True
        assert await ensure_schema(test_engine, table) is False

        names = await _table_names(test_engine)
        assert "nightly_batches" in names
        assert TABLE not in names

    @pytest.mark.asyncio
    async def test_existing_rows_should_survive_bootstrap(self, batch_service, schema_engine, fixed_now) -> None:
        """Test an existing table is never recreated."""
        from batchstatus.models.batch import BatchRun

        await batch_service.insert(BatchRun.start("job-1", at=fixed_now))

        assert await ensure_schema(schema_engine) is False
        assert await batch_service.get("job-1") is not None

    @pytest.mark.asyncio
    async def test_unreachable_database_should_raise_connectivity_error(self, tmp_path: Path) -> None:
        """Test a connection failure is not mistaken for a missing table."""
        engine = create_async_engine(
            f"sqlite+aiosqlite:///{tmp_path / 'missing-dir' / 'batch.db'}"
        )
        try:
            with pytest.raises(StoreConnectivityError) as exc_info:
                await ensure_schema(engine)
        finally:
            await engine.dispose()

        assert not isinstance(exc_info.value, SchemaBootstrapError)
        assert exc_info.value.operation == "ensure_schema"


class TestDropAllTables:
    """Test suite for drop_all_tables()."""

    @pytest.mark.asyncio
    async def test_drop_all_tables_should_allow_recreate(self, test_engine) -> None:
        """Test a development reset followed by bootstrap creates the table again."""
        await ensure_schema(test_engine)

        with patch(
            "batchstatus.boundary.db.create_tables.get_settings",
            return_value=Settings(environment="development"),
        ):
            await drop_all_tables(test_engine)

        assert TABLE not in await _table_names(test_engine)
        assert await ensure_schema(test_engine) is True

    @pytest.mark.asyncio
    async def test_drop_all_tables_should_refuse_in_production(self, test_engine) -> None:
        """Test the reset is refused and the table kept in production."""
        await ensure_schema(test_engine)

        with patch(
            "batchstatus.boundary.db.create_tables.get_settings",
            return_value=Settings(environment="production"),
        ):
            with pytest.raises(BatchStoreError) as exc_info:
                await drop_all_tables(test_engine)

        assert exc_info.value.operation == "drop_all_tables"
        assert TABLE in await _table_names(test_engine)
