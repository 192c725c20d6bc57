"""
Shared test fixtures and configuration for entire test suite.

Provides: File-backed SQLite async databases, session factories, batch
store and tracker fixtures
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest


@pytest.fixture
async def test_engine(tmp_path: Path):
    """
    Create a file-backed SQLite async engine for testing.

    A file database (not :memory:) lets concurrent sessions use separate
    connections the way a real store would.

    Yields:
        AsyncEngine: Engine without any tables
    """
    from sqlalchemy.ext.asyncio import create_async_engine

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'batch.db'}")
    yield engine
    await engine.dispose()


@pytest.fixture
async def schema_engine(test_engine):
    """Engine whose batch table has been bootstrapped."""
    from batchstatus.boundary.db.create_tables import ensure_schema

    await ensure_schema(test_engine)
    return test_engine


@pytest.fixture
def session_factory(schema_engine):
    """Async session factory bound to the bootstrapped test database."""
    from batchstatus.boundary.db.connection import get_async_session_factory

    return get_async_session_factory(schema_engine)


@pytest.fixture
async def test_async_db(session_factory):
    """
    Create an async session against the bootstrapped test database.

    Yields:
        AsyncSession: Test database session
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
def batch_service(test_async_db):
    """BatchService bound to the test session."""
    from batchstatus.application.services.batch_service import BatchService

    return BatchService(test_async_db)


@pytest.fixture
def tracker(session_factory):
    """Persistent progress agent against the test database."""
    from batchstatus.core.batch_tracker import BatchTracker

    return BatchTracker(session_factory)


@pytest.fixture
def fixed_now() -> datetime:
    """Reference time used to build deterministic timestamps."""
    return datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
