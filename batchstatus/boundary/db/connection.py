"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and a session
generator for dependency injection.

Dependencies: sqlalchemy, batchstatus.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker

from batchstatus.configs import get_settings


def build_async_engine() -> AsyncEngine:
    """
    Create a new async SQLAlchemy engine with connection pooling.

    pool_pre_ping=True verifies connections before use to detect stale/broken connections early.
    SQLite URLs use the dialect's default pool and skip pool sizing.
    DEBUG or POSTGRES_ECHO_SQL turns on statement echo.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = build_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    settings = get_settings()
    db_config = settings.database

    if db_config.is_sqlite:
        return create_async_engine(
            db_config.async_database_url,
            echo=settings.echo_sql,
        )

    return create_async_engine(
        db_config.async_database_url,
        echo=settings.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Get the shared async engine.

    Cached so every session factory in one event loop shares one pool.
    Code that runs its own event loop per call (Celery tasks) should use
    build_async_engine() and dispose of it instead.

    Returns:
        AsyncEngine: Process-wide async engine
    """
    return build_async_engine()


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Args:
        engine: Engine to bind; defaults to the configured engine

    Returns:
        async_sessionmaker: Async session factory configured for manual transaction control

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield an async database session and close it afterwards.

    Yields:
        AsyncSession: Async SQLAlchemy database session

    Usage:
        async for db in get_async_db():
            service = BatchService(db)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session
