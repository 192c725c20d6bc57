"""
Dependency injection container.

Factory functions wiring settings, sessions and services together.
The progress agent is selected by configuration and handed to batch
jobs explicitly; there is no global agent registry.

Dependencies: batchstatus.configs, batchstatus.application, batchstatus.boundary, batchstatus.core
System role: DI container for service injection
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from batchstatus.application.services import BatchService, RetentionService
from batchstatus.boundary.db.connection import get_async_session_factory
from batchstatus.configs import Settings, get_settings
from batchstatus.core.batch_tracker import BatchProgressAgent, BatchTracker, NoOpProgressAgent


def get_batch_service(db: AsyncSession) -> BatchService:
    """
    Get batch store instance.

    Args:
        db: Database session

    Returns:
        BatchService: Batch store bound to the session
    """
    return BatchService(db)


def get_retention_service(
    db: AsyncSession,
    settings: Settings | None = None,
) -> RetentionService:
    """
    Get retention service instance configured from settings.

    Args:
        db: Database session
        settings: Application settings; defaults to the cached settings

    Returns:
        RetentionService: Retention policy over a session-bound store
    """
    settings = settings or get_settings()
    return RetentionService(BatchService(db), settings=settings.retention)


def get_progress_agent(
    settings: Settings | None = None,
    session_factory: async_sessionmaker | None = None,
) -> BatchProgressAgent:
    """
    Get the configured progress agent.

    Args:
        settings: Application settings; defaults to the cached settings
        session_factory: Session factory for the persistent agent;
            defaults to the configured database

    Returns:
        BatchProgressAgent: NoOpProgressAgent when BATCH_AGENT=noop,
        BatchTracker otherwise
    """
    settings = settings or get_settings()
    if settings.tracking.agent == "noop":
        return NoOpProgressAgent()
    return BatchTracker(session_factory or get_async_session_factory())
