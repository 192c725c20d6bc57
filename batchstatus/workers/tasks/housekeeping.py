"""
Batch history housekeeping task.

Periodic task: purge_batch_history()
Flow: ensure schema -> purge expired batches -> purge clean successes (if enabled)

Dependencies: celery, batchstatus.application, batchstatus.boundary
System role: Scheduled retention of batch history
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncEngine

from batchstatus.application.services import BatchService, RetentionService
from batchstatus.boundary.db.connection import (
    build_async_engine,
    get_async_engine,
    get_async_session_factory,
)
from batchstatus.boundary.db.create_tables import ensure_schema
from batchstatus.configs import Settings, get_settings
from batchstatus.models.retention import RetentionReport
from batchstatus.observability.logger import get_logger
from batchstatus.workers import celery_app

logger = get_logger(__name__)


async def run_housekeeping(
    engine: AsyncEngine | None = None,
    settings: Settings | None = None,
) -> RetentionReport:
    """
    Run one retention pass against the batch store.

    Args:
        engine: Engine to use; defaults to the configured engine
        settings: Application settings; defaults to the cached settings

    Returns:
        RetentionReport: Deletion counts for the pass
    """
    settings = settings or get_settings()
    engine = engine or get_async_engine()

    await ensure_schema(engine)

    SessionFactory = get_async_session_factory(engine)
    async with SessionFactory() as session:
        retention = RetentionService(BatchService(session), settings=settings.retention)
        return await retention.run()


async def _purge_with_fresh_engine() -> RetentionReport:
    # Each task invocation runs its own event loop; pooled connections
    # must not outlive it.
    engine = build_async_engine()
    try:
        return await run_housekeeping(engine)
    finally:
        await engine.dispose()


@celery_app.task(name="batchstatus.purge_batch_history")
def purge_batch_history() -> dict:
    """
    Purge batch history according to the retention settings.

    Returns:
        dict: Serialized RetentionReport
    """
    report = asyncio.run(_purge_with_fresh_engine())
    logger.info(
        f"{__name__}:purge_batch_history - expired={report.expired_deleted} "
        f"successful={report.successful_deleted}"
    )
    return report.model_dump(mode="json")
