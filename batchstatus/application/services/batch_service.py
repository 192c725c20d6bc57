"""
Batch record store.

Wraps BatchCRUD with one committed transaction per operation, converts
rows into BatchRun snapshots and translates database failures into the
batch status exception hierarchy. Nothing is cached: every call
round-trips to the database.

Dependencies: sqlalchemy, batchstatus.boundary.db, batchstatus.models
System role: Batch persistence orchestration
"""

import calendar
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from batchstatus.boundary.db.CRUD.batch_crud import batch_crud
from batchstatus.boundary.db.errors import translate_db_error
from batchstatus.core.exceptions import ValidationError
from batchstatus.models.batch import BatchRun, BatchStatus, utc_now
from batchstatus.observability.log_utils import batch_log_context, log_with_context

logger = logging.getLogger(__name__)


def months_before(moment: datetime, months: int) -> datetime:
    """
    Shift a datetime back by whole calendar months.

    The day is clamped to the length of the target month, so
    31 March minus one month is 28 (or 29) February.

    Args:
        moment: Reference datetime
        months: Number of months to go back (>= 0)

    Returns:
        datetime: Shifted datetime with the same time of day and tzinfo
    """
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


class BatchService:
    """
    Batch record store.

    One instance per database session. Each operation commits on
    success and rolls back on failure.
    """

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize batch service.

        Args:
            db: AsyncSession for database operations
        """
        self.db = db

    @asynccontextmanager
    async def _transaction(self, operation: str, batch_id: str | None = None) -> AsyncIterator[None]:
        try:
            yield
            await self.db.commit()
        except (SQLAlchemyError, OSError) as e:
            await self.db.rollback()
            error = translate_db_error(e, operation, batch_id)
            logger.error(f"{__name__}:{operation} - {type(error).__name__}: {e}")
            raise error from e

    async def insert(self, run: BatchRun) -> BatchRun:
        """
        Store a new RUNNING batch run.

        Args:
            run: Snapshot built with BatchRun.start

        Returns:
            BatchRun: The stored snapshot (item_count reset to 0)

        Raises:
            ValidationError: Snapshot is not RUNNING
            DuplicateBatchError: A batch with the same id already exists
            StoreConnectivityError: Database unreachable
        """
        if not run.is_running:
            raise ValidationError(
                f"New batch {run.id} must be RUNNING, got {run.status.value}",
                field="status",
            )

        async with self._transaction("insert", run.id):
            await batch_crud.insert(self.db, run)

        stored = run.model_copy(update={"item_count": 0})
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:insert - Batch created",
            **batch_log_context(stored),
        )
        return stored

    async def update(self, run: BatchRun) -> bool:
        """
        Replace the stored row with the given snapshot.

        A missing id is a silent no-op; use get() first when absence matters.

        Args:
            run: Complete current snapshot

        Returns:
            bool: True if a row was replaced, False if the id is unknown
        """
        async with self._transaction("update", run.id):
            replaced = await batch_crud.replace(self.db, run)

        if not replaced:
            logger.debug(f"{__name__}:update - No batch {run.id}, nothing replaced")
        else:
            logger.debug(f"{__name__}:update - Batch {run.id} updated")
        return replaced

    async def update_running(self, run: BatchRun) -> bool:
        """
        Replace the stored row with the given snapshot if it is still RUNNING.

        Used for lifecycle transitions: a row that already reached SUCCESS
        or FAILURE is left untouched.

        Args:
            run: Complete current snapshot

        Returns:
            bool: True if a RUNNING row was replaced, False otherwise
        """
        async with self._transaction("update", run.id):
            replaced = await batch_crud.replace_running(self.db, run)

        if not replaced:
            logger.debug(f"{__name__}:update_running - No running batch {run.id}, nothing replaced")
        return replaced

    async def get(self, batch_id: str) -> BatchRun | None:
        """
        Fetch one batch run by id.

        Args:
            batch_id: Batch identifier

        Returns:
            BatchRun if found, None otherwise
        """
        async with self._transaction("fetch", batch_id):
            row = await batch_crud.get_by_id(self.db, batch_id)
            run = BatchRun.model_validate(row) if row is not None else None
        return run

    async def fetch_by_status(self, status: BatchStatus, max_results: int) -> list[BatchRun]:
        """
        Fetch batch runs with a given status, most recently updated first.

        Args:
            status: Status to filter by
            max_results: Maximum number of runs to return

        Returns:
            list[BatchRun]: At most max_results snapshots, last_update descending

        Raises:
            ValidationError: max_results is negative
        """
        if max_results < 0:
            raise ValidationError("max_results must be >= 0", field="max_results")
        if max_results == 0:
            return []

        async with self._transaction("fetch"):
            rows = await batch_crud.get_by_status(self.db, status, max_results)
            runs = [BatchRun.model_validate(row) for row in rows]
        return runs

    async def fetch_running(self, max_results: int) -> list[BatchRun]:
        """Fetch RUNNING batches, most recently updated first."""
        return await self.fetch_by_status(BatchStatus.RUNNING, max_results)

    async def fetch_finished(self, max_results: int) -> list[BatchRun]:
        """Fetch SUCCESS batches, most recently updated first."""
        return await self.fetch_by_status(BatchStatus.SUCCESS, max_results)

    async def fetch_error(self, max_results: int) -> list[BatchRun]:
        """Fetch FAILURE batches, most recently updated first."""
        return await self.fetch_by_status(BatchStatus.FAILURE, max_results)

    async def delete_by_id(self, batch_id: str) -> bool:
        """
        Delete one batch run. Unknown ids are ignored.

        Returns:
            bool: True if a row was deleted
        """
        async with self._transaction("delete", batch_id):
            deleted = await batch_crud.delete_by_id(self.db, batch_id)
        logger.info(f"{__name__}:delete_by_id - Batch {batch_id} deleted={deleted}")
        return deleted

    async def delete_older_than(self, months: int, now: datetime | None = None) -> int:
        """
        Delete finished batches not updated for the given number of months.

        RUNNING batches are never deleted by age.

        Args:
            months: Age threshold in calendar months
            now: Reference time; defaults to now

        Returns:
            int: Number of batches deleted

        Raises:
            ValidationError: months is negative
        """
        if months < 0:
            raise ValidationError("months must be >= 0", field="months")

        cutoff = months_before(now or utc_now(), months)
        async with self._transaction("delete_older_than"):
            deleted = await batch_crud.delete_older_than(self.db, cutoff)

        logger.info(
            f"{__name__}:delete_older_than - {deleted} batches older than {months} months deleted",
        )
        return deleted

    async def delete_all_successful(self) -> int:
        """
        Delete successful batches with an empty reject log.

        Returns:
            int: Number of batches deleted
        """
        async with self._transaction("delete_all_successful"):
            deleted = await batch_crud.delete_successful(self.db)

        logger.info(f"{__name__}:delete_all_successful - {deleted} successful batches deleted")
        return deleted
