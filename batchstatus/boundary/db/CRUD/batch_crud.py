"""
Batch CRUD operations.

Statement-level persistence for BatchModel: insert, full-row replace,
status queries and the retention deletes. Methods only execute; the
caller owns the transaction.

Dependencies: sqlalchemy, batchstatus.boundary.db.models.batch_model
System role: Batch run persistence operations
"""

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from batchstatus.boundary.db.CRUD.base_crud import BaseCRUD
from batchstatus.boundary.db.models.batch_model import BatchModel, BatchStatus
from batchstatus.models.batch import BatchRun

SHORT_TEXT_LENGTH = 256
MESSAGE_LENGTH = 1024


def _clip(value: str | None, length: int) -> str | None:
    if value is None or len(value) <= length:
        return value
    return value[:length]


class BatchCRUD(BaseCRUD[BatchModel]):
    """
    CRUD operations for BatchModel.

    Updates are full-row replacements: every mutable column is written
    from the supplied snapshot, never a subset.
    """

    def __init__(self) -> None:
        """Initialize BatchCRUD with BatchModel."""
        super().__init__(BatchModel)

    @staticmethod
    def mutable_values(run: BatchRun) -> dict[str, Any]:
        """
        Column values for every mutable field of a snapshot.

        Args:
            run: Batch run snapshot

        Returns:
            dict: Column values keyed by attribute name (id and start_date excluded)
        """
        return {
            "group": _clip(run.group, SHORT_TEXT_LENGTH),
            "name": _clip(run.name, SHORT_TEXT_LENGTH),
            "end_date": run.end_date,
            "last_update": run.last_update,
            "status": run.status,
            "success": run.success,
            "item_count": run.item_count,
            "current_item": _clip(run.current_item, SHORT_TEXT_LENGTH),
            "current_task": _clip(run.current_task, SHORT_TEXT_LENGTH),
            "progress": run.progress,
            "reject": run.reject,
            "last_message": _clip(run.last_message, MESSAGE_LENGTH),
        }

    async def insert(self, session: AsyncSession, run: BatchRun) -> None:
        """
        Insert a new RUNNING batch row with item_count 0.

        Args:
            session: Async database session
            run: RUNNING batch run snapshot

        Raises:
            IntegrityError: A row with the same id already exists
        """
        values = self.mutable_values(run)
        values.update(
            id=run.id,
            start_date=run.start_date,
            status=BatchStatus.RUNNING,
            success=False,
            end_date=None,
            item_count=0,
        )
        await session.execute(insert(BatchModel).values(**values))

    async def replace(self, session: AsyncSession, run: BatchRun) -> bool:
        """
        Replace all mutable columns of the row matching run.id.

        Args:
            session: Async database session
            run: Complete current snapshot

        Returns:
            True if a row was replaced, False if the id does not exist
        """
        return await self.update_by_id(session, run.id, **self.mutable_values(run)) > 0

    async def replace_running(self, session: AsyncSession, run: BatchRun) -> bool:
        """
        Replace all mutable columns of the row matching run.id while it is RUNNING.

        A finished row is never matched, so a stale snapshot cannot move
        a batch back out of SUCCESS or FAILURE.

        Args:
            session: Async database session
            run: Complete current snapshot

        Returns:
            True if a row was replaced, False if the id is unknown or finished
        """
        stmt = (
            update(BatchModel)
            .where(BatchModel.id == run.id, BatchModel.status == BatchStatus.RUNNING)
            .values(**self.mutable_values(run))
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def get_by_status(
        self,
        session: AsyncSession,
        status: BatchStatus,
        limit: int,
    ) -> Sequence[BatchModel]:
        """
        Retrieve batches by status, most recently updated first.

        Args:
            session: Async database session
            status: Batch status to filter by
            limit: Maximum number of batches to return

        Returns:
            Sequence of BatchModels ordered by last_update descending
        """
        stmt = (
            select(BatchModel)
            .where(BatchModel.status == status)
            .order_by(BatchModel.last_update.desc(), BatchModel.id)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_older_than(self, session: AsyncSession, cutoff: datetime) -> int:
        """
        Delete finished batches last updated before a cutoff.

        RUNNING batches are kept however stale they look.

        Args:
            session: Async database session
            cutoff: Rows with last_update strictly before this are deleted

        Returns:
            Number of rows deleted
        """
        stmt = (
            delete(BatchModel)
            .where(
                BatchModel.last_update < cutoff,
                BatchModel.status != BatchStatus.RUNNING,
            )
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

    async def delete_successful(self, session: AsyncSession) -> int:
        """
        Delete successful batches whose reject log is empty.

        Successful batches that rejected items are kept for inspection.

        Args:
            session: Async database session

        Returns:
            Number of rows deleted
        """
        stmt = (
            delete(BatchModel)
            .where(
                BatchModel.status == BatchStatus.SUCCESS,
                or_(BatchModel.reject.is_(None), func.length(BatchModel.reject) == 0),
            )
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount


batch_crud = BatchCRUD()
