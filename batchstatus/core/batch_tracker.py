"""
Batch progress agents.

A progress agent is the capability a batch job receives at construction
time to report its lifecycle: start, progress, rejected items and
completion. BatchTracker persists every transition; NoOpProgressAgent
applies the same transitions in memory only.

Callers hold the returned BatchRun snapshot and pass it back on the
next call. Transitions run on a copy, so a failed call leaves the
caller's snapshot untouched. Persisted transitions only match rows that are
still RUNNING, so a stale snapshot cannot reopen a finished batch.

Dependencies: sqlalchemy, batchstatus.application.services, batchstatus.models
System role: Batch lifecycle reporting
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable

from sqlalchemy.ext.asyncio import async_sessionmaker

from batchstatus.application.services.batch_service import BatchService
from batchstatus.core.exceptions import InvalidTransitionError
from batchstatus.models.batch import BatchRun
from batchstatus.observability.log_utils import batch_log_context, log_with_context

logger = logging.getLogger(__name__)


class BatchProgressAgent(ABC):
    """Lifecycle reporting interface for batch jobs."""

    async def start(
        self,
        batch_id: str,
        group: str | None = None,
        name: str | None = None,
    ) -> BatchRun:
        """
        Register a new RUNNING batch.

        Args:
            batch_id: Unique batch identifier
            group: Logical job category
            name: Human-readable job name

        Returns:
            BatchRun: Initial snapshot

        Raises:
            DuplicateBatchError: Persistent agents only, id already used
        """
        return await self._create(BatchRun.start(batch_id, group, name))

    async def report_progress(
        self,
        run: BatchRun,
        *,
        current_item: str | None = None,
        current_task: str | None = None,
        progress: float | None = None,
        item_count: int | None = None,
        message: str | None = None,
    ) -> BatchRun:
        """
        Report progress of a running batch.

        Returns:
            BatchRun: Updated snapshot

        Raises:
            InvalidTransitionError: Batch already finished
        """
        return await self._transition(
            run,
            "report_progress",
            lambda updated: updated.report_progress(
                current_item=current_item,
                current_task=current_task,
                progress=progress,
                item_count=item_count,
                message=message,
            ),
        )

    async def reject_item(self, run: BatchRun, item: str, reason: str) -> BatchRun:
        """
        Record a rejected item on a running batch.

        Returns:
            BatchRun: Updated snapshot

        Raises:
            InvalidTransitionError: Batch already finished
        """
        return await self._transition(
            run, "reject_item", lambda updated: updated.reject_item(item, reason)
        )

    async def complete(
        self,
        run: BatchRun,
        success: bool,
        message: str | None = None,
        reject_log: str | None = None,
    ) -> BatchRun:
        """
        Finish a running batch as SUCCESS or FAILURE.

        Returns:
            BatchRun: Final snapshot

        Raises:
            InvalidTransitionError: Batch already finished
        """
        return await self._transition(
            run,
            "complete",
            lambda updated: updated.complete(success, message=message, reject_log=reject_log),
        )

    async def _transition(
        self,
        run: BatchRun,
        transition: str,
        apply: Callable[[BatchRun], None],
    ) -> BatchRun:
        updated = run.model_copy(deep=True)
        try:
            apply(updated)
            await self._save(updated, transition)
        except InvalidTransitionError as e:
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:{transition} - Rejected: {e.message}",
                batch_id=run.id,
                batch_status=e.status,
            )
            raise

        if updated.is_terminal:
            log_with_context(
                logger,
                logging.INFO,
                f"{__name__}:{transition} - Batch finished",
                **batch_log_context(updated),
            )
        return updated

    @abstractmethod
    async def _create(self, run: BatchRun) -> BatchRun:
        """Persist a freshly started batch."""

    @abstractmethod
    async def _save(self, run: BatchRun, transition: str) -> None:
        """
        Persist the full snapshot of a batch that is still RUNNING.

        Raises:
            InvalidTransitionError: The stored batch already finished
        """


class BatchTracker(BatchProgressAgent):
    """
    Progress agent backed by the batch store.

    Opens a short-lived session per call, so a long-running job never
    holds a connection between reports.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize batch tracker.

        Args:
            session_factory: Factory producing AsyncSession instances
        """
        self.session_factory = session_factory

    async def _create(self, run: BatchRun) -> BatchRun:
        async with self.session_factory() as session:
            return await BatchService(session).insert(run)

    async def _save(self, run: BatchRun, transition: str) -> None:
        async with self.session_factory() as session:
            service = BatchService(session)
            if await service.update_running(run):
                return
            stored = await service.get(run.id)

        if stored is None:
            logger.warning(
                f"{__name__}:_save - Batch {run.id} no longer stored, update dropped"
            )
            return
        # The caller held a snapshot taken before the batch finished.
        raise InvalidTransitionError(run.id, stored.status.value, transition)


class NoOpProgressAgent(BatchProgressAgent):
    """Progress agent that validates transitions but stores nothing."""

    async def _create(self, run: BatchRun) -> BatchRun:
        logger.debug(f"{__name__}:_create - Batch {run.id} started (not persisted)")
        return run

    async def _save(self, run: BatchRun, transition: str) -> None:
        return None
