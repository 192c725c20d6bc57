"""
Retention policy.

Applies the configured deletion rules to the batch store: explicit
delete, age-based purge of finished batches and, when enabled, purge
of clean successful batches. Holds thresholds only; every deletion is
delegated to BatchService.

Dependencies: batchstatus.application.services.batch_service, batchstatus.configs
System role: Batch history pruning
"""

import logging

from batchstatus.application.services.batch_service import BatchService
from batchstatus.configs import get_settings
from batchstatus.configs.retention import RetentionSettings
from batchstatus.core.exceptions import ValidationError
from batchstatus.models.batch import utc_now
from batchstatus.models.retention import RetentionReport

logger = logging.getLogger(__name__)


class RetentionService:
    """Retention policy over the batch store."""

    def __init__(
        self,
        store: BatchService,
        max_age_months: int | None = None,
        purge_successful: bool | None = None,
        settings: RetentionSettings | None = None,
    ) -> None:
        """
        Initialize retention service.

        Args:
            store: Batch store to delete from
            max_age_months: Age threshold; defaults to RETENTION_MAX_AGE_MONTHS
            purge_successful: Whether run() purges clean successful batches;
                defaults to RETENTION_PURGE_SUCCESSFUL
            settings: Retention settings; defaults to application settings
        """
        settings = settings or get_settings().retention
        self.store = store
        self.max_age_months = (
            settings.max_age_months if max_age_months is None else max_age_months
        )
        self.purge_successful_enabled = (
            settings.purge_successful if purge_successful is None else purge_successful
        )
        if self.max_age_months < 0:
            raise ValidationError("max_age_months must be >= 0", field="max_age_months")

    async def delete_batch(self, batch_id: str) -> bool:
        """Delete one batch by id; unknown ids are ignored."""
        return await self.store.delete_by_id(batch_id)

    async def purge_expired(self, months: int | None = None) -> int:
        """
        Delete finished batches older than the threshold.

        Args:
            months: Override for the configured age threshold

        Returns:
            int: Number of batches deleted
        """
        return await self.store.delete_older_than(
            self.max_age_months if months is None else months
        )

    async def purge_successful(self) -> int:
        """Delete successful batches with an empty reject log."""
        return await self.store.delete_all_successful()

    async def run(self) -> RetentionReport:
        """
        Run one retention pass.

        Always purges expired finished batches; purges clean successful
        batches only when enabled.

        Returns:
            RetentionReport: Deletion counts for the pass
        """
        ran_at = utc_now()
        expired = await self.purge_expired()
        successful = await self.purge_successful() if self.purge_successful_enabled else 0

        logger.info(
            f"{__name__}:run - Retention pass deleted {expired} expired and "
            f"{successful} successful batches"
        )
        return RetentionReport(
            expired_deleted=expired,
            successful_deleted=successful,
            max_age_months=self.max_age_months,
            ran_at=ran_at,
        )
