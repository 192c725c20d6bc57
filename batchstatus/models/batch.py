"""
Batch run domain model.

BatchRun is the in-memory snapshot of one batch execution. It moves
from RUNNING to SUCCESS or FAILURE and never leaves a terminal state.
Transitions mutate the snapshot only; persisting it is the job of the
progress agent, which writes the whole snapshot back to the store.

Dependencies: pydantic, batchstatus.core.exceptions
System role: Batch lifecycle state machine
"""

import enum
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from batchstatus.core.exceptions import InvalidTransitionError, ValidationError


class BatchStatus(str, enum.Enum):
    """
    Batch run execution states.

    RUNNING: Batch started and has not reported completion
    SUCCESS: Batch completed successfully (terminal)
    FAILURE: Batch completed with failure (terminal)
    """

    RUNNING = "RUNNING"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize to UTC; naive datetimes are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class BatchRun(BaseModel):
    """
    Snapshot of a batch run.

    Invariants checked on construction:
        - end_date is None exactly while status is RUNNING
        - success is True exactly when status is SUCCESS
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(min_length=1, max_length=256, description="Unique batch identifier")
    group: str | None = Field(default=None, description="Logical job category")
    name: str | None = Field(default=None, description="Human-readable job name")
    start_date: datetime = Field(description="Creation timestamp (UTC)")
    end_date: datetime | None = Field(default=None, description="Completion timestamp")
    last_update: datetime = Field(description="Latest persisted mutation")
    status: BatchStatus = Field(default=BatchStatus.RUNNING)
    success: bool = False
    item_count: int = Field(default=0, ge=0, description="Units of work processed")
    current_item: str | None = None
    current_task: str | None = None
    progress: float = Field(default=0.0, description="Completion on a job-defined scale")
    reject: str = Field(default="", description="Accumulated reject log")
    last_message: str | None = None

    @field_validator("start_date", "end_date", "last_update")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # Stored without offset, so every value is kept in UTC.
        return as_utc(value) if value is not None else None

    @field_validator("success", mode="before")
    @classmethod
    def _null_success(cls, value):
        return False if value is None else value

    @field_validator("item_count", mode="before")
    @classmethod
    def _null_item_count(cls, value):
        return 0 if value is None else value

    @field_validator("progress", mode="before")
    @classmethod
    def _null_progress(cls, value):
        return 0.0 if value is None else value

    @field_validator("reject", mode="before")
    @classmethod
    def _null_reject(cls, value):
        return "" if value is None else value

    @model_validator(mode="after")
    def _check_status_invariants(self) -> "BatchRun":
        running = self.status is BatchStatus.RUNNING
        if running and self.end_date is not None:
            raise ValueError("a RUNNING batch cannot have an end_date")
        if not running and self.end_date is None:
            raise ValueError(f"a {self.status.value} batch must have an end_date")
        if self.success != (self.status is BatchStatus.SUCCESS):
            raise ValueError("success must be True exactly when status is SUCCESS")
        return self

    @classmethod
    def start(
        cls,
        batch_id: str,
        group: str | None = None,
        name: str | None = None,
        at: datetime | None = None,
    ) -> "BatchRun":
        """
        Build a new RUNNING batch run.

        Args:
            batch_id: Unique batch identifier
            group: Logical job category
            name: Human-readable job name
            at: Start time; defaults to now

        Returns:
            BatchRun: Fresh snapshot with item_count 0 and an empty reject log
        """
        started = at or utc_now()
        return cls(
            id=batch_id,
            group=group,
            name=name,
            start_date=started,
            last_update=started,
        )

    @property
    def is_running(self) -> bool:
        return self.status is BatchStatus.RUNNING

    @property
    def is_terminal(self) -> bool:
        return not self.is_running

    def _require_running(self, transition: str) -> None:
        if not self.is_running:
            raise InvalidTransitionError(self.id, self.status.value, transition)

    def _touch(self, at: datetime | None) -> datetime:
        stamp = as_utc(at) if at is not None else utc_now()
        # last_update never moves backwards
        self.last_update = max(stamp, self.last_update)
        return self.last_update

    def report_progress(
        self,
        *,
        current_item: str | None = None,
        current_task: str | None = None,
        progress: float | None = None,
        item_count: int | None = None,
        message: str | None = None,
        at: datetime | None = None,
    ) -> None:
        """
        Record progress on a running batch.

        Arguments left as None keep their current value.

        Raises:
            InvalidTransitionError: Batch is already SUCCESS or FAILURE
            ValidationError: item_count is negative
        """
        self._require_running("report progress on")
        if item_count is not None and item_count < 0:
            raise ValidationError("item_count must be >= 0", field="item_count")

        if current_item is not None:
            self.current_item = current_item
        if current_task is not None:
            self.current_task = current_task
        if progress is not None:
            self.progress = progress
        if item_count is not None:
            self.item_count = item_count
        if message is not None:
            self.last_message = message
        self._touch(at)

    def reject_item(self, item: str, reason: str, at: datetime | None = None) -> None:
        """
        Append a rejected item to the reject log of a running batch.

        Raises:
            InvalidTransitionError: Batch is already SUCCESS or FAILURE
        """
        self._require_running("reject an item of")
        self._append_reject(f"{item}: {reason}")
        self._touch(at)

    def complete(
        self,
        success: bool,
        message: str | None = None,
        reject_log: str | None = None,
        at: datetime | None = None,
    ) -> None:
        """
        Move a running batch to SUCCESS or FAILURE.

        Args:
            success: True for SUCCESS, False for FAILURE
            message: Final status line
            reject_log: Rejected items to append to the reject log
            at: Completion time; defaults to now

        Raises:
            InvalidTransitionError: Batch is already SUCCESS or FAILURE
        """
        self._require_running("complete")

        finished = self._touch(at)
        self.status = BatchStatus.SUCCESS if success else BatchStatus.FAILURE
        self.success = bool(success)
        self.end_date = finished
        if message is not None:
            self.last_message = message
        if reject_log:
            self._append_reject(reject_log)

    def _append_reject(self, entry: str) -> None:
        self.reject = f"{self.reject}\n{entry}" if self.reject else entry
