"""
Batch ORM model.

One row per batch job execution. Rows are inserted when a batch starts,
replaced as a whole on every progress report or completion, and removed
by explicit delete or retention purges. The table name comes from
BATCH_TABLE_NAME (default "batch") and is fixed at import time.

Dependencies: sqlalchemy, batchstatus.boundary.db.base, batchstatus.models
System role: Persisted representation of batch runs
"""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Enum, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from batchstatus.boundary.db.base import Base
from batchstatus.configs import get_settings
from batchstatus.models.batch import BatchStatus


class BatchModel(Base):
    """
    Batch run ORM model.

    Attributes:
        id: Opaque batch identifier supplied by the reporting caller
        group: Logical job category
        name: Human-readable job name
        start_date: Creation timestamp (UTC)
        end_date: Completion timestamp, NULL while RUNNING
        last_update: Timestamp of the latest persisted mutation
        status: Execution state (RUNNING/SUCCESS/FAILURE)
        success: Mirrors status == SUCCESS
        item_count: Units of work processed so far
        current_item: Item currently being processed
        current_task: Current processing phase
        progress: Completion indicator on a job-defined scale
        reject: Accumulated log of rejected items
        last_message: Most recent status line
    """

    __tablename__ = get_settings().database.table_name

    id: Mapped[str] = mapped_column(String(256), primary_key=True)
    group: Mapped[str | None] = mapped_column("group", String(256), nullable=True)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_update: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    status: Mapped[BatchStatus | None] = mapped_column(
        Enum(BatchStatus, native_enum=False, length=64),
        nullable=True,
        index=True,
    )
    success: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    item_count: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    current_item: Mapped[str | None] = mapped_column(String(256), nullable=True)
    current_task: Mapped[str | None] = mapped_column(String(256), nullable=True)
    progress: Mapped[float | None] = mapped_column(Float, nullable=True)
    reject: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_message: Mapped[str | None] = mapped_column(String(1024), nullable=True)
