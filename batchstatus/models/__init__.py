"""
Domain models.

Exports:
  - BatchRun: In-memory batch run entity and its lifecycle transitions
  - BatchStatus: Batch run execution states
  - RetentionReport: Outcome of a retention pass
"""

from batchstatus.models.batch import BatchRun, BatchStatus, utc_now
from batchstatus.models.retention import RetentionReport

__all__ = ["BatchRun", "BatchStatus", "RetentionReport", "utc_now"]
