"""
Database models package.

Exports:
  - BatchModel, BatchStatus: Batch run ORM model and status enum

Dependencies: sqlalchemy, batchstatus.boundary.db.base
System role: Database model definitions for domain entities
"""

from batchstatus.boundary.db.models.batch_model import BatchModel, BatchStatus

__all__ = [
    "BatchModel",
    "BatchStatus",
]
