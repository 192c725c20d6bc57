"""
CRUD operations for database models.

Exports base CRUD class and the batch CRUD implementation with a
pre-instantiated singleton for direct use.

Usage:
    from batchstatus.boundary.db.CRUD import batch_crud

    rows = await batch_crud.get_by_status(db, BatchStatus.RUNNING, limit=10)
"""

from batchstatus.boundary.db.CRUD.base_crud import BaseCRUD
from batchstatus.boundary.db.CRUD.batch_crud import BatchCRUD, batch_crud

__all__ = [
    "BaseCRUD",
    "BatchCRUD",
    "batch_crud",
]
