"""
Database boundary layer: ORM model, CRUD operations, and connection management.

Exports:
  - Base: Model building block
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - BatchModel, BatchStatus: Batch run entity and status enum
  - ensure_schema(): Idempotent batch table bootstrap
  - batch_crud: CRUD operation singleton

Dependencies: sqlalchemy, batchstatus.configs
System role: Database adapter providing persistent storage for batch runs
"""

from batchstatus.boundary.db.base import Base
from batchstatus.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from batchstatus.boundary.db.models.batch_model import BatchModel, BatchStatus
from batchstatus.boundary.db.CRUD import BaseCRUD, BatchCRUD, batch_crud
from batchstatus.boundary.db.create_tables import ensure_schema

__all__ = [
    "Base",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "BatchModel",
    "BatchStatus",
    "BaseCRUD",
    "BatchCRUD",
    "batch_crud",
    "ensure_schema",
]
