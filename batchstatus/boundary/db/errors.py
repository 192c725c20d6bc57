"""
Database error translation.

Maps SQLAlchemy and driver exceptions onto the batch status exception
hierarchy so callers never see a duplicate id reported as an outage,
or an outage reported as a missing table.

Dependencies: sqlalchemy, batchstatus.core.exceptions
System role: Error classification at the store boundary
"""

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    TimeoutError as PoolTimeoutError,
)

from batchstatus.core.exceptions import (
    BatchStoreError,
    DuplicateBatchError,
    StoreConnectivityError,
)


def is_connectivity_error(exc: BaseException) -> bool:
    """
    Check whether an exception means the store could not be reached.

    Args:
        exc: Exception raised by SQLAlchemy or the database driver

    Returns:
        bool: True for connection, pool and transport failures
    """
    if isinstance(exc, IntegrityError):
        return False
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    return isinstance(
        exc,
        (
            OperationalError,
            InterfaceError,
            DisconnectionError,
            PoolTimeoutError,
            OSError,
        ),
    )


def translate_db_error(
    exc: BaseException,
    operation: str,
    batch_id: str | None = None,
) -> BatchStoreError:
    """
    Convert a database exception into a batch store error.

    Args:
        exc: Original exception
        operation: Store operation being performed
        batch_id: Batch id involved, if any

    Returns:
        BatchStoreError: DuplicateBatchError for key violations on insert,
        StoreConnectivityError for connectivity failures, BatchStoreError otherwise
    """
    if isinstance(exc, IntegrityError) and operation == "insert" and batch_id:
        return DuplicateBatchError(batch_id, details={"cause": str(exc.orig)})
    if is_connectivity_error(exc):
        return StoreConnectivityError(
            f"Batch store unreachable during {operation}",
            operation=operation,
            batch_id=batch_id,
            details={"cause": f"{type(exc).__name__}: {exc}"},
        )
    return BatchStoreError(
        f"Batch store {operation} failed",
        operation=operation,
        batch_id=batch_id,
        details={"cause": f"{type(exc).__name__}: {exc}"},
    )
