"""
Exception hierarchy for batch status tracking.

Separates caller errors (invalid transitions, duplicate ids) from store
failures (connectivity, other database errors) so callers can decide
what to retry. All exceptions carry context for logging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class BatchStatusException(Exception):
    """Base exception for all batch status errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(BatchStatusException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class InvalidTransitionError(BatchStatusException):
    """Raised when a lifecycle transition is attempted on a terminal batch."""

    def __init__(
        self,
        batch_id: str,
        status: str,
        transition: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid transition error.

        Args:
            batch_id: ID of the batch run
            status: Current status of the batch run
            transition: Name of the rejected transition
            details: Additional context
        """
        details = details or {}
        details.update({"batch_id": batch_id, "status": status, "transition": transition})
        self.batch_id = batch_id
        self.status = status
        self.transition = transition
        super().__init__(
            f"Cannot {transition} batch {batch_id}: status is {status}", details
        )


class BatchStoreError(BatchStatusException):
    """Raised when a batch store operation fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        batch_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize batch store error.

        Args:
            message: Error message
            operation: Store operation that failed (insert, update, fetch, delete)
            batch_id: ID of the batch run involved, if any
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if batch_id:
            details["batch_id"] = batch_id
        self.operation = operation
        self.batch_id = batch_id
        super().__init__(message, details)


class StoreConnectivityError(BatchStoreError):
    """Raised when the store is unreachable or the connection fails mid-operation."""

    pass


class DuplicateBatchError(BatchStoreError):
    """Raised when inserting a batch run whose id already exists."""

    def __init__(self, batch_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize duplicate batch error.

        Args:
            batch_id: The reused batch id
            details: Additional context
        """
        super().__init__(
            f"Batch already exists: {batch_id}",
            operation="insert",
            batch_id=batch_id,
            details=details,
        )


class SchemaBootstrapError(BatchStoreError):
    """Raised when the batch table is missing and cannot be created."""

    pass
