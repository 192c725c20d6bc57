"""Service orchestrators."""

from .batch_service import BatchService
from .retention_service import RetentionService

__all__ = [
    "BatchService",
    "RetentionService",
]
