"""
Retention domain models.

Dependencies: pydantic
System role: Retention pass reporting
"""

from datetime import datetime

from pydantic import BaseModel, Field


class RetentionReport(BaseModel):
    """Outcome of one retention pass."""

    expired_deleted: int = Field(default=0, description="Finished batches purged by age")
    successful_deleted: int = Field(default=0, description="Clean successful batches purged")
    max_age_months: int = Field(description="Age threshold applied")
    ran_at: datetime
