"""
Retention configuration settings.

Thresholds for pruning batch history and the housekeeping cadence.

Dependencies: pydantic, pydantic_settings
System role: Retention policy configuration
"""

from pydantic import Field

from batchstatus.configs.base import BaseSettings, settings_config


class RetentionSettings(BaseSettings):
    """Batch history retention configuration."""

    model_config = settings_config("RETENTION_")

    max_age_months: int = Field(
        default=6,
        ge=0,
        description="Finished batches untouched for longer than this are purged",
    )
    purge_successful: bool = Field(
        default=False,
        description="Also delete successful batches with an empty reject log",
    )
    interval_hours: float = Field(
        default=24.0,
        gt=0,
        description="Housekeeping schedule interval in hours",
    )
