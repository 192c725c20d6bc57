"""
Progress agent configuration.

Selects which progress agent implementation callers receive.

Dependencies: pydantic, pydantic_settings
System role: Agent selection for batch progress reporting
"""

from typing import Literal

from pydantic import Field

from batchstatus.configs.base import BaseSettings, settings_config


class TrackingSettings(BaseSettings):
    """Batch progress agent configuration."""

    model_config = settings_config("BATCH_")

    agent: Literal["database", "noop"] = Field(
        default="database",
        description="Progress agent: 'database' persists runs, 'noop' keeps them in memory",
    )
