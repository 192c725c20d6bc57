"""
Structured logging helpers for batch runs.

Reject logs and status lines grow with the job, so every context value
is capped at LOG_VALUE_MAX_LENGTH before it reaches a handler, and reject
logs are summarised as an entry count plus the latest entry.

Dependencies: logging (stdlib), batchstatus.configs, batchstatus.models
System role: Logging helper functions
"""

import enum
import logging
from typing import Any

from batchstatus.configs import get_settings
from batchstatus.models.batch import BatchRun


def safe_log_value(value: Any, max_length: int | None = None) -> str:
    """
    Convert a value to a capped string for logging.

    Args:
        value: Value to convert
        max_length: Characters to keep; defaults to LOG_VALUE_MAX_LENGTH

    Returns:
        str: String form, truncated with the original length appended
    """
    if max_length is None:
        max_length = get_settings().log_value_max_length

    if value is None:
        return "None"
    if isinstance(value, enum.Enum):
        text = str(value.value)
    else:
        text = str(value)

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def summarize_reject_log(reject: str | None) -> str:
    """
    Summarise a newline-separated reject log.

    Returns:
        str: "0 rejected" or "<n> rejected, last: <latest entry>"
    """
    entries = [line for line in (reject or "").splitlines() if line.strip()]
    if not entries:
        return "0 rejected"
    return f"{len(entries)} rejected, last: {entries[-1]}"


def batch_log_context(run: BatchRun) -> dict[str, Any]:
    """
    Logging context describing a batch run snapshot.

    Keys are prefixed so they never collide with LogRecord attributes.
    """
    return {
        "batch_id": run.id,
        "batch_group": run.group,
        "batch_name": run.name,
        "batch_status": run.status,
        "batch_item_count": run.item_count,
        "batch_rejects": summarize_reject_log(run.reject),
    }


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with capped structured context.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Extra attributes attached to the record
    """
    max_length = get_settings().log_value_max_length
    logger.log(
        level,
        message,
        extra={key: safe_log_value(val, max_length) for key, val in context.items()},
    )
