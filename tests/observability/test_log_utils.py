"""
Test suite for structured logging helpers and logging configuration.

System role: Verification of capped batch log context
"""

import logging
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from batchstatus.configs import Settings
from batchstatus.models.batch import BatchRun, BatchStatus
from batchstatus.observability.log_utils import (
    batch_log_context,
    log_with_context,
    safe_log_value,
    summarize_reject_log,
)
from batchstatus.observability.logger import configure_logging


@pytest.fixture
def run() -> BatchRun:
    """Running batch with two rejected items."""
    run = BatchRun.start("job-1", group="nightly", name="etl", at=datetime(2024, 6, 15, tzinfo=timezone.utc))
    run.reject_item("item-3", "bad header")
    run.reject_item("item-9", "checksum mismatch")
    return run


class TestSafeLogValue:
    """Test suite for safe_log_value()."""

    def test_short_values_should_pass_through(self) -> None:
        """Test values under the cap are logged unchanged."""
        assert safe_log_value("item-7", max_length=10) == "item-7"
        assert safe_log_value(None) == "None"
        assert safe_log_value(BatchStatus.FAILURE) == "FAILURE"

    def test_long_values_should_be_truncated(self) -> None:
        """Test long values keep the prefix and report the full length."""
        assert safe_log_value("x" * 30, max_length=10) == "x" * 10 + "... (truncated, 30 total)"

    def test_cap_should_default_to_setting(self) -> None:
        """Test LOG_VALUE_MAX_LENGTH caps values when no limit is given."""
        with patch(
            "batchstatus.observability.log_utils.get_settings",
            return_value=Settings(log_value_max_length=5),
        ):
            assert safe_log_value("abcdefgh") == "abcde... (truncated, 8 total)"


class TestBatchLogContext:
    """Test suite for reject log summaries and batch context."""

    def test_summarize_reject_log(self) -> None:
        """Test reject logs are reduced to a count and the latest entry."""
        assert summarize_reject_log("") == "0 rejected"
        assert summarize_reject_log(None) == "0 rejected"
        assert summarize_reject_log("a: x\nb: y\n") == "2 rejected, last: b: y"

    def test_batch_log_context_should_describe_run(self, run: BatchRun) -> None:
        """Test the context carries identity, status and reject summary."""
        context = batch_log_context(run)

        assert context["batch_id"] == "job-1"
        assert context["batch_group"] == "nightly"
        assert context["batch_status"] is BatchStatus.RUNNING
        assert context["batch_rejects"] == "2 rejected, last: item-9: checksum mismatch"

    def test_log_with_context_should_attach_capped_values(
        self, run: BatchRun, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test context values land on the record as capped strings."""
        logger = logging.getLogger("batchstatus.tests.log_utils")

        with patch(
            "batchstatus.observability.log_utils.get_settings",
            return_value=Settings(log_value_max_length=12),
        ), caplog.at_level(logging.INFO, logger=logger.name):
            log_with_context(logger, logging.INFO, "finished", **batch_log_context(run))

        record = caplog.records[-1]
        assert record.getMessage() == "finished"
        assert record.batch_id == "job-1"
        assert record.batch_status == "RUNNING"
        assert record.batch_rejects.startswith("2 rejected, ... (truncated")


class TestConfigureLogging:
    """Test suite for configure_logging()."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_debug_setting_should_lower_root_level(self) -> None:
        """Test DEBUG=true configures the root logger at DEBUG."""
        with patch(
            "batchstatus.observability.logger.get_settings",
            return_value=Settings(debug=True, log_level="ERROR"),
        ):
            configure_logging()

        assert logging.getLogger().level == logging.DEBUG

    def test_explicit_level_should_win(self) -> None:
        """Test an explicit level overrides settings."""
        configure_logging("warning")

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
