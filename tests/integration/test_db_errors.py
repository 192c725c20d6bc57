"""
Test suite for database error translation.

Verifies duplicate ids, connectivity failures and other database errors
map onto distinct exception kinds.

System role: Verification of store error classification
"""

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, ProgrammingError

from batchstatus.boundary.db.errors import is_connectivity_error, translate_db_error
from batchstatus.core.exceptions import (
    BatchStoreError,
    DuplicateBatchError,
    StoreConnectivityError,
)


def _integrity_error() -> IntegrityError:
    return IntegrityError("INSERT INTO batch ...", {}, Exception("UNIQUE constraint failed: batch.id"))


def _operational_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("could not connect to server"))


class TestTranslateDbError:
    """Test suite for translate_db_error()."""

    def test_integrity_error_on_insert_should_be_duplicate(self) -> None:
        """Test key violations on insert become DuplicateBatchError."""
        error = translate_db_error(_integrity_error(), "insert", "job-1")

        assert isinstance(error, DuplicateBatchError)
        assert error.batch_id == "job-1"
        assert error.details["operation"] == "insert"

    def test_integrity_error_elsewhere_should_be_generic(self) -> None:
        """Test key violations outside insert are not reported as duplicates."""
        error = translate_db_error(_integrity_error(), "update", "job-1")

        assert type(error) is BatchStoreError

    def test_operational_error_should_be_connectivity(self) -> None:
        """Test connection failures become StoreConnectivityError."""
        error = translate_db_error(_operational_error(), "fetch")

        assert isinstance(error, StoreConnectivityError)
        assert not isinstance(error, DuplicateBatchError)
        assert error.operation == "fetch"

    def test_invalidated_connection_should_be_connectivity(self) -> None:
        """Test invalidated connections count as connectivity failures."""
        exc = DBAPIError("UPDATE batch ...", {}, Exception("server closed"), connection_invalidated=True)

        assert isinstance(translate_db_error(exc, "update", "job-1"), StoreConnectivityError)

    def test_os_error_should_be_connectivity(self) -> None:
        """Test raw socket errors count as connectivity failures."""
        assert isinstance(translate_db_error(ConnectionRefusedError(), "insert", "job-1"), StoreConnectivityError)

    def test_programming_error_should_be_generic(self) -> None:
        """Test other database errors stay generic store errors."""
        exc = ProgrammingError("SELECT", {}, Exception("syntax error"))

        error = translate_db_error(exc, "fetch")

        assert type(error) is BatchStoreError
        assert "ProgrammingError" in error.details["cause"]


class TestIsConnectivityError:
    """Test suite for is_connectivity_error()."""

    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (_operational_error(), True),
            (TimeoutError(), True),
            (_integrity_error(), False),
            (ValueError("nope"), False),
        ],
        ids=["operational", "timeout", "integrity", "value"],
    )
    def test_is_connectivity_error(self, exc: BaseException, expected: bool) -> None:
        """Test connectivity classification."""
        assert is_connectivity_error(exc) is expected
