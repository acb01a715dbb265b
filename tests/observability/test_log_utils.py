"""
Tests for structured logging helpers and logging configuration.

System role: Verification of log redaction and handler setup
"""

import logging

import pytest

from vtasker.observability.correlation import bind_correlation_id, get_correlation_id, reset_correlation_id
from vtasker.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    mask_token,
    safe_log_value,
)
from vtasker.observability.logger import CorrelationIdFilter, configure_logging

LOGGER_NAME = "vtasker.tests.log_utils"


class TestSafeLogValue:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "None"),
            ("plain", "plain"),
            ([1, 2, 3], "list(3 items)"),
            ({"a": 1}, "dict(1 keys)"),
            (42, "42"),
        ],
    )
    def test_values_should_be_flattened(self, value, expected) -> None:
        assert safe_log_value(value) == expected

    def test_long_values_should_be_truncated(self) -> None:
        assert safe_log_value("x" * 20, max_length=5) == "xxxxx... (truncated, 20 total)"


class TestMaskToken:
    def test_mask_token(self) -> None:
        assert mask_token(None) == "none"
        assert mask_token("abc") == "***"
        assert mask_token("eyJhbGciOiJIUzI1NiJ9.payload") == "eyJhbG..."


class TestLogWithContext:
    def test_sensitive_keys_should_be_masked(self, caplog) -> None:
        logger = logging.getLogger(LOGGER_NAME)

        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            log_with_context(logger, logging.INFO, "Signed in", token="eyJhbGciOiJIUzI1NiJ9.x", email="a@b.c")

        record = caplog.records[-1]
        assert record.token == "eyJhbG..."
        assert record.email == "a@b.c"

    def test_exception_should_carry_type_and_message(self, caplog) -> None:
        logger = logging.getLogger(LOGGER_NAME)

        with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
            log_exception_with_context(logger, "Proxy failed", ValueError("boom"), path="/api/issues")

        record = caplog.records[-1]
        assert record.error_type == "ValueError"
        assert record.error_msg == "boom"
        assert record.path == "/api/issues"


class TestCorrelation:
    def test_bind_should_generate_when_missing_and_reset(self) -> None:
        value, token = bind_correlation_id("  ")
        try:
            assert value and get_correlation_id() == value
        finally:
            reset_correlation_id(token)
        assert get_correlation_id() == ""

    def test_filter_should_stamp_records(self) -> None:
        record = logging.LogRecord(LOGGER_NAME, logging.INFO, __file__, 1, "msg", None, None)
        _, token = bind_correlation_id("corr-7")
        try:
            CorrelationIdFilter().filter(record)
        finally:
            reset_correlation_id(token)

        assert record.correlation_id == "corr-7"


def test_configure_logging_should_keep_foreign_handlers() -> None:
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    try:
        configure_logging("DEBUG")
        configure_logging("INFO")

        ours = [h for h in root.handlers if type(h).__name__ == "_VTaskerHandler"]
        assert len(ours) == 1
        assert foreign in root.handlers
        assert root.level == logging.INFO
    finally:
        root.removeHandler(foreign)
