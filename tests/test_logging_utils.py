"""Tests for logging helpers."""

import logging
from unittest.mock import patch

import pytest

from voice_tasks.logging_utils import TRACE_LEVEL, configure_logging, get_logger


@pytest.mark.unit
class TestLoggingUtils:
    """Test cases for the trace level and logging setup."""

    def test_get_logger_supports_trace(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that loggers gain a trace method below DEBUG."""
        logger = get_logger("voice_tasks.test")

        with caplog.at_level(TRACE_LEVEL, logger="voice_tasks.test"):
            logger.trace("segment detail")  # type: ignore[attr-defined]

        assert logging.getLevelName(TRACE_LEVEL) == "TRACE"
        assert [record.levelno for record in caplog.records] == [TRACE_LEVEL]

    @pytest.mark.parametrize(
        "verbose, trace, expected",
        [
            (False, False, logging.INFO),
            (True, False, logging.DEBUG),
            (False, True, TRACE_LEVEL),
            (True, True, TRACE_LEVEL),
        ],
    )
    def test_configure_logging_levels(self, verbose: bool, trace: bool, expected: int) -> None:
        """Test that flags select the root level."""
        with patch("logging.basicConfig") as mock_basic_config:
            assert configure_logging(verbose=verbose, trace=trace) == expected

        assert mock_basic_config.call_args.kwargs["level"] == expected

    def test_aiosqlite_is_quieted(self) -> None:
        """Test that statement logging is hidden unless tracing."""
        with patch("logging.basicConfig"):
            configure_logging(verbose=True)

        assert logging.getLogger("aiosqlite").level == logging.WARNING
