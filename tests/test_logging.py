"""Tests for shared logging helpers."""
import sys
from unittest.mock import Mock, patch

from src.utils.logging import format_exception, log_exception, logger


def test_format_exception_single_line():
    """Test tracebacks are folded onto one line."""
    try:
        raise ValueError("boom")
    except ValueError:
        text = format_exception(sys.exc_info())

    assert "\n" not in text
    assert "ValueError: boom" in text


def test_format_exception_without_exception():
    """Test nothing is formatted outside an exception."""
    assert format_exception(None) is None
    assert format_exception((None, None, None)) is None


def test_log_exception_adds_exception_field():
    """Test the traceback travels in the extra context."""
    mock_logger = Mock()

    try:
        raise KeyError("missing")
    except KeyError:
        log_exception(mock_logger, "Error loading tracker state", extra={"user_id": "123"})

    args, kwargs = mock_logger.error.call_args
    assert args == ("Error loading tracker state",)
    assert kwargs["extra"]["user_id"] == "123"
    assert "KeyError" in kwargs["extra"]["exception"]


def test_single_line_logger_exception():
    """Test logger.exception disables multi-line exc_info output."""
    with patch("aws_lambda_powertools.Logger.exception") as mock_exception:
        try:
            raise RuntimeError("broken")
        except RuntimeError:
            logger.exception("Failed")

    args, kwargs = mock_exception.call_args
    assert args == ("Failed",)
    assert kwargs["exc_info"] is False
    assert "RuntimeError: broken" in kwargs["extra"]["exception"]
