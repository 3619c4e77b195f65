"""
Tests for the colorlog based Logger wrapper.
"""

import io
import logging
import uuid

import pytest
from colorlog import ColoredFormatter

from reactive_observers.config.logging import LoggerAdapter, get_log_colors
from reactive_observers.config.settings import initialize_settings
from reactive_observers.utils.logging import Logger


@pytest.fixture
def logger_name():
    name = f"reactive_observers.test.{uuid.uuid4().hex}"
    yield name
    logging.getLogger(name).handlers.clear()


def capture(logger: Logger) -> io.StringIO:
    stream = io.StringIO()
    logger.get_logger().handlers[0].setStream(stream)
    return stream


class TestLogger:
    """Test cases for Logger."""

    def test_single_handler(self, logger_name):
        Logger(logger_name, "registry")
        Logger(logger_name, "registry")

        handlers = logging.getLogger(logger_name).handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, ColoredFormatter)
        assert logging.getLogger(logger_name).propagate is False

    def test_level_from_settings(self, logger_name):
        initialize_settings(debug=True)
        logger = Logger(logger_name, "registry")

        assert logger.get_logger().level == logging.DEBUG
        assert logger.is_enabled_for("debug")

    def test_explicit_level(self, logger_name):
        logger = Logger(logger_name, "registry", level="error")

        assert logger.get_logger().level == logging.ERROR
        assert not logger.is_enabled_for("warning")

    def test_writes_messages(self, logger_name):
        logger = Logger(logger_name, "registry", level="info")
        stream = capture(logger)

        logger.info("hello")
        logger.debug("hidden")

        output = stream.getvalue()
        assert "hello" in output
        assert "hidden" not in output
        assert logger_name in output

    def test_formats_exception_tracebacks(self, logger_name):
        logger = Logger(logger_name, "registry", level="debug")
        stream = capture(logger)

        try:
            raise ValueError("broken observer")
        except ValueError as e:
            logger.debug("failed", exc_info=e)

        output = stream.getvalue()
        assert "failed" in output
        assert "Traceback" in output
        assert "ValueError: broken observer" in output


class TestLoggerAdapter:
    """Test cases for LoggerAdapter."""

    def test_sets_class_name(self, logger_name):
        records = []
        base = logging.getLogger(logger_name)
        base.setLevel(logging.INFO)
        base.addFilter(lambda record: records.append(record) or False)

        LoggerAdapter(base, {"class_name": "Registry"}).log(logging.INFO, "message")

        assert records[0].class_name == "Registry"


def test_log_colors_fall_back_to_defaults():
    assert get_log_colors("registry")["INFO"] == "green"
    assert get_log_colors("unknown")["INFO"] == "light_blue"
