"""Tests for logging helpers."""

import io
import logging
from contextlib import contextmanager

import pytest

from .lib import get_logger, setup_logging


@contextmanager
def bare_root():
    """Root logger without handlers for the duration of the block.

    pytest attaches its capture handlers right before each test runs, so
    they are detached here inside the test and put back before it ends.
    """
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    root.handlers.clear()
    try:
        yield root
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)


class TestGetLogger:
    """Tests for logger lookup."""

    @pytest.mark.unit
    def test_default_name(self):
        """No name returns the package logger."""
        assert get_logger().name == "builder-export"

    @pytest.mark.unit
    def test_named_logger(self):
        """Named loggers are returned as-is."""
        assert get_logger("cli").name == "cli"


class TestSetupLogging:
    """Tests for basic logging configuration."""

    @pytest.mark.unit
    def test_configures_root_handler(self):
        """setup_logging installs a stream handler when none exist."""
        stream = io.StringIO()

        with bare_root():
            setup_logging(level=logging.DEBUG, stream=stream)
            get_logger("builder-export.test").debug("hello")

        assert " - builder-export.test - DEBUG - hello" in stream.getvalue()

    @pytest.mark.unit
    def test_level_name(self):
        """Level names are accepted in any case."""
        with bare_root() as root:
            setup_logging(level="warning", stream=io.StringIO())
            assert root.level == logging.WARNING

    @pytest.mark.unit
    def test_unknown_level_name(self):
        """Unknown level names fall back to INFO."""
        with bare_root() as root:
            setup_logging(level="chatty", stream=io.StringIO())
            assert root.level == logging.INFO

    @pytest.mark.unit
    def test_existing_handlers_left_alone(self):
        """A configured root logger is not reconfigured."""
        stream = io.StringIO()
        with bare_root() as root:
            setup_logging(level=logging.INFO, stream=stream)
            setup_logging(level=logging.DEBUG, stream=io.StringIO())
            assert len(root.handlers) == 1
            assert root.level == logging.INFO
