#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_logging_utils.py
"""Unit tests for logging configuration."""

import logging

import pytest

from markdown_walker.constants import LOG_FORMAT, TRACE_LOG_FORMAT
from markdown_walker.logging_utils import configure_logging, installed_handlers, resolve_log_level


@pytest.fixture
def restore_root_logger():
    """Restore the root logger's level and handlers after a test."""
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestResolveLogLevel:
    """Tests for resolve_log_level."""

    @pytest.mark.parametrize(
        "value,expected",
        [("DEBUG", logging.DEBUG), ("info", logging.INFO), (logging.ERROR, logging.ERROR), ("bogus", logging.WARNING)],
    )
    def test_levels(self, value, expected):
        """Test names, numbers and unknown names."""
        assert resolve_log_level(value) == expected


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_console_handler(self, restore_root_logger):
        """Test a single stderr handler with the plain format."""
        root = configure_logging("INFO")
        assert root is restore_root_logger
        assert root.level == logging.INFO
        handlers = installed_handlers(root)
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].formatter._fmt == LOG_FORMAT

    def test_trace_mode(self, restore_root_logger):
        """Test trace mode switches to the detailed format."""
        root = configure_logging("DEBUG", trace_mode=True)
        assert installed_handlers(root)[0].formatter._fmt == TRACE_LOG_FORMAT

    def test_reconfigure_replaces_own_handlers(self, restore_root_logger):
        """Test a second call replaces its handlers and keeps foreign ones."""
        foreign = logging.NullHandler()
        restore_root_logger.addHandler(foreign)
        configure_logging("INFO")
        root = configure_logging("ERROR")
        assert len(installed_handlers(root)) == 1
        assert installed_handlers(root)[0].level == logging.ERROR
        assert foreign in root.handlers

    def test_log_file(self, restore_root_logger, tmp_path):
        """Test log output is teed to a file."""
        log_file = tmp_path / "walk.log"
        root = configure_logging("INFO", log_file=str(log_file))
        assert len(installed_handlers(root)) == 2
        logging.getLogger("markdown_walker.test").info("hello file")
        for handler in installed_handlers(root):
            handler.flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")

    def test_unwritable_log_file(self, restore_root_logger, tmp_path):
        """Test a log file that cannot be opened only drops the file handler."""
        root = configure_logging("INFO", log_file=str(tmp_path / "missing" / "walk.log"))
        assert len(installed_handlers(root)) == 1
