"""Unit tests for logging configuration."""

import logging

import pytest
from rich.logging import RichHandler

from lessonmark.logging_utils import configure_logging, resolve_log_level


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestResolveLogLevel:
    """Tests for level name resolution."""

    @pytest.mark.parametrize(
        "value,expected",
        [("debug", logging.DEBUG), ("INFO", logging.INFO), (logging.ERROR, logging.ERROR), ("bogus", logging.WARNING)],
    )
    def test_values(self, value, expected):
        assert resolve_log_level(value) == expected


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for root logger setup."""

    def test_plain_console_handler(self):
        root = configure_logging("INFO")

        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], RichHandler)

    def test_trace_forces_debug(self):
        root = configure_logging("ERROR", trace_mode=True)

        assert root.level == logging.DEBUG

    def test_rich_handler(self):
        root = configure_logging("WARNING", use_rich=True)

        assert isinstance(root.handlers[0], RichHandler)

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "lessonmark.log"
        root = configure_logging("INFO", log_file=str(log_file))

        logging.getLogger("lessonmark.test").info("hello from test")
        for handler in root.handlers:
            handler.flush()

        assert len(root.handlers) == 2
        assert "hello from test" in log_file.read_text(encoding="utf-8")

    def test_unwritable_log_file(self, tmp_path):
        root = configure_logging("INFO", log_file=str(tmp_path / "missing" / "x.log"))

        assert len(root.handlers) == 1
