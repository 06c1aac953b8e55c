"""Tests for validator logging configuration."""

import io
import logging
import re
import sys

from pipeline.logger import CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME, setup_logging


def _named(logger: logging.Logger, name: str) -> list[logging.Handler]:
    return [h for h in logger.handlers if h.name == name]


class TestSetupLogging:
    """Test setup_logging functionality."""

    def test_console_only_logging(self, caplog):
        """Test logging with console handler only."""
        caplog.set_level(logging.INFO)

        logger = setup_logging(log_file=None)

        assert logger is logging.getLogger()
        assert len(_named(logger, CONSOLE_HANDLER_NAME)) == 1
        assert _named(logger, FILE_HANDLER_NAME) == []

        logger.info("Test message")
        assert "Test message" in caplog.text

    def test_console_defaults_to_stderr(self):
        """Test the console handler keeps stdout free for the outcome."""
        logger = setup_logging()
        (handler,) = _named(logger, CONSOLE_HANDLER_NAME)
        assert handler.stream is sys.stderr

    def test_custom_stream(self):
        """Test console output goes to the given stream at its level."""
        stream = io.StringIO()
        logger = setup_logging(console_level=logging.WARNING, stream=stream)

        logger.info("quiet")
        logger.warning("loud")

        assert "quiet" not in stream.getvalue()
        assert "| WARNING | loud" in stream.getvalue()

    def test_file_logging(self, tmp_path):
        """Test logging with file handler."""
        log_file = tmp_path / "logs" / "validation.log"

        logger = setup_logging(log_file=log_file, stream=io.StringIO())
        logger.debug("Debug message to file")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "Debug message to file" in log_file.read_text(encoding="utf-8")

    def test_idempotent_setup(self):
        """Test that setup_logging can be called multiple times safely."""
        logger = setup_logging(console_level=logging.INFO)
        count = len(logger.handlers)

        logger = setup_logging(console_level=logging.DEBUG)

        assert len(logger.handlers) == count
        (handler,) = _named(logger, CONSOLE_HANDLER_NAME)
        assert handler.level == logging.DEBUG

    def test_file_handler_not_duplicated(self, tmp_path):
        """Test that file handler is not added twice for same file."""
        log_file = tmp_path / "test.log"

        setup_logging(log_file=log_file)
        logger = setup_logging(log_file=log_file, file_level=logging.INFO)

        (handler,) = _named(logger, FILE_HANDLER_NAME)
        assert handler.level == logging.INFO

    def test_different_file_handlers_replace(self, tmp_path):
        """Test that setup_logging replaces file handlers instead of accumulating."""
        log_file1 = tmp_path / "test1.log"
        log_file2 = tmp_path / "test2.log"

        logger = setup_logging(log_file=log_file1)
        logger.info("Message to file 1")

        logger = setup_logging(log_file=log_file2)
        assert len(_named(logger, FILE_HANDLER_NAME)) == 1

        logger.info("Message to file 2")
        for handler in logger.handlers:
            handler.flush()

        assert "Message to file 2" in log_file2.read_text(encoding="utf-8")
        assert "Message to file 2" not in log_file1.read_text(encoding="utf-8")

    def test_preserves_existing_handlers(self, caplog):
        """Test that setup_logging preserves pytest's caplog handler."""
        caplog.set_level(logging.INFO)

        setup_logging(log_file=None)

        logging.getLogger().info("Test message after setup")
        assert "Test message after setup" in caplog.text

    def test_unicode_characters_in_logs(self, tmp_path):
        """Test that accented place names reach the file intact."""
        log_file = tmp_path / "test.log"

        logger = setup_logging(log_file=log_file, stream=io.StringIO())
        logger.info("Trajet Hôtel de Ville → Étoile")
        for handler in logger.handlers:
            handler.flush()

        assert "Hôtel de Ville → Étoile" in log_file.read_text(encoding="utf-8")

    def test_log_formatter(self, tmp_path):
        """Test that log messages have correct format."""
        log_file = tmp_path / "test.log"

        logger = setup_logging(log_file=log_file, stream=io.StringIO())
        logger.info("Test message")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert re.search(r"^\d{4}-\d{2}-\d{2} [\d:,]+ \| INFO \| Test message$", content, re.M)
