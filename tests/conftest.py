"""Shared pytest configuration."""

import logging

import pytest

from pipeline.logger import CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME


@pytest.fixture(autouse=True)
def _reset_logging_handlers():
    """Remove handlers installed by setup_logging after each test."""
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.name in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME):
            root_logger.removeHandler(handler)
            handler.close()
