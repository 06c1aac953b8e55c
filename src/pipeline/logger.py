"""Logging configuration utilities for the validator."""

import logging
import sys
from pathlib import Path
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
CONSOLE_HANDLER_NAME = "carpool-console"
FILE_HANDLER_NAME = "carpool-file"


def setup_logging(
    log_file: Path | str | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure logging to the console and optionally to a file.

    Console output goes to stderr by default so stdout stays free for the
    outcome JSON. Calling this again updates the existing handlers instead
    of stacking new ones; a different ``log_file`` replaces the previous file
    handler. Handlers installed by others (e.g. pytest's caplog) are kept.

    Args:
        log_file: Path to the log file, None for console only
        console_level: Logging level for console output
        file_level: Logging level for file output
        stream: Console stream, defaults to stderr

    Returns:
        Configured root logger
    """
    formatter = logging.Formatter(LOG_FORMAT)
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    handlers = {h.name: h for h in root_logger.handlers if h.name}

    console_handler = handlers.get(CONSOLE_HANDLER_NAME)
    if console_handler is None:
        console_handler = logging.StreamHandler(stream=stream or sys.stderr)
        console_handler.name = CONSOLE_HANDLER_NAME
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)
    console_handler.setLevel(console_level)

    if log_file is None:
        return root_logger

    resolved_path = str(Path(log_file).resolve())
    file_handler = handlers.get(FILE_HANDLER_NAME)
    if file_handler is not None and getattr(file_handler, "baseFilename", None) != resolved_path:
        root_logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None

    if file_handler is None:
        Path(resolved_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(resolved_path, mode="a", encoding="utf-8")
        file_handler.name = FILE_HANDLER_NAME
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    file_handler.setLevel(file_level)

    return root_logger
