"""
Logging configuration for the sports library.

Log records of the sports_library package are written as JSON lines into a
rotating log file inside the library directory, so they can be read back
with get_log_content().
"""

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from sports_library.constants import LIBRARY_PACKAGE_NAME, LOG_FILE_NAME

MAX_LOG_FILE_SIZE = 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3


class LogContent(BaseModel):
    """One entry of the library log."""

    timestamp: str
    level: str
    logger: str
    message: str
    exception: str | None = None


class JSONFormatter(logging.Formatter):
    """JSON formatter for log files."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def get_log_file(library_dir: str | Path) -> Path:
    return Path(library_dir) / LOG_FILE_NAME


def setup_logging(library_dir: str | Path, debug_mode: bool = False) -> logging.Logger:
    """
    Configure the package logger to write into the library directory.

    Calling it again only updates the level, no second handler is added.

    Args:
        library_dir: Directory receiving the log file
        debug_mode: Log everything from DEBUG on instead of WARNING on

    Returns:
        The package logger
    """
    log_level = logging.DEBUG if debug_mode else logging.WARNING
    log_file = get_log_file(library_dir)

    package_logger = logging.getLogger(LIBRARY_PACKAGE_NAME)
    package_logger.setLevel(log_level)

    for handler in package_logger.handlers:
        if isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename) == log_file.resolve():
            handler.setLevel(log_level)
            return package_logger

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_FILE_SIZE,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(JSONFormatter())
    package_logger.addHandler(file_handler)
    return package_logger


def shutdown_logging(library_dir: str | Path) -> None:
    """Detach and close the file handler writing into the library directory."""
    log_file = get_log_file(library_dir).resolve()
    package_logger = logging.getLogger(LIBRARY_PACKAGE_NAME)
    for handler in list(package_logger.handlers):
        if isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename) == log_file:
            package_logger.removeHandler(handler)
            handler.close()


def get_log_content(library_dir: str | Path) -> list[LogContent]:
    """
    Read the entries of the current log file.

    Lines that are not valid log entries are skipped.

    Args:
        library_dir: Directory holding the log file

    Returns:
        Log entries, oldest first
    """
    log_file = get_log_file(library_dir)
    if not log_file.exists():
        return []

    entries = []
    with open(log_file, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                entries.append(LogContent.model_validate_json(line))
            except ValidationError:
                continue
    return entries
