"""Console and rotating-file logging for discussion-watch."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "discussion_watch"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _file_handlers(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


def setup_logger(
    name: str = LOGGER_NAME,
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    max_bytes: int = 5 * 1024 * 1024,  # 5 MB
    backup_count: int = 3
) -> logging.Logger:
    """Configure the shared logger and return it.

    The console handler follows ``level``. The file handler, when a log file
    is given, always records DEBUG so a failed scrape leaves the selector
    probe output on disk even without --verbose.

    Calling this again reuses the existing handlers and only adjusts the
    console level, adding a file handler if none is attached yet.

    Args:
        name: Logger name shared by every module.
        log_file: Rotating log file path, or None for console only.
        level: Console log level.
        max_bytes: Size at which the log file rotates.
        backup_count: Rotated files to keep.

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if log_file or _file_handlers(logger) else level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = next(
        (h for h in logger.handlers if not isinstance(h, RotatingFileHandler)),
        None,
    )
    if console is None:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)
    console.setLevel(level)

    if log_file and not _file_handlers(logger):
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
