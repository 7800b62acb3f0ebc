"""
Logging configuration for LeapCursor.

Frames arrive on the SDK callback thread while the main thread waits for
the quit prompt, so all console output goes through logging handlers,
which write each record under the handler lock. The thread name is part
of every file record to tell the two apart.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
LOG_BACKUP_COUNT = 3

CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s:%(lineno)d | %(message)s"


def setup_logger(
    name: str = "leapcursor",
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        name: Root logger name of the package
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Also write rotating log files here when given

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logger.setLevel(numeric_level)

    # Called again (e.g. from tests): replace rather than stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_path,
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError as e:
            logger.warning(f"Failed to enable file logging: {e}")
        else:
            file_handler.setFormatter(
                logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
            )
            logger.addHandler(file_handler)
            logger.debug(f"Logging to file: {log_path}")

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger (pass ``__name__`` so it sits under the package logger)."""
    return logging.getLogger(name)
