"""
Logging Configuration
=====================
The engine modules only create `logging.getLogger(__name__)` loggers below the
``brepdistance`` namespace and log "no solution" outcomes at DEBUG. A host
application that wants to see them calls `setup_logging` once.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route the distance engine's log records to stdout and, optionally, a file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Threshold for the package logger and its handlers (logging.DEBUG
            shows why a pair of objects had no relation).
        log_file: Path of a log file, truncated on setup.

    Returns:
        The ``brepdistance`` logger.
    """
    logger = logging.getLogger("brepdistance")
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("Logging initialized.")
    return logger
