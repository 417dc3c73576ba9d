"""Logging setup for the tracker and its OpenCV backend."""

import logging
import sys
from pathlib import Path

import cv2

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "marker_tracker"


def _opencv_level(log_level: int) -> int:
    """Map a stdlib level onto OpenCV's native log levels."""
    if log_level <= logging.DEBUG:
        return cv2.utils.logging.LOG_LEVEL_INFO
    if log_level <= logging.WARNING:
        return cv2.utils.logging.LOG_LEVEL_WARNING
    return cv2.utils.logging.LOG_LEVEL_ERROR


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure the ``marker_tracker`` logger hierarchy.

    Output goes to stdout and, optionally, to a file. OpenCV's own
    (non-Python) logger is turned down so ArUco and capture backends only
    speak up about real problems.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file
    """
    log_level = logging.getLevelName(level.upper())
    unknown_level = not isinstance(log_level, int)
    if unknown_level:
        log_level = logging.INFO

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    cv2.utils.logging.setLogLevel(_opencv_level(log_level))

    if unknown_level:
        root_logger.warning("Unknown log level %r, using INFO", level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``marker_tracker`` namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
