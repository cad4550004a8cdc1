"""
Logging setup for host apps, built on loguru.

Library modules only ever do ``from loguru import logger``; sinks are the
host's business. Call :func:`setup_logging` (or :func:`setup_logging_from_config`)
once at startup.
"""

from __future__ import annotations

import os
import sys

from loguru import logger

CONSOLE_FORMAT = "<level>[{level.name}]</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = CONSOLE_FORMAT,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Replace loguru's sinks with a stderr sink and an optional rotating file.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to log file. If None, only logs to stderr.
        fmt: Loguru format string for stderr.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt)

    if log_file:
        logger.add(log_file, level=level, format=FILE_FORMAT, rotation=rotation, retention=retention)


def setup_logging_from_config(config) -> str | None:
    """Configure logging from ``logging.level`` / ``logging.file``.

    A relative ``logging.file`` is placed under ``paths.log_dir``.
    Returns the resolved log file path, if any.
    """
    level = str(config.get("logging.level", "WARNING")).upper()
    log_file = config.get("logging.file") or None
    if log_file and not os.path.isabs(os.path.expanduser(log_file)):
        log_file = os.path.join(config.get("paths.log_dir", "."), log_file)
    if log_file:
        log_file = os.path.expanduser(log_file)
    setup_logging(level=level, log_file=log_file)
    return log_file
