"""Logging setup for pagedistill.

Every module logs under the ``pagedistill`` package logger. A run reports
per-file successes at INFO, step detail at DEBUG, a non-empty output
directory at WARNING and per-file failures at ERROR. ``--log-file`` keeps a
copy of those records next to the console output.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "pagedistill"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Set up logging for the pagedistill package logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path that receives a copy of every record.
                  Missing parent directories are created.
        format_string: Optional custom format string for log messages
        force: If True, reconfigure even if handlers exist

    Returns:
        The configured ``pagedistill`` logger
    """
    format_string = format_string or DEFAULT_FORMAT
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(format_string)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_file:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    # Records stop at the package logger; the root logger never sees them twice
    logger.propagate = False

    return logger
