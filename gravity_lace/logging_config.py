"""Logging setup for the gravity_lace package logger.

Library modules only create ``logging.getLogger(__name__)`` loggers and never
attach handlers. Applications (the CLI, examples) call ``setup_logging`` once
to route the ``gravity_lace`` namespace to stderr and, optionally, a file.
"""

import logging
import sys
from typing import List, Optional, Union

PACKAGE_LOGGER = "gravity_lace"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def resolve_level(level: Union[int, str]) -> int:
    """Numeric logging level for an int or a level name such as "debug".

    Raises:
        ValueError: If the name is not a known level
    """
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return numeric


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger, replacing any handlers from a previous call.

    Args:
        level: Logging level (e.g. logging.DEBUG or "DEBUG")
        log_file: Optional path to also write logs to (truncated)

    Returns:
        The configured package logger
    """
    level = resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized at %s", logging.getLevelName(level))
    return logger
