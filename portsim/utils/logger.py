"""
Centralized logging configuration for the port simulator.
"""

import logging
import os
import sys

from portsim.config.constants import LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _default_level() -> int:
    """Resolve the default level from PORTSIM_LOG_LEVEL, falling back to LOG_LEVEL."""
    level = logging.getLevelName(os.environ.get("PORTSIM_LOG_LEVEL", LOG_LEVEL).upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)
        level: Logging level (default from PORTSIM_LOG_LEVEL / LOG_LEVEL)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(level if level is not None else _default_level())
    return logger


def set_level(level: int):
    """Apply a level to every logger already created under the portsim namespace."""
    for name, existing in logging.Logger.manager.loggerDict.items():
        if name.startswith("portsim") and isinstance(existing, logging.Logger):
            existing.setLevel(level)
