"""
Logging for livescroll.

Every module logs through get_logger(__name__) to stdout. Caption rounds log
their words, anchor and candidate counts at DEBUG, scroll results at INFO and
capture failures or advisories at WARNING. The CLI adjusts levels at runtime
with set_level().
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__).
        level: Log level (DEBUG, INFO, WARNING, ERROR).
               Defaults to LIVESCROLL_LOG_LEVEL env var or INFO.

    Returns:
        Configured logging.Logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        # Only configure if not already configured
        log_level = level or os.environ.get("LIVESCROLL_LOG_LEVEL", "INFO")
        logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logger.level)

        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def set_level(level: str) -> None:
    """Change the level of every livescroll logger configured so far."""
    value = getattr(logging, level.upper(), logging.INFO)
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith("livescroll") and isinstance(logger, logging.Logger):
            logger.setLevel(value)
            for handler in logger.handlers:
                handler.setLevel(value)
