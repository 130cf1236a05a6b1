"""
Logging configuration.

Service and orchestrator modules log through ``logging.getLogger(__name__)``;
this attaches a single stderr handler to the package logger.
"""

import logging
import sys


def setup_logging(level: str | int = "INFO") -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))

    logger = logging.getLogger("product_sync")
    logger.setLevel(level)

    # Avoid duplicate handlers when the factory runs more than once
    logger.handlers.clear()
    logger.addHandler(handler)
