"""
Logging setup for Asymptote.

Loguru is the project logger. ``configure_logging`` replaces loguru's default
handler with a single stderr sink so the CLI's stdout carries only results.
"""

import os
import sys

from loguru import logger as loguru_logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} | {message}"


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    return os.environ.get("DEBUG", "").lower() == "true"


def configure_logging(level: str | None = None) -> None:
    """Route loguru output to stderr at the given level.

    Args:
        level: Loguru level name; defaults to DEBUG when ``DEBUG=true`` is
            set in the environment, WARNING otherwise.
    """
    if level is None:
        level = "DEBUG" if is_debug_enabled() else "WARNING"
    loguru_logger.remove()
    loguru_logger.add(sys.stderr, level=level.upper(), format=_LOG_FORMAT)


# Export loguru logger for direct use
logger = loguru_logger
