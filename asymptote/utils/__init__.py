"""Utility helpers for Asymptote."""

from asymptote.utils.logger import configure_logging, is_debug_enabled, logger

__all__ = ["configure_logging", "is_debug_enabled", "logger"]
