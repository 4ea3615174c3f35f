"""Runtime configuration for the analysers.

Read from the environment once via ``AnalyzerConfig.from_env()``; the
orchestrator also accepts an explicit instance (tests do this).

Environment variables:
    ASYMPTOTE_SNIPPET_MAX_LENGTH: truncation length for recorded snippets.
    ASYMPTOTE_FALLBACK_ON_SYNTAX_ERROR: ``false`` keeps trees with syntax
        errors on the structural path instead of falling back.
    ASYMPTOTE_LOG_LEVEL: loguru level for the CLI (``DEBUG=true`` implies DEBUG).
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from asymptote.constants import DEFAULT_SNIPPET_MAX_LENGTH
from asymptote.types.errors import ConfigurationError, ErrorContext
from asymptote.utils.logger import is_debug_enabled, logger

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"{name} must be a boolean, got {raw!r}",
        context=ErrorContext(operation="load_config", additional_info={name: raw}),
    )


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}",
            context=ErrorContext(operation="load_config", additional_info={name: raw}),
            original_error=e,
        ) from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def _env_log_level(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    level = raw.strip().upper()
    try:
        logger.level(level)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be a loguru level name, got {raw!r}",
            user_message=f"Unknown log level {raw!r} in {name}.",
            context=ErrorContext(operation="load_config", additional_info={name: raw}),
            original_error=e,
        ) from e
    return level


@dataclass(frozen=True)
class AnalyzerConfig:
    """Tunable analyser settings."""

    snippet_max_length: int = DEFAULT_SNIPPET_MAX_LENGTH
    fallback_on_syntax_error: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> AnalyzerConfig:
        """Build a config from ``ASYMPTOTE_*`` environment variables."""
        default_level = "DEBUG" if is_debug_enabled() else "WARNING"
        return cls(
            snippet_max_length=_env_int(
                "ASYMPTOTE_SNIPPET_MAX_LENGTH", DEFAULT_SNIPPET_MAX_LENGTH
            ),
            fallback_on_syntax_error=_env_bool("ASYMPTOTE_FALLBACK_ON_SYNTAX_ERROR", True),
            log_level=_env_log_level("ASYMPTOTE_LOG_LEVEL", default_level),
        )
