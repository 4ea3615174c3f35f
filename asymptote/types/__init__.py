"""
Asymptote error types.
"""

from .errors import (
    AsymptoteError,
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    GrammarLoadError,
    ParseFailedError,
    ParserUnavailableError,
)

__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ErrorContext",
    "AsymptoteError",
    "ConfigurationError",
    "GrammarLoadError",
    "ParseFailedError",
    "ParserUnavailableError",
]
