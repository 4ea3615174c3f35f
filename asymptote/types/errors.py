"""
Error types for Asymptote.

Only the structural (tree-sitter) path raises these, and only the fallback
controller catches them: a failed parse degrades to the lexical analysis and
surfaces as a rationale entry, never as an exception to the caller.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from asymptote.constants import utcnow


class ErrorCode(IntEnum):
    """Internal error codes for categorization."""

    # Parsing/Analysis Errors (3000-3999)
    PARSE_FAILED = 3002
    TREE_SITTER_FAILED = 3003
    GRAMMAR_LOAD_FAILED = 3004

    # Configuration Errors (4000-4999)
    INVALID_CONFIG = 4001


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class ErrorContext:
    """Context information for an error."""

    operation: str | None = None
    language: str | None = None
    component: str | None = None
    timestamp: datetime = field(default_factory=utcnow)
    additional_info: dict[str, Any] = field(default_factory=dict)


class AsymptoteError(Exception):
    """Base error class for Asymptote."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        user_message: str,
        severity: str = ErrorSeverity.MEDIUM,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.severity = severity
        self.user_message = user_message
        self.context = context or ErrorContext()
        self.original_error = original_error

    def get_formatted_message(self) -> str:
        """Get a formatted error message for display to users."""
        parts = [
            f"[Error] {self.user_message}",
            f"   Code: {self.code.value}",
        ]
        if self.context.operation:
            parts.append(f"   Operation: {self.context.operation}")
        if self.context.language:
            parts.append(f"   Language: {self.context.language}")
        if self.context.component:
            parts.append(f"   Component: {self.context.component}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.__class__.__name__,
            "code": self.code.value,
            "message": str(self),
            "user_message": self.user_message,
            "severity": self.severity,
            "context": {
                "operation": self.context.operation,
                "language": self.context.language,
                "component": self.context.component,
                "timestamp": self.context.timestamp.isoformat(),
                "additional_info": self.context.additional_info,
            },
            "original_error": str(self.original_error) if self.original_error else None,
        }


class ParserUnavailableError(AsymptoteError):
    """The tree-sitter bindings or grammar pack cannot be imported."""

    def __init__(
        self,
        message: str,
        language: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.TREE_SITTER_FAILED,
            message=message,
            user_message="Structural parser is not installed.",
            severity=ErrorSeverity.LOW,
            context=ErrorContext(operation="load_parser", language=language),
            original_error=original_error,
        )


class GrammarLoadError(AsymptoteError):
    """A language grammar could not be fetched or built."""

    def __init__(
        self,
        message: str,
        language: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.GRAMMAR_LOAD_FAILED,
            message=message,
            user_message=f"Could not load the {language or 'requested'} grammar.",
            severity=ErrorSeverity.MEDIUM,
            context=ErrorContext(operation="load_grammar", language=language),
            original_error=original_error,
        )


class ParseFailedError(AsymptoteError):
    """Parsing raised, or produced a tree with syntax errors."""

    def __init__(
        self,
        message: str,
        language: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.PARSE_FAILED,
            message=message,
            user_message="Source could not be parsed.",
            severity=ErrorSeverity.LOW,
            context=ErrorContext(operation="parse", language=language),
            original_error=original_error,
        )


class ConfigurationError(AsymptoteError):
    """Error related to configuration issues."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CONFIG,
            message=message,
            user_message=user_message or "Configuration error occurred.",
            severity=ErrorSeverity.HIGH,
            context=context,
            original_error=original_error,
        )
