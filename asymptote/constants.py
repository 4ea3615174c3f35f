"""Shared constants and helpers for Asymptote."""

from datetime import datetime, timezone

from asymptote.profiles import AUTO, DEFAULT_LANGUAGE


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


# Sort/library snippets recorded from a parse tree are cut to this length.
DEFAULT_SNIPPET_MAX_LENGTH: int = 120

FALLBACK_NOTICE = "Tree-sitter unavailable; fell back to heuristic analysis."
STRUCTURAL_NOTICE = (
    "Used Tree-sitter CST parsing with language adapters and normalized IR extraction."
)

__all__ = [
    "AUTO",
    "DEFAULT_LANGUAGE",
    "DEFAULT_SNIPPET_MAX_LENGTH",
    "FALLBACK_NOTICE",
    "STRUCTURAL_NOTICE",
    "utcnow",
]
