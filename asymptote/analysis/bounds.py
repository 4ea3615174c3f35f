"""Loop bound extraction, classification, and chain normalization."""

from __future__ import annotations

import re

from asymptote.analysis.types import BoundKind, ComplexityClass
from asymptote.profiles import LanguageProfile

DEFAULT_BOUND = "n"

_DIGITS = re.compile(r"^\d+$")
_LOGARITHMIC = re.compile(r"\blog\w*|\bln\b", re.IGNORECASE)

# Operand scaled or halved each iteration: compound assignment by a literal,
# or ``x = x * k`` style self updates.
_LOG_PROGRESSION = re.compile(
    r"(?:\*=|//=|/=|>>=|<<=)\s*\d+"
    r"|\b([A-Za-z_]\w*)\s*=\s*\1\s*(?:\*|//|/|>>|<<)\s*\d+"
)


def _split_arguments(text: str) -> list[str] | None:
    """Split call arguments on top-level commas.

    ``text`` starts just after the call's opening parenthesis and may run past
    its closing one; scanning stops at the parenthesis that closes the call,
    at any nesting depth. Returns None when the call is never closed.
    """
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char in "([{":
            depth += 1
        elif char in ")]}":
            if depth == 0:
                tail = "".join(current).strip()
                if tail:
                    parts.append(tail)
                return parts
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    return None


def extract_loop_bound(line: str, profile: LanguageProfile) -> str | None:
    """Pull the bound expression out of a loop header.

    Returns None when none of the profile's bound patterns apply; callers
    substitute ``DEFAULT_BOUND``.
    """
    text = line.strip()
    for pattern in profile.bound_patterns:
        match = pattern.search(text)
        if match is None:
            continue
        groups = match.groupdict()
        if groups.get("args") is not None:
            arguments = _split_arguments(groups["args"])
            if not arguments:  # unclosed or empty call
                continue
            # range(stop) or range(start, stop[, step])
            return arguments[1] if len(arguments) >= 2 else arguments[0]
        bound = (groups.get("bound") or "").strip()
        if bound:
            return bound
    return None


def classify_bound(bound: str) -> BoundKind:
    """Classify one bound expression as constant, logarithmic, or linear."""
    clean = bound.strip()
    if not clean:
        return "n"
    if _DIGITS.match(clean):
        return "constant"
    if _LOGARITHMIC.search(clean):
        return "log n"
    return "n"


def has_log_progression(text: str) -> bool:
    """True if the text scales or halves an operand by a literal."""
    return bool(_LOG_PROGRESSION.search(text))


def normalize_factors(factors: list[BoundKind]) -> list[str]:
    """Reduce a nesting chain to its multiplicative factors.

    Constants are dropped, any number of logarithmic factors collapse to a
    single ``log n``, and linear factors become ``n`` or ``n^k``.
    """
    normalized: list[str] = []
    if "log n" in factors:
        normalized.append("log n")
    linear = factors.count("n")
    if linear == 1:
        normalized.append("n")
    elif linear > 1:
        normalized.append(f"n^{linear}")
    return normalized


def expression_for(factors: list[BoundKind]) -> str:
    """Readable expression for a chain, e.g. ``n^2 log n``; ``1`` if empty."""
    normalized = normalize_factors(factors)
    if not normalized:
        return "1"
    # polynomial term first, as it is conventionally written
    return " ".join(reversed(normalized))


def class_for_factors(factors: list[BoundKind]) -> ComplexityClass:
    """Map a nesting chain onto the canonical class set.

    Polynomial degree is capped at cubic; a log factor only matters next to
    at most one linear factor.
    """
    linear = factors.count("n")
    logarithmic = "log n" in factors
    if linear == 0:
        return ComplexityClass.LOGARITHMIC if logarithmic else ComplexityClass.CONSTANT
    if linear == 1:
        return ComplexityClass.LINEARITHMIC if logarithmic else ComplexityClass.LINEAR
    if linear == 2:
        return ComplexityClass.QUADRATIC
    return ComplexityClass.CUBIC
