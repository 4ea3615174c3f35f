"""Recursion signal detection.

Function names are collected from the profile's signature patterns, then each
name's call sites are counted by name. The same classification is shared by
the lexical path (counting over the whole text) and the structural path
(counting over one function's subtree).
"""

from __future__ import annotations

import re

from asymptote.analysis.types import RecursionHint, RecursionSignal
from asymptote.profiles import LanguageProfile

# A return expression multiplying by a call, on either side of the ``*``.
_MULTIPLIED_RETURN = re.compile(
    r"\breturn\b[^;\n]*?\*\s*[A-Za-z_][\w.]*\s*\("
    r"|\breturn\b[^;\n]*?[A-Za-z_]\w*\s*\([^;\n]*\)\s*\*"
)


def call_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(name)}\s*\(")


def count_calls(name: str, text: str) -> int:
    """Occurrences of ``name(`` in text, the definition included."""
    return len(call_pattern(name).findall(text))


def function_name(text: str, profile: LanguageProfile) -> str:
    """Name of the first function declared in text, or empty string."""
    for pattern in profile.function_patterns:
        match = pattern.search(text)
        if match:
            return match.group("name")
    return ""


def classify_recursion(name: str, occurrences: int, body: str) -> RecursionSignal | None:
    """Turn a call-site count into a signal.

    One occurrence or fewer is not recursion. A multiplied return is
    factorial-like, two or more extra call sites branch (exponential), and
    a single extra call site is linear recursion.
    """
    if not name or occurrences <= 1:
        return None

    branch_calls = occurrences - 1
    hint: RecursionHint = "linear"
    if _MULTIPLIED_RETURN.search(body):
        hint = "factorial"
    elif branch_calls >= 2:
        hint = "exponential"

    return RecursionSignal(
        function_name=name,
        self_call_count=branch_calls,
        complexity_hint=hint,
    )


def function_body(text: str, start: int, profile: LanguageProfile) -> str:
    """Source of the function whose signature begins at offset ``start``."""
    lines = text[start:].split("\n")
    header = lines[0]

    if not profile.uses_braces:
        indent = len(header) - len(header.lstrip())
        body = [header]
        for line in lines[1:]:
            if line.strip() and len(line) - len(line.lstrip()) <= indent:
                break
            body.append(line)
        return "\n".join(body)

    depth = 0
    opened = False
    for offset, char in enumerate(text[start:]):
        if char == "{":
            depth += 1
            opened = True
        elif char == "}" and opened:
            depth -= 1
            if depth == 0:
                return text[start : start + offset + 1]
    return text[start:] if opened else header


def detect_recursion(text: str, profile: LanguageProfile) -> list[RecursionSignal]:
    """Scan comment-stripped text for self-recursive functions."""
    signals: list[RecursionSignal] = []
    seen: set[str] = set()
    for pattern in profile.function_patterns:
        for match in pattern.finditer(text):
            name = match.group("name")
            if name in seen:
                continue
            seen.add(name)
            # Start from the signature line so its indentation is kept.
            line_start = text.rfind("\n", 0, match.start("name")) + 1
            body = function_body(text, line_start, profile)
            signal = classify_recursion(name, count_calls(name, text), body)
            if signal is not None:
                signals.append(signal)
    return signals
