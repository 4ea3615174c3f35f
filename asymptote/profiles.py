"""Language profile registry and comment preprocessing.

Each supported language is a single frozen ``LanguageProfile`` record holding
everything the analysers need to know about it: how to strip comments, which
lines open loops, which calls sort, where a loop's bound lives, how functions
are declared, and the node-type table used when walking a tree-sitter parse
tree. Adding a language means adding one record to ``PROFILES``.

``auto`` never infers anything from the source text: it always resolves to
``DEFAULT_LANGUAGE``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "python"
AUTO = "auto"

_LANGUAGE_ALIASES: dict[str, str] = {
    "py": "python",
}


# ============================================================================
# Comment strippers
# ============================================================================

_C_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_C_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_PY_TRIPLE_DOUBLE = re.compile(r'"""[\s\S]*?"""')
_PY_TRIPLE_SINGLE = re.compile(r"'''[\s\S]*?'''")
_PY_LINE_COMMENT = re.compile(r"#.*$", re.MULTILINE)


def _remove_c_style_comments(code: str) -> str:
    code = _C_BLOCK_COMMENT.sub("", code)
    return _C_LINE_COMMENT.sub("", code)


def _remove_python_comments(code: str) -> str:
    code = _PY_TRIPLE_DOUBLE.sub("", code)
    code = _PY_TRIPLE_SINGLE.sub("", code)
    return _PY_LINE_COMMENT.sub("", code)


# ============================================================================
# Profile records
# ============================================================================


@dataclass(frozen=True)
class CstAdapter:
    """Tree-sitter node vocabulary for one language."""

    loop_nodes: dict[str, str]
    function_node_types: tuple[str, ...]
    sort_patterns: tuple[re.Pattern[str], ...]
    library_op_patterns: tuple[re.Pattern[str], ...]


@dataclass(frozen=True)
class LanguageProfile:
    """Static knowledge about one supported language.

    ``bound_patterns`` are tried in order against a loop line. A pattern
    exposes either an ``args`` group (everything after a range-style call's
    opening parenthesis; the limit is picked from the balanced arguments)
    or a ``bound`` group (the right-hand operand of the loop's continuation
    comparison).
    """

    name: str
    uses_braces: bool
    remove_comments: Callable[[str], str] = field(repr=False)
    loop_patterns: tuple[re.Pattern[str], ...]
    sort_patterns: tuple[re.Pattern[str], ...]
    bound_patterns: tuple[re.Pattern[str], ...]
    function_patterns: tuple[re.Pattern[str], ...]
    cst: CstAdapter = field(repr=False)


# Keywords that look like ``name(`` in brace languages but never name a function.
_NON_FUNCTION_WORDS = r"(?!(?:if|else|for|while|do|switch|case|catch|return|new|sizeof|throw)\b)"

# Dotted type name with optional type arguments and array dimensions.
_JAVA_TYPE = r"[\w.?]+(?:\s*<[^;{}()=\n]*>)?(?:\s*\[\s*\])*"

_C_LIKE_BOUND_PATTERNS = (
    re.compile(r"\bfor\s*\([^;]*;[^;]*?<=?\s*(?P<bound>[^;]+?)\s*;"),
    re.compile(r"\bwhile\s*\([^;]*?<=?\s*(?P<bound>[^;)]+?)\s*(?:\)|&&|\|\|)"),
)

PROFILES: dict[str, LanguageProfile] = {
    "python": LanguageProfile(
        name="python",
        uses_braces=False,
        remove_comments=_remove_python_comments,
        loop_patterns=(re.compile(r"\bfor\b"), re.compile(r"\bwhile\b")),
        sort_patterns=(
            re.compile(r"\bsorted\s*\(", re.IGNORECASE),
            re.compile(r"\.sort\s*\(", re.IGNORECASE),
        ),
        bound_patterns=(
            re.compile(r"\bfor\b.+?\bin\s+range\s*\((?P<args>.*)"),
            re.compile(r"\bwhile\b[^<]*?<=?\s*(?P<bound>.+?)\s*(?::|\band\b|\bor\b|$)"),
        ),
        function_patterns=(
            re.compile(r"^[ \t]*(?:async\s+)?def\s+(?P<name>[A-Za-z_]\w*)\s*\(", re.MULTILINE),
        ),
        cst=CstAdapter(
            loop_nodes={"for_statement": "for", "while_statement": "while"},
            function_node_types=("function_definition",),
            sort_patterns=(re.compile(r"\bsorted\s*\("), re.compile(r"\.sort\s*\(")),
            library_op_patterns=(
                re.compile(r"\bset\s*\("),
                re.compile(r"\bdict\s*\("),
                re.compile(r"\bheapq\."),
                re.compile(r"\bbisect\."),
            ),
        ),
    ),
    "java": LanguageProfile(
        name="java",
        uses_braces=True,
        remove_comments=_remove_c_style_comments,
        loop_patterns=(
            re.compile(r"\bfor\b"),
            re.compile(r"\bwhile\b"),
            re.compile(r"\bdo\b"),
        ),
        sort_patterns=(
            re.compile(r"\bArrays\.sort\b", re.IGNORECASE),
            re.compile(r"\bCollections\.sort\b", re.IGNORECASE),
            re.compile(r"\.sort\s*\(", re.IGNORECASE),
        ),
        bound_patterns=_C_LIKE_BOUND_PATTERNS,
        function_patterns=(
            re.compile(
                r"^[ \t]*(?:(?:public|private|protected|static|final|synchronized|native"
                r"|abstract|default|strictfp)\s+)*"
                r"(?:<[^;{}()=\n]*>\s*)?" + _JAVA_TYPE + r"\s+" + _NON_FUNCTION_WORDS
                + r"(?P<name>[A-Za-z_]\w*)\s*\([^;{}]*\)\s*(?:throws\s+[\w\s,.]+?)?\s*\{",
                re.MULTILINE,
            ),
        ),
        cst=CstAdapter(
            loop_nodes={
                "for_statement": "for",
                "enhanced_for_statement": "for",
                "while_statement": "while",
                "do_statement": "do",
            },
            function_node_types=("method_declaration",),
            sort_patterns=(
                re.compile(r"\bArrays\.sort\s*\("),
                re.compile(r"\bCollections\.sort\s*\("),
                re.compile(r"\.sort\s*\("),
            ),
            library_op_patterns=(
                re.compile(r"\bHashMap\b"),
                re.compile(r"\bHashSet\b"),
                re.compile(r"\bPriorityQueue\b"),
                re.compile(r"\bDeque\b"),
            ),
        ),
    ),
    "c": LanguageProfile(
        name="c",
        uses_braces=True,
        remove_comments=_remove_c_style_comments,
        loop_patterns=(
            re.compile(r"\bfor\b"),
            re.compile(r"\bwhile\b"),
            re.compile(r"\bdo\b"),
        ),
        sort_patterns=(re.compile(r"\bqsort\s*\(", re.IGNORECASE),),
        bound_patterns=_C_LIKE_BOUND_PATTERNS,
        function_patterns=(
            re.compile(
                r"^[ \t]*(?:[A-Za-z_][\w]*[ \t]+|\*[ \t]*)+\**" + _NON_FUNCTION_WORDS
                + r"(?P<name>[A-Za-z_]\w*)\s*\([^;{}]*\)\s*\{",
                re.MULTILINE,
            ),
        ),
        cst=CstAdapter(
            loop_nodes={
                "for_statement": "for",
                "while_statement": "while",
                "do_statement": "do",
            },
            function_node_types=("function_definition",),
            sort_patterns=(re.compile(r"\bqsort\s*\("),),
            library_op_patterns=(
                re.compile(r"\bbsearch\s*\("),
                re.compile(r"\bmalloc\s*\("),
                re.compile(r"\bcalloc\s*\("),
                re.compile(r"\brealloc\s*\("),
            ),
        ),
    ),
}


# ============================================================================
# Lookup
# ============================================================================


def normalize_language_tag(tag: str | None) -> str:
    """Lower-case and de-alias a language tag. Unknown tags pass through."""
    clean = (tag or AUTO).strip().lower() or AUTO
    return _LANGUAGE_ALIASES.get(clean, clean)


def is_supported(tag: str | None) -> bool:
    """True for ``auto`` and every tag with a registered profile."""
    normalized = normalize_language_tag(tag)
    return normalized == AUTO or normalized in PROFILES


def profile_for(tag: str | None) -> LanguageProfile:
    """Return the profile for ``tag``.

    ``auto`` (and, as a best-effort degradation, any unsupported tag)
    resolves to the ``DEFAULT_LANGUAGE`` profile.
    """
    normalized = normalize_language_tag(tag)
    profile = PROFILES.get(normalized)
    if profile is not None:
        return profile
    if normalized != AUTO:
        logger.debug("Unsupported language %r, using %s profile", tag, DEFAULT_LANGUAGE)
    return PROFILES[DEFAULT_LANGUAGE]


def supported_languages() -> list[str]:
    """Registered language tags, in registry order."""
    return list(PROFILES)


def strip_comments(text: str, profile: LanguageProfile) -> str:
    """Remove comments using the profile's own patterns.

    Lexical context is not tracked, so comment openers inside string literals
    are stripped too. The stripper is re-applied until the text is stable,
    which makes the operation idempotent.
    """
    current = text or ""
    while True:
        stripped = profile.remove_comments(current)
        if stripped == current:
            return stripped
        current = stripped
