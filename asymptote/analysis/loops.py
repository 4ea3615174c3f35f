"""Loop nesting tracker for the lexical path.

A single pass over comment-stripped lines with a stack of open loop scopes.
Scope level is the unmatched open-brace count for brace-delimited languages
and the leading-whitespace width for indentation-delimited ones. Braces are
counted per line, so multi-line loop headers can be misjudged.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from asymptote.analysis.bounds import (
    DEFAULT_BOUND,
    extract_loop_bound,
    has_log_progression,
)
from asymptote.analysis.types import LoopRecord
from asymptote.profiles import LanguageProfile


@dataclass
class LoopScan:
    """Output of one tracker pass."""

    loop_count: int = 0
    max_depth: int = 0
    chain: list[LoopRecord] = field(default_factory=list)
    has_log_loop: bool = False


class LoopNestingTracker:
    """Tracks loop nesting for one profile.

    Usage:
        scan = LoopNestingTracker(profile).scan(stripped_text)
        scan.max_depth, [r.bound for r in scan.chain]
    """

    def __init__(self, profile: LanguageProfile) -> None:
        self._profile = profile

    def is_loop_line(self, line: str) -> bool:
        return any(p.search(line) for p in self._profile.loop_patterns)

    def scan(self, text: str) -> LoopScan:
        result = LoopScan()
        stack: list[LoopRecord] = []
        brace_depth = 0

        for line in text.split("\n"):
            stripped = line.strip()
            if not stripped:
                continue

            if self._profile.uses_braces:
                brace_depth = max(0, brace_depth - stripped.count("}"))
                while stack and stack[-1].level > brace_depth:
                    stack.pop()
                level = brace_depth + 1
            else:
                indent = len(line) - len(line.lstrip())
                while stack and stack[-1].level >= indent:
                    stack.pop()
                level = indent

            if self.is_loop_line(stripped):
                self._open_loop(stripped, level, stack, result)

            if self._profile.uses_braces:
                brace_depth += stripped.count("{")

        return result

    def _open_loop(
        self,
        line: str,
        level: int,
        stack: list[LoopRecord],
        result: LoopScan,
    ) -> None:
        bound = extract_loop_bound(line, self._profile) or DEFAULT_BOUND
        logarithmic = has_log_progression(line)
        stack.append(LoopRecord(level=level, bound=bound, logarithmic=logarithmic))

        result.loop_count += 1
        result.has_log_loop = result.has_log_loop or logarithmic
        # Strictly deeper only: ties keep the first chain that got there.
        if len(stack) > result.max_depth:
            result.max_depth = len(stack)
            result.chain = list(stack)
