"""Lexical (text heuristic) analysis backend.

Strips comments with the language profile, then runs the loop nesting
tracker, sort-call patterns, and recursion detector over the remaining text.
Serves as the universal fallback when tree-sitter cannot be used.

Priority: 10 (lowest; tree-sitter at 50).
"""

from __future__ import annotations

import logging

from asymptote.analysis.bounds import classify_bound
from asymptote.analysis.dominance import assess
from asymptote.analysis.loops import LoopNestingTracker
from asymptote.analysis.recursion import detect_recursion
from asymptote.analysis.types import (
    LEXICAL_CONFIDENCE,
    AnalysisResult,
    BoundKind,
    ComplexitySignals,
    LoopRecord,
)
from asymptote.profiles import PROFILES, LanguageProfile, strip_comments

logger = logging.getLogger(__name__)


def _factor_for(record: LoopRecord) -> BoundKind:
    # Progression on the loop line overrides a bound that looks linear.
    if record.logarithmic:
        return "log n"
    return classify_bound(record.bound)


class LexicalBackend:
    """Text-level complexity estimation. Never raises for string input."""

    @property
    def name(self) -> str:
        return "lexical"

    @property
    def priority(self) -> int:
        return 10

    def supports_language(self, language: str) -> bool:
        return language in PROFILES

    def collect_signals(self, source: str, profile: LanguageProfile) -> ComplexitySignals:
        """Gather loop, sort, and recursion signals from source text."""
        text = strip_comments(source or "", profile)
        scan = LoopNestingTracker(profile).scan(text)

        sorting_calls = [
            line.strip()
            for line in text.split("\n")
            if any(pattern.search(line) for pattern in profile.sort_patterns)
        ]

        return ComplexitySignals(
            language=profile.name,
            loop_count=scan.loop_count,
            max_depth=scan.max_depth,
            chain_bounds=[record.bound for record in scan.chain],
            chain_factors=[_factor_for(record) for record in scan.chain],
            has_log_progression=scan.has_log_loop,
            sorting_calls=sorting_calls,
            recursion=detect_recursion(text, profile),
        )

    def analyse(self, source: str, profile: LanguageProfile) -> AnalysisResult:
        signals = self.collect_signals(source, profile)
        logger.debug(
            "Lexical scan (%s): %d loop(s), depth %d",
            profile.name,
            signals.loop_count,
            signals.max_depth,
        )
        return assess(signals, LEXICAL_CONFIDENCE)

    async def analyse_async(self, source: str, profile: LanguageProfile) -> AnalysisResult:
        return self.analyse(source, profile)
