"""Backend protocol for complexity analysis.

Both analysis paths (tree-sitter CST and lexical heuristics) satisfy the
same contract and produce the same ``AnalysisResult`` shape. The
``AnalysisOrchestrator`` picks an implementation at runtime by availability:
higher priority first, falling through on failure.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from asymptote.analysis.types import AnalysisResult
from asymptote.profiles import LanguageProfile


@runtime_checkable
class ComplexityBackend(Protocol):
    """Abstraction over the structural and lexical analysers.

    Priority convention:
        50 = tree-sitter (structural understanding)
        10 = lexical (text-level fallback, never fails)
    """

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'tree_sitter', 'lexical')."""
        ...

    @property
    def priority(self) -> int:
        """Higher priority backends are tried first."""
        ...

    def supports_language(self, language: str) -> bool:
        """Check if this backend can handle the given language."""
        ...

    async def analyse_async(
        self,
        source: str,
        profile: LanguageProfile,
    ) -> AnalysisResult:
        """Analyse source text; may raise ``AsymptoteError`` on failure."""
        ...
