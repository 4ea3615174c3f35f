"""Analysis orchestrator: the fallback controller and public entry points.

``analyse`` runs the lexical path synchronously. ``analyse_structural``
routes through registered backends in priority order (tree-sitter first) and
falls back to the next one on any failure, prepending a rationale entry that
discloses the fallback. Both return the same ``AnalysisResult`` shape.

Usage:
    from asymptote import analyse, analyse_structural

    result = analyse("for i in range(n): print(i)", "python")
    result = await analyse_structural(source, "java")
"""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import TYPE_CHECKING

from asymptote.analysis.backends import LexicalBackend, TreeSitterBackend
from asymptote.analysis.types import AnalysisResult
from asymptote.config import AnalyzerConfig
from asymptote.constants import FALLBACK_NOTICE
from asymptote.profiles import (
    AUTO,
    DEFAULT_LANGUAGE,
    LanguageProfile,
    is_supported,
    normalize_language_tag,
    profile_for,
)
from asymptote.types.errors import AsymptoteError, ConfigurationError
from asymptote.utils.logger import logger

if TYPE_CHECKING:
    from asymptote.analysis.cache import GrammarCache
    from asymptote.analysis.protocols import ComplexityBackend


def resolve_language(tag: str | None) -> tuple[LanguageProfile, list[str]]:
    """Resolve a tag to a profile plus any rationale notes about the choice."""
    profile = profile_for(tag)
    if is_supported(tag):
        return profile, []
    note = (
        f"Language {normalize_language_tag(tag)!r} is not supported; "
        f"analysed as {DEFAULT_LANGUAGE}."
    )
    return profile, [note]


def _with_preamble(result: AnalysisResult, notes: list[str]) -> AnalysisResult:
    if not notes:
        return result
    return replace(result, why=tuple(notes) + result.why)


class AnalysisOrchestrator:
    """Routes analysis through backends with fallback.

    Backends are tried in priority order (highest first); the first one to
    return wins. The lexical backend is always present as the last resort.
    """

    def __init__(
        self,
        backends: list[ComplexityBackend] | None = None,
        config: AnalyzerConfig | None = None,
        grammar_cache: GrammarCache | None = None,
    ) -> None:
        self._config = config or AnalyzerConfig()
        self._lexical = LexicalBackend()
        if backends is not None:
            self._backends = sorted(backends, key=lambda b: b.priority, reverse=True)
        else:
            self._backends = [
                TreeSitterBackend(grammar_cache=grammar_cache, config=self._config),  # priority=50
                self._lexical,  # priority=10
            ]

    @property
    def backends(self) -> list[ComplexityBackend]:
        """Registered backends sorted by priority (highest first)."""
        return list(self._backends)

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    def analyse(self, source: str, language: str | None = AUTO) -> AnalysisResult:
        """Estimate complexity with the lexical heuristics only."""
        profile, notes = resolve_language(language)
        return _with_preamble(self._lexical.analyse(source or "", profile), notes)

    async def analyse_structural(
        self,
        source: str,
        language: str | None = AUTO,
    ) -> AnalysisResult:
        """Estimate complexity, preferring the CST path.

        Never raises for string input: parser, grammar, and parse failures
        fall through to the next backend and are disclosed in ``why``.
        """
        profile, notes = resolve_language(language)
        source = source or ""
        failures: list[str] = []

        for backend in self._backends:
            if not backend.supports_language(profile.name):
                continue
            try:
                result = await backend.analyse_async(source, profile)
            except AsymptoteError as e:
                logger.debug(f"Backend {backend.name} failed for {profile.name}: {e}")
                failures.append(str(e))
                continue
            except Exception as e:
                logger.debug(
                    f"Backend {backend.name} raised unexpectedly for {profile.name}: {e!r}"
                )
                failures.append(repr(e))
                continue

            if failures:
                notes = notes + [f"{FALLBACK_NOTICE} ({failures[0]})"]
            return _with_preamble(result, notes)

        # Only reachable when every registered backend failed.
        notes = notes + [f"{FALLBACK_NOTICE} ({failures[0] if failures else 'no backend'})"]
        return _with_preamble(self._lexical.analyse(source, profile), notes)


# ============================================================================
# Shared instance and module-level entry points
# ============================================================================

_shared_lock = threading.Lock()
_shared_orchestrator: AnalysisOrchestrator | None = None


def _load_config() -> AnalyzerConfig:
    try:
        return AnalyzerConfig.from_env()
    except ConfigurationError as e:
        logger.warning(f"Ignoring invalid configuration: {e}")
        return AnalyzerConfig()


def get_orchestrator() -> AnalysisOrchestrator:
    """Return the process-wide shared orchestrator (created on first call)."""
    global _shared_orchestrator
    if _shared_orchestrator is not None:
        return _shared_orchestrator
    with _shared_lock:
        if _shared_orchestrator is None:  # pragma: no branch
            _shared_orchestrator = AnalysisOrchestrator(config=_load_config())
    return _shared_orchestrator


def analyse(source: str, language: str | None = AUTO) -> AnalysisResult:
    """Lexical complexity estimate for source in the given language."""
    return get_orchestrator().analyse(source, language)


async def analyse_structural(source: str, language: str | None = AUTO) -> AnalysisResult:
    """CST complexity estimate, falling back to the lexical path on failure."""
    return await get_orchestrator().analyse_structural(source, language)
