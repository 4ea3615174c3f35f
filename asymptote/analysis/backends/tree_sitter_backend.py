"""Tree-sitter analysis backend.

Parses source into a concrete syntax tree, walks it into a normalized IR
with the profile's CST adapter table, and feeds the result through the same
candidate assembly and dominance resolution as the lexical path.

Priority: 50 (above lexical at 10).
"""

from __future__ import annotations

from asymptote.analysis.cache import GrammarCache, get_grammar_cache
from asymptote.analysis.dominance import assess
from asymptote.analysis.ir import build_normalized_ir, signals_from_ir
from asymptote.analysis.types import STRUCTURAL_CONFIDENCE, AnalysisResult, NormalizedIR
from asymptote.config import AnalyzerConfig
from asymptote.constants import STRUCTURAL_NOTICE
from asymptote.profiles import PROFILES, LanguageProfile
from asymptote.types.errors import AsymptoteError, ParseFailedError
from asymptote.utils.logger import logger


class TreeSitterBackend:
    """CST-based complexity estimation.

    Raises ``AsymptoteError`` subclasses when the parser is unavailable, the
    grammar cannot be loaded, or the source does not parse; the orchestrator
    turns those into a lexical fallback.
    """

    def __init__(
        self,
        grammar_cache: GrammarCache | None = None,
        config: AnalyzerConfig | None = None,
    ) -> None:
        self._grammar_cache = grammar_cache or get_grammar_cache()
        self._config = config or AnalyzerConfig()

    @property
    def name(self) -> str:
        return "tree_sitter"

    @property
    def priority(self) -> int:
        return 50

    def supports_language(self, language: str) -> bool:
        return language in PROFILES

    async def build_ir(self, source: str, profile: LanguageProfile) -> NormalizedIR:
        """Parse source and walk the tree into a normalized IR."""
        parser = await self._grammar_cache.get_parser(profile.name)

        try:
            tree = parser.parse((source or "").encode("utf-8"))
        except AsymptoteError:
            raise
        except Exception as e:
            raise ParseFailedError(
                f"Tree-sitter parse failed for {profile.name}: {e}",
                language=profile.name,
                original_error=e,
            ) from e

        root = tree.root_node
        if self._config.fallback_on_syntax_error and root.has_error:
            raise ParseFailedError(
                f"Source has syntax errors for the {profile.name} grammar",
                language=profile.name,
            )

        return build_normalized_ir(root, profile, self._config.snippet_max_length)

    async def analyse_async(self, source: str, profile: LanguageProfile) -> AnalysisResult:
        ir = await self.build_ir(source, profile)
        logger.debug(
            f"CST walk ({profile.name}): {len(ir.loops)} loop(s), "
            f"{len(ir.recursion)} recursive function(s), {len(ir.sorting_calls)} sort call(s)"
        )
        return assess(signals_from_ir(ir), STRUCTURAL_CONFIDENCE, preamble=[STRUCTURAL_NOTICE])
