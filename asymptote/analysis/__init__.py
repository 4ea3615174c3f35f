"""Complexity estimation engine.

Two analysis paths share one candidate assembly and dominance resolver:

    tree-sitter CST (50) -> lexical heuristics (10)

Usage:
    from asymptote.analysis import AnalysisOrchestrator
    orchestrator = AnalysisOrchestrator()
    result = await orchestrator.analyse_structural(source, "python")
"""

from asymptote.analysis.types import (
    AnalysisResult,
    Complexity,
    ComplexityClass,
    ComplexitySignals,
    ConfidenceTier,
    LoopObservation,
    NormalizedIR,
    RecursionSignal,
)
from asymptote.analysis.protocols import ComplexityBackend
from asymptote.analysis.cache import GrammarCache, get_grammar_cache
from asymptote.analysis.backends import LexicalBackend, TreeSitterBackend
from asymptote.analysis.orchestrator import (
    AnalysisOrchestrator,
    analyse,
    analyse_structural,
    get_orchestrator,
)

__all__ = [
    "AnalysisOrchestrator",
    "AnalysisResult",
    "Complexity",
    "ComplexityBackend",
    "ComplexityClass",
    "ComplexitySignals",
    "ConfidenceTier",
    "GrammarCache",
    "LexicalBackend",
    "LoopObservation",
    "NormalizedIR",
    "RecursionSignal",
    "TreeSitterBackend",
    "analyse",
    "analyse_structural",
    "get_grammar_cache",
    "get_orchestrator",
]
