"""Result and signal types shared by the lexical and structural analysers.

``AnalysisResult`` is the single output shape for both paths; callers can only
tell which path ran by reading the rationale trail.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Literal

BoundKind = Literal["constant", "log n", "n"]
LoopKind = Literal["for", "while", "do"]
RecursionHint = Literal["linear", "exponential", "factorial"]


class ComplexityClass(IntEnum):
    """Canonical complexity classes, valued by dominance rank."""

    UNKNOWN = -1
    CONSTANT = 0
    LOGARITHMIC = 1
    LINEAR = 2
    LINEARITHMIC = 3
    QUADRATIC = 4
    CUBIC = 5
    EXPONENTIAL = 6
    FACTORIAL = 7

    @property
    def big_o(self) -> str:
        return _BIG_O_LABELS[self]


_BIG_O_LABELS: dict[ComplexityClass, str] = {
    ComplexityClass.UNKNOWN: "O(?)",
    ComplexityClass.CONSTANT: "O(1)",
    ComplexityClass.LOGARITHMIC: "O(log n)",
    ComplexityClass.LINEAR: "O(n)",
    ComplexityClass.LINEARITHMIC: "O(n log n)",
    ComplexityClass.QUADRATIC: "O(n^2)",
    ComplexityClass.CUBIC: "O(n^3)",
    ComplexityClass.EXPONENTIAL: "O(2^n)",
    ComplexityClass.FACTORIAL: "O(n!)",
}


@dataclass(frozen=True)
class ConfidenceTier:
    """Advisory confidence values per signal, one instance per analysis path.

    Confidence never affects dominance; only ``ComplexityClass`` rank does.
    """

    single_loop: float
    nested_loops: float
    log_progression: float
    sort: float
    sort_with_loop: float
    linear_recursion: float
    branching_recursion: float
    no_signal: float


LEXICAL_CONFIDENCE = ConfidenceTier(
    single_loop=0.6,
    nested_loops=0.65,
    log_progression=0.58,
    sort=0.55,
    sort_with_loop=0.6,
    linear_recursion=0.52,
    branching_recursion=0.78,
    no_signal=0.25,
)

STRUCTURAL_CONFIDENCE = ConfidenceTier(
    single_loop=0.72,
    nested_loops=0.72,
    log_progression=0.62,
    sort=0.7,
    sort_with_loop=0.76,
    linear_recursion=0.52,
    branching_recursion=0.78,
    no_signal=0.35,
)


@dataclass(frozen=True)
class Complexity:
    """A complexity class with an advisory confidence in [0, 1]."""

    complexity_class: ComplexityClass
    confidence: float

    @property
    def big_o(self) -> str:
        return self.complexity_class.big_o

    def to_dict(self) -> dict[str, Any]:
        return {"bigO": self.big_o, "confidence": self.confidence}


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one analysis call. Immutable."""

    loop_count: int
    max_depth: int
    tags: tuple[str, ...]
    time: Complexity
    why: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the public wire shape."""
        return {
            "loops": {"count": self.loop_count, "maxDepth": self.max_depth},
            "tags": list(self.tags),
            "time": self.time.to_dict(),
            "why": list(self.why),
        }


# ============================================================================
# Transient signal types (scoped to a single analysis)
# ============================================================================


@dataclass
class LoopRecord:
    """An open loop scope on the nesting tracker's stack."""

    level: int
    bound: str
    logarithmic: bool = False


@dataclass(frozen=True)
class RecursionSignal:
    """A self-recursive function and its branching hint."""

    function_name: str
    self_call_count: int
    complexity_hint: RecursionHint
    direct: bool = True


@dataclass(frozen=True)
class LoopObservation:
    """One loop node seen while walking a parse tree."""

    kind: LoopKind
    depth: int
    bound_hint: BoundKind
    log_progression: bool = False


@dataclass
class NormalizedIR:
    """Language-agnostic summary of a parse tree."""

    language: str
    loops: list[LoopObservation] = field(default_factory=list)
    recursion: list[RecursionSignal] = field(default_factory=list)
    sorting_calls: list[str] = field(default_factory=list)
    library_ops: list[str] = field(default_factory=list)


@dataclass
class ComplexitySignals:
    """Everything one analysis path observed, ready for candidate assembly.

    ``chain_factors`` is the per-loop bound kind along the deepest nesting
    chain; ``chain_bounds`` is the matching display text.
    """

    language: str
    loop_count: int = 0
    max_depth: int = 0
    chain_bounds: list[str] = field(default_factory=list)
    chain_factors: list[BoundKind] = field(default_factory=list)
    has_log_progression: bool = False
    sorting_calls: list[str] = field(default_factory=list)
    library_ops: list[str] = field(default_factory=list)
    recursion: list[RecursionSignal] = field(default_factory=list)
