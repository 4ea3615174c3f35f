"""Dominance resolution and candidate assembly.

Both analysis paths hand their ``ComplexitySignals`` to ``assess``, which
builds the candidate pool and rationale trail in detection order and then
picks the dominant candidate. Rationale lists every signal observed, not
only the winner.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from asymptote.analysis.bounds import class_for_factors, expression_for
from asymptote.analysis.types import (
    AnalysisResult,
    Complexity,
    ComplexityClass,
    ComplexitySignals,
    ConfidenceTier,
    RecursionSignal,
)

UNKNOWN_CONFIDENCE = 0.25

_RECURSION_CLASSES: dict[str, ComplexityClass] = {
    "linear": ComplexityClass.LINEAR,
    "exponential": ComplexityClass.EXPONENTIAL,
    "factorial": ComplexityClass.FACTORIAL,
}


def pick_dominant(candidates: list[Complexity]) -> Complexity:
    """Highest class rank wins; ties keep the earliest candidate.

    An empty pool yields an unknown complexity at low confidence.
    """
    if not candidates:
        return Complexity(ComplexityClass.UNKNOWN, UNKNOWN_CONFIDENCE)
    best = candidates[0]
    for candidate in candidates[1:]:
        if candidate.complexity_class > best.complexity_class:
            best = candidate
    return best


def recursion_class(signals: list[RecursionSignal]) -> ComplexityClass | None:
    """Worst class across recursion signals, or None when there are none."""
    if not signals:
        return None
    return max(_RECURSION_CLASSES[s.complexity_hint] for s in signals)


@dataclass
class CandidatePool:
    """Ordered candidates, tags, and rationale for one analysis."""

    candidates: list[Complexity] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    why: list[str] = field(default_factory=list)

    def add(self, complexity_class: ComplexityClass, confidence: float, reason: str) -> None:
        self.candidates.append(Complexity(complexity_class, confidence))
        self.why.append(reason)

    def note(self, reason: str) -> None:
        self.why.append(reason)

    def tag(self, name: str) -> None:
        if name not in self.tags:
            self.tags.append(name)


def assess(
    signals: ComplexitySignals,
    tier: ConfidenceTier,
    preamble: list[str] | None = None,
) -> AnalysisResult:
    """Build the candidate pool from signals and resolve it."""
    pool = CandidatePool(why=list(preamble or []))

    if signals.chain_factors:
        loop_class = class_for_factors(signals.chain_factors)
        expression = expression_for(signals.chain_factors)
        if len(signals.chain_factors) == 1:
            pool.add(
                loop_class,
                tier.single_loop,
                f"Detected loop bounded by {signals.chain_bounds[0]}, "
                f"normalized to O({expression}) -> {loop_class.big_o}.",
            )
        else:
            pool.add(
                loop_class,
                tier.nested_loops,
                f"Detected {signals.loop_count} loop(s) nested {signals.max_depth} deep "
                f"with bounds {' * '.join(signals.chain_bounds)}, "
                f"normalized to O({expression}) -> {loop_class.big_o}.",
            )

    if signals.has_log_progression:
        pool.add(
            ComplexityClass.LOGARITHMIC,
            tier.log_progression,
            "Detected multiplicative/divisive loop progression, suggesting logarithmic behaviour.",
        )

    has_sort = bool(signals.sorting_calls)
    if has_sort:
        pool.tag("sort")
        pool.add(
            ComplexityClass.LINEARITHMIC,
            tier.sort,
            f"Detected {len(signals.sorting_calls)} sorting call(s) in {signals.language} "
            "(often O(n log n)).",
        )

    if has_sort and signals.loop_count > 0:
        pool.add(
            ComplexityClass.LINEARITHMIC,
            tier.sort_with_loop,
            "Sort + loop combination preserved as canonical O(n log n). "
            "(Worst-case composition may exceed this heuristic.)",
        )

    worst_recursion = recursion_class(signals.recursion)
    if worst_recursion is not None:
        pool.tag("recursion")
        names = ", ".join(
            f"{s.function_name} ({s.complexity_hint}, {s.self_call_count} self-call(s))"
            for s in signals.recursion
        )
        confidence = (
            tier.linear_recursion
            if worst_recursion == ComplexityClass.LINEAR
            else tier.branching_recursion
        )
        pool.add(
            worst_recursion,
            confidence,
            f"Detected recursion in {names}, mapped to canonical {worst_recursion.big_o}.",
        )

    if signals.library_ops:
        pool.tag("library-ops")
        pool.note(
            f"Detected {len(signals.library_ops)} library operation pattern(s): "
            f"{'; '.join(signals.library_ops[:2])}."
        )

    if not pool.candidates:
        pool.add(
            ComplexityClass.CONSTANT,
            tier.no_signal,
            "No loops, recursion, or sort operations detected (simple heuristics).",
        )

    return AnalysisResult(
        loop_count=signals.loop_count,
        max_depth=signals.max_depth,
        tags=tuple(pool.tags),
        time=pick_dominant(pool.candidates),
        why=tuple(pool.why),
    )
