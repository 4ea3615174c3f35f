"""Tests for result types and complexity classes."""

import pytest

from asymptote.analysis.types import (
    LEXICAL_CONFIDENCE,
    STRUCTURAL_CONFIDENCE,
    AnalysisResult,
    Complexity,
    ComplexityClass,
)


class TestComplexityClass:
    """Tests for the canonical class set."""

    def test_rank_order(self):
        ordered = [
            ComplexityClass.UNKNOWN,
            ComplexityClass.CONSTANT,
            ComplexityClass.LOGARITHMIC,
            ComplexityClass.LINEAR,
            ComplexityClass.LINEARITHMIC,
            ComplexityClass.QUADRATIC,
            ComplexityClass.CUBIC,
            ComplexityClass.EXPONENTIAL,
            ComplexityClass.FACTORIAL,
        ]
        assert sorted(ordered) == ordered

    @pytest.mark.parametrize(
        "member, label",
        [
            (ComplexityClass.UNKNOWN, "O(?)"),
            (ComplexityClass.CONSTANT, "O(1)"),
            (ComplexityClass.LOGARITHMIC, "O(log n)"),
            (ComplexityClass.LINEAR, "O(n)"),
            (ComplexityClass.LINEARITHMIC, "O(n log n)"),
            (ComplexityClass.QUADRATIC, "O(n^2)"),
            (ComplexityClass.CUBIC, "O(n^3)"),
            (ComplexityClass.EXPONENTIAL, "O(2^n)"),
            (ComplexityClass.FACTORIAL, "O(n!)"),
        ],
    )
    def test_labels(self, member, label):
        assert member.big_o == label

    def test_rank_orders_growth(self):
        assert ComplexityClass.LINEARITHMIC > ComplexityClass.LINEAR
        assert ComplexityClass.FACTORIAL > ComplexityClass.EXPONENTIAL


class TestConfidenceTiers:
    """Tests for the per-path confidence tables."""

    def test_structural_is_at_least_lexical(self):
        assert STRUCTURAL_CONFIDENCE.single_loop > LEXICAL_CONFIDENCE.single_loop
        assert STRUCTURAL_CONFIDENCE.sort > LEXICAL_CONFIDENCE.sort
        assert STRUCTURAL_CONFIDENCE.no_signal == 0.35
        assert LEXICAL_CONFIDENCE.no_signal == 0.25


class TestAnalysisResult:
    """Tests for the public result shape."""

    def test_to_dict(self):
        result = AnalysisResult(
            loop_count=2,
            max_depth=2,
            tags=("sort",),
            time=Complexity(ComplexityClass.QUADRATIC, 0.65),
            why=("first", "second"),
        )
        assert result.to_dict() == {
            "loops": {"count": 2, "maxDepth": 2},
            "tags": ["sort"],
            "time": {"bigO": "O(n^2)", "confidence": 0.65},
            "why": ["first", "second"],
        }

    def test_immutable(self):
        result = AnalysisResult(0, 0, (), Complexity(ComplexityClass.CONSTANT, 0.25), ())
        with pytest.raises(AttributeError):
            result.loop_count = 3
