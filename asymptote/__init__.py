"""
Asymptote - heuristic time-complexity estimation for pasted code.

Estimates the dominant Big-O class of a Python, Java, or C snippet from
loop nesting, loop bounds, sort calls, and recursion, and explains the
estimate with a rationale trail. A tree-sitter parse is used when available,
with text heuristics as the fallback.
"""

__version__ = "0.1.0"

from asymptote.analysis import (
    AnalysisResult,
    Complexity,
    ComplexityClass,
    analyse,
    analyse_structural,
)
from asymptote.profiles import profile_for, strip_comments

__all__ = [
    "AnalysisResult",
    "Complexity",
    "ComplexityClass",
    "analyse",
    "analyse_structural",
    "profile_for",
    "strip_comments",
    "__version__",
]
