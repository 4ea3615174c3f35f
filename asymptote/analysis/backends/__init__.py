"""Analysis backends.

Available backends:
- TreeSitterBackend (priority=50): CST-based structural analysis
- LexicalBackend (priority=10): Text-level fallback
"""

from asymptote.analysis.backends.lexical_backend import LexicalBackend
from asymptote.analysis.backends.tree_sitter_backend import TreeSitterBackend

__all__ = ["LexicalBackend", "TreeSitterBackend"]
