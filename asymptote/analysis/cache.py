"""Single-flight cache of tree-sitter parsers, keyed by language.

The first request for a language starts one load in a worker thread;
concurrent and later callers await that same task instead of loading again.
A failed load is evicted so a later call can retry.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable

from asymptote.types.errors import GrammarLoadError, ParserUnavailableError
from asymptote.utils.logger import logger


def load_tree_sitter_parser(language: str) -> Any:
    """Build a tree-sitter ``Parser`` for language (blocking).

    Raises:
        ParserUnavailableError: If tree-sitter or the grammar pack is missing.
        GrammarLoadError: If the grammar cannot be fetched or built.
    """
    try:
        import tree_sitter_language_pack as tslp
        from tree_sitter import Parser
    except ImportError as e:
        raise ParserUnavailableError(
            "tree-sitter not available. Install with: pip install tree-sitter "
            "tree-sitter-language-pack",
            language=language,
            original_error=e,
        ) from e

    try:
        return Parser(tslp.get_language(language))
    except Exception as e:
        raise GrammarLoadError(
            f"Failed to initialize tree-sitter for {language}: {e}",
            language=language,
            original_error=e,
        ) from e


class GrammarCache:
    """Memoized, single-flight parser loads.

    Usage:
        cache = GrammarCache()
        parser = await cache.get_parser("python")
    """

    def __init__(self, loader: Callable[[str], Any] | None = None) -> None:
        self._loader = loader or load_tree_sitter_parser
        self._loads: dict[str, asyncio.Future[Any]] = {}
        self._load_count = 0

    async def get_parser(self, language: str) -> Any:
        """Return the parser for language, loading it on first use."""
        loop = asyncio.get_running_loop()
        pending = self._loads.get(language)
        # A load still running on a different (finished) event loop can never
        # complete for this caller, so start over.
        if pending is None or (not pending.done() and pending.get_loop() is not loop):
            pending = loop.create_task(self._load(language))
            self._loads[language] = pending
        return await pending

    async def _load(self, language: str) -> Any:
        self._load_count += 1
        logger.debug(f"Loading tree-sitter grammar for {language}")
        try:
            parser = await asyncio.to_thread(self._loader, language)
        except Exception:
            self._loads.pop(language, None)
            raise
        logger.debug(f"Loaded tree-sitter grammar for {language}")
        return parser

    def clear(self) -> None:
        """Drop all cached parsers."""
        self._loads.clear()

    @property
    def stats(self) -> dict[str, Any]:
        """Cache statistics."""
        return {
            "languages": sorted(
                lang for lang, task in self._loads.items()
                if task.done() and not task.cancelled() and task.exception() is None
            ),
            "loads": self._load_count,
        }


_shared_lock = threading.Lock()
_shared_cache: GrammarCache | None = None


def get_grammar_cache() -> GrammarCache:
    """Return the process-wide shared ``GrammarCache``."""
    global _shared_cache
    if _shared_cache is not None:
        return _shared_cache
    with _shared_lock:
        if _shared_cache is None:  # pragma: no branch
            _shared_cache = GrammarCache()
    return _shared_cache
