"""Tests for the single-flight grammar cache."""

import asyncio
import sys
import threading
import time

import pytest

from asymptote.analysis.cache import GrammarCache, get_grammar_cache, load_tree_sitter_parser
from asymptote.types.errors import GrammarLoadError, ParserUnavailableError


class RecordingLoader:
    """Blocking loader that counts calls and can fail the first N of them."""

    def __init__(self, fail_times: int = 0, delay: float = 0.05) -> None:
        self.calls: list[str] = []
        self.fail_times = fail_times
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self, language: str):
        with self._lock:
            self.calls.append(language)
            attempt = len(self.calls)
        time.sleep(self.delay)
        if attempt <= self.fail_times:
            raise GrammarLoadError("grammar fetch failed", language=language)
        return f"parser-{language}-{attempt}"


class TestGrammarCache:
    """Tests for memoized parser loads."""

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_one_load(self):
        loader = RecordingLoader()
        cache = GrammarCache(loader=loader)

        parsers = await asyncio.gather(*(cache.get_parser("python") for _ in range(5)))

        assert parsers == ["parser-python-1"] * 5
        assert loader.calls == ["python"]
        assert cache.stats == {"languages": ["python"], "loads": 1}

    @pytest.mark.asyncio
    async def test_later_requests_reuse_parser(self):
        loader = RecordingLoader(delay=0)
        cache = GrammarCache(loader=loader)

        first = await cache.get_parser("c")
        second = await cache.get_parser("c")

        assert first is second
        assert loader.calls == ["c"]

    @pytest.mark.asyncio
    async def test_languages_load_independently(self):
        loader = RecordingLoader(delay=0)
        cache = GrammarCache(loader=loader)

        await cache.get_parser("java")
        await cache.get_parser("c")

        assert sorted(loader.calls) == ["c", "java"]
        assert cache.stats["languages"] == ["c", "java"]

    @pytest.mark.asyncio
    async def test_failed_load_is_evicted(self):
        loader = RecordingLoader(fail_times=1, delay=0)
        cache = GrammarCache(loader=loader)

        with pytest.raises(GrammarLoadError):
            await cache.get_parser("java")
        assert cache.stats["languages"] == []

        assert await cache.get_parser("java") == "parser-java-2"
        assert cache.stats == {"languages": ["java"], "loads": 2}

    @pytest.mark.asyncio
    async def test_concurrent_waiters_share_a_failure(self):
        loader = RecordingLoader(fail_times=1)
        cache = GrammarCache(loader=loader)

        results = await asyncio.gather(
            cache.get_parser("python"),
            cache.get_parser("python"),
            return_exceptions=True,
        )

        assert all(isinstance(r, GrammarLoadError) for r in results)
        assert loader.calls == ["python"]

    @pytest.mark.asyncio
    async def test_clear_forces_reload(self):
        loader = RecordingLoader(delay=0)
        cache = GrammarCache(loader=loader)

        await cache.get_parser("python")
        cache.clear()
        assert cache.stats["languages"] == []
        assert await cache.get_parser("python") == "parser-python-2"


class TestParserLoader:
    """Tests for the default blocking loader."""

    def test_missing_grammar_pack(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "tree_sitter_language_pack", None)
        with pytest.raises(ParserUnavailableError) as exc_info:
            load_tree_sitter_parser("python")
        assert exc_info.value.context.language == "python"
        assert isinstance(exc_info.value.original_error, ImportError)

    def test_shared_cache_is_singleton(self):
        assert get_grammar_cache() is get_grammar_cache()
