"""Tests for the language registry and its rule table cache."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from pincel.errors import RuleTableError, UnknownLanguageError
from pincel.languages import (
    LanguageRegistry,
    find_language_by_filename,
    find_language_by_mimetype,
    get_default_registry,
    get_language_info,
    get_rule_table,
    list_languages,
)
from pincel.lexer import ROOT, Emit, LanguageInfo, RuleTable, RuleTableBuilder, build_table
from pincel.tokens import TokenKind

INFO = LanguageInfo(
    name="Demo",
    aliases=("demo", "dm"),
    filenames=("*.demo", "Demofile"),
    mimetypes=("text/x-demo",),
)


def demo_table() -> RuleTable:
    return build_table(INFO, {ROOT: [("(?s:.)", Emit(TokenKind.TEXT))]})


class CountingFactory:
    """Table factory that records how often it runs."""

    def __init__(self, delay: float = 0.0) -> None:
        self.calls = 0
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self) -> RuleTable:
        with self._lock:
            self.calls += 1
        time.sleep(self.delay)
        return demo_table()


class TestLookup:
    @pytest.fixture
    def registry(self) -> LanguageRegistry:
        return LanguageRegistry().register(INFO, demo_table)

    def test_resolve_by_name_and_alias(self, registry: LanguageRegistry) -> None:
        assert registry.get_info("Demo") is INFO
        assert registry.get_info("demo") is INFO
        assert registry.get_info("DM") is INFO

    def test_unknown_language(self, registry: LanguageRegistry) -> None:
        with pytest.raises(UnknownLanguageError) as exc_info:
            registry.get_table("cobol")
        assert exc_info.value.name == "cobol"
        assert isinstance(exc_info.value, LookupError)

    def test_contains_and_len(self, registry: LanguageRegistry) -> None:
        assert "demo" in registry
        assert "DEMO" in registry
        assert "cobol" not in registry
        assert len(registry) == 1

    def test_find_by_filename(self, registry: LanguageRegistry) -> None:
        assert registry.find_by_filename("src/app/main.demo") is INFO
        assert registry.find_by_filename("/tmp/Demofile") is INFO
        assert registry.find_by_filename("main.txt") is None

    def test_find_by_mimetype(self, registry: LanguageRegistry) -> None:
        assert registry.find_by_mimetype("text/x-demo") is INFO
        assert registry.find_by_mimetype("text/html") is None

    def test_duplicate_alias_rejected(self, registry: LanguageRegistry) -> None:
        other = LanguageInfo(name="Other", aliases=("dm",))
        with pytest.raises(ValueError, match="already registered by Demo"):
            registry.register(other, demo_table)
        assert "other" not in registry

    def test_languages_in_registration_order(self, registry: LanguageRegistry) -> None:
        second = LanguageInfo(name="Second")
        registry.register(second, demo_table)
        assert registry.languages == (INFO, second)


class TestTableCache:
    def test_table_is_built_lazily_and_memoized(self) -> None:
        factory = CountingFactory()
        registry = LanguageRegistry().register(INFO, factory)
        assert factory.calls == 0
        assert not registry.is_built("demo")

        first = registry.get_table("demo")
        second = registry.get_table("Demo")
        assert first is second
        assert factory.calls == 1
        assert registry.is_built("dm")

    def test_concurrent_first_use_builds_once(self) -> None:
        factory = CountingFactory(delay=0.05)
        registry = LanguageRegistry().register(INFO, factory)
        barrier = threading.Barrier(16)

        def fetch() -> RuleTable:
            barrier.wait()
            return registry.get_table("demo")

        with ThreadPoolExecutor(max_workers=16) as executor:
            tables = list(executor.map(lambda _: fetch(), range(16)))

        assert factory.calls == 1
        assert all(table is tables[0] for table in tables)

    def test_languages_build_independently(self) -> None:
        slow = CountingFactory(delay=0.05)
        fast = CountingFactory()
        registry = LanguageRegistry()
        registry.register(INFO, slow)
        registry.register(LanguageInfo(name="Fast"), fast)

        with ThreadPoolExecutor(max_workers=2) as executor:
            futures = [executor.submit(registry.get_table, "demo"), executor.submit(registry.get_table, "fast")]
            for future in futures:
                future.result()
        assert (slow.calls, fast.calls) == (1, 1)

    def test_build_failure_is_not_retried(self) -> None:
        calls = 0

        def broken() -> RuleTable:
            nonlocal calls
            calls += 1
            return build_table(INFO, {ROOT: [("(", Emit(TokenKind.TEXT))]})

        registry = LanguageRegistry().register(INFO, broken)
        with pytest.raises(RuleTableError) as first:
            registry.get_table("demo")
        with pytest.raises(RuleTableError) as second:
            registry.get_table("demo")
        assert first.value is second.value
        assert calls == 1
        assert not registry.is_built("demo")

    def test_duplicate_state_failure_is_not_retried(self) -> None:
        calls = 0

        def duplicated() -> RuleTable:
            nonlocal calls
            calls += 1
            builder = RuleTableBuilder(INFO).state(ROOT, [("a", Emit(TokenKind.TEXT))])
            builder.state(ROOT, [("b", Emit(TokenKind.TEXT))])
            return builder.build()

        registry = LanguageRegistry().register(INFO, duplicated)
        for _ in range(3):
            with pytest.raises(RuleTableError, match="already defined"):
                registry.get_table("demo")
        assert calls == 1

    def test_any_factory_error_is_recorded(self) -> None:
        calls = 0

        def crashing() -> RuleTable:
            nonlocal calls
            calls += 1
            raise KeyError("missing vocabulary")

        registry = LanguageRegistry().register(INFO, crashing)
        with pytest.raises(KeyError) as first:
            registry.get_table("demo")
        with pytest.raises(KeyError) as second:
            registry.get_table("dm")
        assert first.value is second.value
        assert calls == 1


class TestDefaultRegistry:
    def test_singleton(self) -> None:
        assert get_default_registry() is get_default_registry()

    def test_builtin_languages(self) -> None:
        names = [info.name for info in list_languages()]
        assert names[:2] == ["Java", "Text"]

    def test_module_helpers(self) -> None:
        assert get_language_info("java").name == "Java"
        assert find_language_by_filename("Main.java").name == "Java"
        assert find_language_by_filename("notes.txt").name == "Text"
        assert find_language_by_mimetype("text/x-java").name == "Java"
        assert get_rule_table("java") is get_rule_table("Java")

    def test_text_table(self) -> None:
        table = get_rule_table("plain")
        assert table.name == "Text"
        assert len(table.rules_for(ROOT)) == 1
