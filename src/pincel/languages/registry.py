"""Language registry with a once-per-language rule table cache.

The registry maps language names, aliases, filename globs and MIME types to
language entries. Each entry holds the language metadata and a factory that
builds its RuleTable. Tables are compiled lazily on first use and memoized
for the registry's lifetime.

Thread Safety:
Table construction is guarded per language: the first caller compiles the
table while concurrent first callers for the same language wait on that
language's lock, so every factory runs exactly once. Different languages
compile independently. Built tables are immutable and shared by every lexer.

A factory that fails is never retried; the recorded error (RuleTableError or
whatever else the factory raised) is raised again on every later request.

Example:
    >>> registry = LanguageRegistry()
    >>> registry.register(JAVA_INFO, build_java_table)
    >>> table = registry.get_table("java")
    >>> registry.get_table("java") is table
    True
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import PurePath

from pincel.errors import UnknownLanguageError
from pincel.lexer.rules import LanguageInfo, RuleTable
from pincel.utils.logger import get_logger

logger = get_logger(__name__)

TableFactory = Callable[[], RuleTable]


@dataclass(frozen=True, slots=True)
class LanguageEntry:
    """A registered language: metadata plus its table factory."""

    info: LanguageInfo
    factory: TableFactory


class LanguageRegistry:
    """Registry of languages and their lazily built rule tables."""

    __slots__ = ("_entries", "_by_name", "_tables", "_failures", "_locks", "_guard")

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._entries: list[LanguageEntry] = []
        self._by_name: dict[str, LanguageEntry] = {}
        self._tables: dict[str, RuleTable] = {}
        self._failures: dict[str, Exception] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def register(self, info: LanguageInfo, factory: TableFactory) -> LanguageRegistry:
        """Register a language.

        Args:
            info: Language metadata; its name and aliases become lookup keys
            factory: Zero-argument callable building the language's RuleTable

        Returns:
            Self for chaining

        Raises:
            ValueError: If a name or alias is already registered
        """
        entry = LanguageEntry(info=info, factory=factory)
        keys = {info.name.lower(), *(alias.lower() for alias in info.aliases)}
        with self._guard:
            for key in keys:
                if key in self._by_name:
                    existing = self._by_name[key].info.name
                    msg = f"Language name '{key}' already registered by {existing}"
                    raise ValueError(msg)
            for key in keys:
                self._by_name[key] = entry
            self._entries.append(entry)
        return self

    def resolve(self, name: str) -> LanguageEntry:
        """Get the entry for a language name or alias (case-insensitive).

        Raises:
            UnknownLanguageError: If nothing is registered under that name
        """
        entry = self._by_name.get(name.lower())
        if entry is None:
            raise UnknownLanguageError(name)
        return entry

    def get_info(self, name: str) -> LanguageInfo:
        """Get metadata for a language name or alias."""
        return self.resolve(name).info

    def get_table(self, name: str) -> RuleTable:
        """Get the compiled rule table for a language, building it once.

        Raises:
            UnknownLanguageError: If the language is not registered
            RuleTableError: If the table failed to build (now or earlier)
            Exception: Whatever else the factory raised (now or earlier)
        """
        entry = self.resolve(name)
        key = entry.info.name

        table = self._tables.get(key)
        if table is not None:
            return table

        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())

        with lock:
            table = self._tables.get(key)
            if table is not None:
                return table
            failure = self._failures.get(key)
            if failure is not None:
                raise failure
            try:
                table = entry.factory()
            except Exception as exc:
                logger.error("Rule table for %s failed to build: %s", key, exc)
                self._failures[key] = exc
                raise
            logger.debug("Compiled rule table for %s", key)
            self._tables[key] = table
            return table

    def is_built(self, name: str) -> bool:
        """Check whether a language's table has been compiled already."""
        return self.resolve(name).info.name in self._tables

    def find_by_filename(self, filename: str) -> LanguageInfo | None:
        """Find the first language whose filename globs match a path's name."""
        basename = PurePath(filename).name
        for entry in self._entries:
            if any(fnmatch(basename, glob) for glob in entry.info.filenames):
                return entry.info
        return None

    def find_by_mimetype(self, mimetype: str) -> LanguageInfo | None:
        """Find the first language registered for a MIME type."""
        for entry in self._entries:
            if mimetype in entry.info.mimetypes:
                return entry.info
        return None

    @property
    def languages(self) -> tuple[LanguageInfo, ...]:
        """Metadata of all registered languages, in registration order."""
        return tuple(entry.info for entry in self._entries)

    def __contains__(self, name: str) -> bool:
        """Support 'name in registry' syntax."""
        return name.lower() in self._by_name

    def __len__(self) -> int:
        """Number of registered languages."""
        return len(self._entries)


def _build_default_registry() -> LanguageRegistry:
    """Build the default registry (internal, not cached)."""
    from pincel.languages.java import JAVA_INFO, build_java_table
    from pincel.languages.text import TEXT_INFO, build_text_table

    registry = LanguageRegistry()
    registry.register(JAVA_INFO, build_java_table)
    registry.register(TEXT_INFO, build_text_table)
    return registry


_DEFAULT_REGISTRY: LanguageRegistry | None = None
_default_lock = threading.Lock()


def get_default_registry() -> LanguageRegistry:
    """Get the default language registry (cached singleton).

    Returns:
        Registry with the built-in languages (java, text)
    """
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        with _default_lock:
            if _DEFAULT_REGISTRY is None:
                _DEFAULT_REGISTRY = _build_default_registry()
    return _DEFAULT_REGISTRY


def register_language(info: LanguageInfo, factory: TableFactory) -> None:
    """Register a language with the default registry."""
    get_default_registry().register(info, factory)


def get_rule_table(name: str) -> RuleTable:
    """Get a compiled table from the default registry."""
    return get_default_registry().get_table(name)


def get_language_info(name: str) -> LanguageInfo:
    return get_default_registry().get_info(name)


def find_language_by_filename(filename: str) -> LanguageInfo | None:
    return get_default_registry().find_by_filename(filename)


def find_language_by_mimetype(mimetype: str) -> LanguageInfo | None:
    return get_default_registry().find_by_mimetype(mimetype)


def list_languages() -> tuple[LanguageInfo, ...]:
    return get_default_registry().languages


__all__ = [
    "LanguageEntry",
    "LanguageRegistry",
    "TableFactory",
    "find_language_by_filename",
    "find_language_by_mimetype",
    "get_default_registry",
    "get_language_info",
    "get_rule_table",
    "list_languages",
    "register_language",
]
