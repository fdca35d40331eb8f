"""
Pincel — data-driven regex tokenizer for syntax highlighting.

A language is a declarative rule table: named states, each an ordered list of
(pattern, behavior) rules. The engine matches rules anchored at a moving
cursor, keeps a stack of active states, and lets rules delegate captured text
to nested runs (of another language or the same one). Tokens stream out in
strict left-to-right order and concatenate back to the exact input.

Quick Start:
    >>> from pincel import tokenize
    >>> [(t.kind.value, t.value) for t in tokenize("import java.util.*;")]
    [('Keyword.Namespace', 'import'), ('Text', ' '), ('Name.Namespace', 'java.util.*'), ('Punctuation', ';')]

    >>> # Or stream into any emitter
    >>> from pincel import TokenCollector, lex
    >>> sink = TokenCollector()
    >>> lex("int x = 0x1F;", sink)
    >>> sink.text()
    'int x = 0x1F;'

Custom Languages:
    >>> from pincel import LanguageInfo, RuleTableBuilder, Emit, TokenKind, register_language
    >>> info = LanguageInfo(name="Words", aliases=("words",))
    >>> register_language(info, lambda: RuleTableBuilder(info).state("root", [
    ...     (r"\\w+", Emit(TokenKind.NAME)), (r"\\W+", Emit(TokenKind.TEXT))]).build())

"""

from collections.abc import Iterator
from typing import TextIO

from pincel.config import (
    LexConfig,
    StallPolicy,
    get_lex_config,
    lex_config_context,
    reset_lex_config,
    set_lex_config,
)
from pincel.emitters import DebugEmitter, Emitter, TokenCollector
from pincel.errors import (
    DelegationDepthError,
    LexerStallError,
    PincelError,
    RuleTableError,
    StateStackError,
    UnknownLanguageError,
)
from pincel.languages import (
    LanguageRegistry,
    find_language_by_filename,
    find_language_by_mimetype,
    get_default_registry,
    get_language_info,
    get_rule_table,
    list_languages,
    register_language,
)
from pincel.lexer import (
    ROOT,
    Composite,
    Delegate,
    Emit,
    EmitAndPop,
    EmitAndPush,
    LanguageInfo,
    Lexer,
    Pop,
    Push,
    RuleTable,
    RuleTableBuilder,
    ScanContext,
    build_table,
    by_groups,
)
from pincel.location import SourceLocation
from pincel.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan
from pincel.tokens import Token, TokenKind

__version__ = "0.1.0"


def get_lexer(
    source: str | TextIO,
    language: str = "java",
    *,
    config: LexConfig | None = None,
    registry: LanguageRegistry | None = None,
) -> Lexer:
    """Create a Lexer for source using a registered language's table.

    Args:
        source: Source text or a readable text stream
        language: Language name or alias
        config: Lexer configuration (defaults to the context config)
        registry: Language registry (defaults to the built-in registry)

    Raises:
        UnknownLanguageError: If the language is not registered
        RuleTableError: If the language's table fails to build
    """
    if registry is None:
        registry = get_default_registry()
    return Lexer(source, registry.get_table(language), config=config, registry=registry)


def tokenize(
    source: str | TextIO,
    language: str = "java",
    *,
    config: LexConfig | None = None,
    registry: LanguageRegistry | None = None,
) -> Iterator[Token]:
    """Tokenize source, yielding tokens left to right.

    Example:
        >>> [t.value for t in tokenize(".length")]
        ['.', 'length']
    """
    return get_lexer(source, language, config=config, registry=registry).tokenize()


def lex(
    source: str | TextIO,
    emitter: Emitter,
    language: str = "java",
    *,
    config: LexConfig | None = None,
    registry: LanguageRegistry | None = None,
) -> None:
    """Tokenize source and send every token to ``emitter``.

    Raises:
        LexerStallError: No rule matched (strict stall policy)
        Exception: Whatever the emitter raised, unchanged
    """
    get_lexer(source, language, config=config, registry=registry).run(emitter)


__all__ = [
    "ROOT",
    "Composite",
    "DebugEmitter",
    "Delegate",
    "DelegationDepthError",
    "Emit",
    "EmitAndPop",
    "EmitAndPush",
    "Emitter",
    "LanguageInfo",
    "LanguageRegistry",
    "LexConfig",
    "Lexer",
    "LexerStallError",
    "PincelError",
    "Pop",
    "Push",
    "RuleTable",
    "RuleTableBuilder",
    "RuleTableError",
    "ScanAccumulator",
    "ScanContext",
    "SourceLocation",
    "StallPolicy",
    "StateStackError",
    "Token",
    "TokenCollector",
    "TokenKind",
    "UnknownLanguageError",
    "__version__",
    "build_table",
    "by_groups",
    "find_language_by_filename",
    "find_language_by_mimetype",
    "get_default_registry",
    "get_language_info",
    "get_lex_config",
    "get_lexer",
    "get_rule_table",
    "get_scan_accumulator",
    "lex",
    "lex_config_context",
    "list_languages",
    "profiled_scan",
    "register_language",
    "reset_lex_config",
    "set_lex_config",
    "tokenize",
]
