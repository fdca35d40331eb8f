"""Regex-driven state-machine lexer.

The engine holds a cursor and a stack of state names. Each step tries the
rules of the active state (top of the stack) in table order, anchored at the
cursor, and commits to the first rule that matches. The rule's behavior runs,
then the cursor advances by exactly the matched length.

Delegation runs a fresh Lexer over a captured substring (possibly with the
same table) and streams its tokens out before the delegating rule's own
remaining emissions. Nested runs own their cursor and stack; they share only
the immutable rule tables.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; rule tables are immutable and shared.

"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, TextIO

from pincel.config import LexConfig, get_lex_config
from pincel.errors import DelegationDepthError, LexerStallError, StateStackError
from pincel.lexer.actions import (
    Action,
    Composite,
    Delegate,
    Emit,
    EmitAndPop,
    EmitAndPush,
    Pop,
    Push,
)
from pincel.lexer.context import ScanContext
from pincel.lexer.rules import RuleTable
from pincel.location import SourceLocation
from pincel.profiling import get_scan_accumulator
from pincel.tokens import Token, TokenKind
from pincel.utils.logger import get_logger

if TYPE_CHECKING:
    from pincel.emitters.protocol import Emitter
    from pincel.languages.registry import LanguageRegistry

logger = get_logger(__name__)

# Characters of input quoted in stall errors
_EXCERPT_LEN = 20


class Lexer:
    """Table-driven lexer with a state stack and nested delegation.

    Usage:
            >>> lexer = Lexer("class Foo {", get_rule_table("java"))
            >>> for token in lexer.tokenize():
            ...     print(token)
        Token(Keyword.Declaration, 'class', @0)
        Token(Text, ' ', @5)
        Token(Name.Class, 'Foo', @6)
        Token(Text, ' ', @9)
        Token(Punctuation, '{', @10)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.
        All state is instance-local; no shared mutable state.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source)
        "_document",  # Outermost source, for error locations
        "_pos",
        "_stack",
        "_table",
        "_config",
        "_registry",
        "_offset",  # Absolute offset of _source within _document
        "_depth",  # Delegation depth (0 for a top-level run)
    )

    def __init__(
        self,
        source: str | TextIO,
        table: RuleTable,
        *,
        config: LexConfig | None = None,
        registry: LanguageRegistry | None = None,
        offset: int = 0,
        depth: int = 0,
        document: str | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Source text, or a text stream that is read completely
            table: Compiled rule table of the language to scan
            config: Lexer configuration (defaults to the context config)
            registry: Registry used to resolve delegation targets
                (defaults to the built-in registry)
            offset: Absolute offset of source in the outermost document
            depth: Delegation depth of this run
            document: Outermost source text (defaults to source)
        """
        if not isinstance(source, str):
            source = source.read()
        self._source = source
        self._source_len = len(source)
        self._document = document if document is not None else source
        self._pos = 0
        self._table = table
        self._stack: list[str] = [table.root]
        self._config = config if config is not None else get_lex_config()
        self._registry = registry
        self._offset = offset
        self._depth = depth

    @property
    def table(self) -> RuleTable:
        return self._table

    @property
    def config(self) -> LexConfig:
        return self._config

    @property
    def pos(self) -> int:
        """Cursor position within this lexer's source."""
        return self._pos

    @property
    def offset(self) -> int:
        """Absolute offset of this lexer's source in the outermost document."""
        return self._offset

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def stack(self) -> tuple[str, ...]:
        """Snapshot of the state stack, bottom first."""
        return tuple(self._stack)

    @property
    def state(self) -> str:
        """The active state."""
        return self._stack[-1]

    @property
    def at_end(self) -> bool:
        return self._pos >= self._source_len

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into token stream.

        Yields:
            Token objects one at a time, left to right

        Raises:
            LexerStallError: No rule matched (strict stall policy)
            DelegationDepthError: Delegation nested too deeply
            StateStackError: A rule popped the root state (strict policy)
        """
        acc = get_scan_accumulator() if self._depth == 0 else None
        if acc is None:
            while self._pos < self._source_len:
                yield from self.step()
            return

        count = 0
        while self._pos < self._source_len:
            for token in self.step():
                count += 1
                yield token
        acc.record_scan(source_length=self._source_len, token_count=count)

    def step(self) -> Iterator[Token]:
        """Apply one rule at the cursor.

        Tries the active state's rules in order and commits to the first
        non-empty anchored match. The cursor advances by the match length
        once the behavior's tokens (including delegated ones) are drained.

        Yields:
            Tokens emitted by the selected behavior
        """
        if self._pos >= self._source_len:
            return
        state = self._stack[-1]
        pos = self._pos
        for index, rule in enumerate(self._table.rules_for(state)):
            found = rule.pattern.match(self._source, pos)
            if found is None or found.end() == pos:
                continue
            if self._config.trace:
                logger.debug(
                    "%s%s[%s] #%d %r matched %r at %d",
                    "  " * self._depth,
                    self._table.name,
                    state,
                    index,
                    rule.source,
                    found.group(),
                    self._offset + pos,
                )
            yield from self._apply(rule.action, ScanContext(self, found))
            self._pos = found.end()
            return

        yield from self._stall(state)

    def run(self, emitter: Emitter) -> None:
        """Scan the whole source, sending every token to ``emitter``.

        An exception raised by the emitter aborts the scan immediately and
        propagates unchanged. Tokens already emitted are not retracted.
        """
        tokens = self.tokenize()
        try:
            for token in tokens:
                emitter.emit(token.kind, token.value)
        finally:
            tokens.close()

    # =========================================================================
    # Behavior interpretation
    # =========================================================================

    def _apply(self, action: Action, ctx: ScanContext) -> Iterator[Token]:
        match action:
            case Emit(kind=kind, group=group):
                token = ctx.token(kind, group)
                if token is not None:
                    yield token
            case EmitAndPush(kind=kind, state=state):
                token = ctx.token(kind)
                if token is not None:
                    yield token
                ctx.push(state)
            case EmitAndPop(kind=kind):
                token = ctx.token(kind)
                if token is not None:
                    yield token
                ctx.pop()
            case Push(state=state):
                ctx.push(state)
            case Pop():
                ctx.pop()
            case Delegate(language=language, group=group):
                yield from ctx.delegate(language, group)
            case Composite(actions=actions):
                for child in actions:
                    yield from self._apply(child, ctx)
            case _:
                msg = f"Unsupported rule action: {action!r}"
                raise TypeError(msg)

    # =========================================================================
    # State stack
    # =========================================================================

    def push_state(self, state: str) -> None:
        self._stack.append(state)

    def pop_state(self) -> None:
        """Pop the active state.

        The root entry is never removed. Under the strict stall policy a pop
        of the root raises StateStackError; under the lenient policy it is
        ignored with a warning.
        """
        if len(self._stack) > 1:
            self._stack.pop()
            return
        if not self._config.lenient:
            raise StateStackError(self._table.name, self._stack[-1])
        logger.warning(
            "%s: ignored pop of root state '%s' at %d",
            self._table.name,
            self._stack[-1],
            self._offset + self._pos,
        )

    # =========================================================================
    # Delegation and stalls
    # =========================================================================

    def delegate(self, language: str, text: str, start: int) -> Iterator[Token]:
        """Scan ``text`` with a fresh lexer for ``language``.

        Args:
            language: Name or alias of the target language
            text: Captured substring to scan to completion
            start: Position of text within this lexer's source

        Yields:
            Tokens of the nested run, offsets relative to the outermost document
        """
        depth = self._depth + 1
        limit = self._config.max_delegation_depth
        if depth > limit:
            raise DelegationDepthError(language, depth, limit)

        registry = self._registry
        if registry is None:
            # Import here to avoid circular import at module load
            from pincel.languages.registry import get_default_registry

            registry = get_default_registry()

        child = Lexer(
            text,
            registry.get_table(language),
            config=self._config,
            registry=self._registry,
            offset=self._offset + start,
            depth=depth,
            document=self._document,
        )
        acc = get_scan_accumulator()
        if acc is not None:
            acc.record_delegation()
        yield from child.tokenize()

    def _stall(self, state: str) -> Iterator[Token]:
        absolute = self._offset + self._pos
        acc = get_scan_accumulator()
        if acc is not None:
            acc.record_stall()

        if not self._config.lenient:
            raise LexerStallError(
                self._table.name,
                state,
                SourceLocation.from_offset(self._document, absolute),
                excerpt=self._source[self._pos : self._pos + _EXCERPT_LEN],
            )

        char = self._source[self._pos]
        logger.debug(
            "%s[%s]: no rule matches %r at %d, emitting error token",
            self._table.name,
            state,
            char,
            absolute,
        )
        yield Token(TokenKind.ERROR, char, absolute)
        self._pos += 1
