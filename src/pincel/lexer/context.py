"""Per-match capability handed to rule behaviors.

A ScanContext lives for exactly one rule invocation. It exposes the match's
capture groups and the operations a behavior may perform: build a token,
delegate a group to a nested lexer run, push or pop a state. It must not be
retained after the behavior finishes.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TYPE_CHECKING

from pincel.tokens import Token, TokenKind

if TYPE_CHECKING:
    from pincel.lexer.core import Lexer


class ScanContext:
    """Capabilities available to one rule invocation."""

    __slots__ = ("_lexer", "_match")

    def __init__(self, lexer: Lexer, match: re.Match[str]) -> None:
        self._lexer = lexer
        self._match = match

    @property
    def match(self) -> re.Match[str]:
        return self._match

    def group(self, index: int = 0) -> str | None:
        """Text of a capture group, or None if the group did not take part."""
        return self._match.group(index)

    def token(self, kind: TokenKind, group: int = 0) -> Token | None:
        """Build a token for a capture group.

        Returns:
            Token with an absolute offset, or None for an unmatched
            or empty group
        """
        text = self._match.group(group)
        if not text:
            return None
        return Token(kind, text, self._lexer.offset + self._match.start(group))

    def delegate(self, language: str, group: int = 0) -> Iterator[Token]:
        """Scan a capture group with a fresh lexer for ``language``.

        Yields:
            Every token of the nested run, in order
        """
        text = self._match.group(group)
        if not text:
            return iter(())
        return self._lexer.delegate(language, text, self._match.start(group))

    def push(self, state: str) -> None:
        self._lexer.push_state(state)

    def pop(self) -> None:
        self._lexer.pop_state()
