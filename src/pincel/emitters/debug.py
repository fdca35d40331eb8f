"""Line-per-token debug emitter.

Writes one ``=== Kind: 'value'`` line per token to a text stream, the
format used when eyeballing a table against real source files.
"""

from __future__ import annotations

import sys
from typing import TextIO

from pincel.tokens import TokenKind


class DebugEmitter:
    """Writes each token as a readable line.

    Example:
        >>> DebugEmitter().emit(TokenKind.KEYWORD, "return")
        === Keyword: 'return'
    """

    __slots__ = ("_stream",)

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize emitter.

        Args:
            stream: Destination (defaults to sys.stdout at emit time)
        """
        self._stream = stream

    def emit(self, kind: TokenKind, value: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(f"=== {kind.value}: {value!r}\n")
