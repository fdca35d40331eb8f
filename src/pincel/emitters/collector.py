"""In-memory emitter that records every token it receives.

Thread Safety:
TokenCollector instances are local to one run. Not thread-safe.

"""

from __future__ import annotations

from pincel.tokens import TokenKind


class TokenCollector:
    """Collects (kind, value) pairs in emission order.

    Usage:
            >>> collector = TokenCollector()
            >>> lex("int x;", collector)
            >>> collector.text()
            'int x;'

    """

    __slots__ = ("_pairs",)

    def __init__(self) -> None:
        self._pairs: list[tuple[TokenKind, str]] = []

    def emit(self, kind: TokenKind, value: str) -> None:
        self._pairs.append((kind, value))

    @property
    def pairs(self) -> list[tuple[TokenKind, str]]:
        """Recorded (kind, value) pairs (a copy)."""
        return list(self._pairs)

    def kinds(self) -> list[TokenKind]:
        return [kind for kind, _ in self._pairs]

    def values(self) -> list[str]:
        return [value for _, value in self._pairs]

    def text(self) -> str:
        """Concatenate every literal; equals the scanned source after a full run."""
        return "".join(value for _, value in self._pairs)

    def clear(self) -> None:
        self._pairs.clear()

    def __len__(self) -> int:
        return len(self._pairs)
