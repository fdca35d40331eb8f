"""Emitter protocol — the sink that receives tokens from a run.

Any object with ``emit(kind, value)`` conforms. Emitters receive tokens in
strict left-to-right order, including tokens produced by delegated runs.

An emitter may raise to stop the scan: the exception aborts the run
immediately and propagates unchanged to the caller of ``Lexer.run``.
Tokens already emitted are not retracted.

Example:
    from pincel.emitters.protocol import Emitter

    class Printer:
        def emit(self, kind: TokenKind, value: str) -> None:
            print(kind.value, repr(value))

"""

from typing import Protocol, runtime_checkable

from pincel.tokens import TokenKind


@runtime_checkable
class Emitter(Protocol):
    """Protocol for token sinks."""

    def emit(self, kind: TokenKind, value: str) -> None:
        """Receive one token.

        Args:
            kind: Token kind
            value: Literal source text of the token

        """
        ...
