"""Exception classes for Pincel.

Provides standardized exceptions for error handling throughout Pincel.

Build-time errors (RuleTableError) are raised while a rule table is
compiled and mean the table must never run. Scan-time errors
(LexerStallError, DelegationDepthError, StateStackError) abort the
current run. Exceptions raised by an emitter are never wrapped.
"""

from __future__ import annotations

from pincel.location import SourceLocation


class PincelError(Exception):
    """Base exception for all Pincel errors.

    Subclass this for specific error categories.
    """

    pass


class RuleTableError(PincelError):
    """Error while building a rule table.

    Raised for malformed patterns, push targets naming unknown states,
    and tables without their root state.
    """

    def __init__(
        self,
        language: str,
        message: str,
        state: str | None = None,
        rule_index: int | None = None,
        pattern: str | None = None,
    ) -> None:
        """Initialize rule table error.

        Args:
            language: Name of the language whose table failed to build
            message: Description of the problem
            state: State holding the offending rule (optional)
            rule_index: Position of the rule within its state (optional)
            pattern: Offending pattern source (optional)
        """
        self.language = language
        self.state = state
        self.rule_index = rule_index
        self.pattern = pattern

        where = language
        if state is not None:
            where += f"[{state}]"
            if rule_index is not None:
                where += f"#{rule_index}"
        detail = f" (pattern {pattern!r})" if pattern is not None else ""
        super().__init__(f"{where}: {message}{detail}")


class LexerStallError(PincelError):
    """No rule of the active state matched at the cursor.

    Raised under the strict stall policy. The run is not resumable.
    """

    def __init__(
        self,
        language: str,
        state: str,
        location: SourceLocation,
        excerpt: str = "",
    ) -> None:
        """Initialize stall error.

        Args:
            language: Language being scanned
            state: Active state when the stall happened
            location: Position of the cursor
            excerpt: A few characters of input at the cursor
        """
        self.language = language
        self.state = state
        self.location = location
        self.excerpt = excerpt

        super().__init__(
            f"{location} no {language} rule in state '{state}' matches {excerpt!r}"
        )

    @property
    def offset(self) -> int:
        """Absolute offset of the cursor."""
        return self.location.offset


class DelegationDepthError(PincelError):
    """Delegated runs nested deeper than the configured limit."""

    def __init__(self, language: str, depth: int, limit: int) -> None:
        self.language = language
        self.depth = depth
        self.limit = limit
        super().__init__(
            f"Delegation to '{language}' at depth {depth} exceeds limit {limit}"
        )


class StateStackError(PincelError):
    """A rule tried to pop the root state off the state stack."""

    def __init__(self, language: str, state: str) -> None:
        self.language = language
        self.state = state
        super().__init__(f"{language}: cannot pop root state '{state}'")


class UnknownLanguageError(PincelError, LookupError):
    """No registered language matches the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown language '{name}'")
