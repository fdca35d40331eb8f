"""Behavior combinators attached to rules.

A behavior says what a matched rule does: emit tokens for capture groups,
delegate a group to a nested lexer run, push or pop a state. Behaviors are
plain frozen dataclasses (a small tagged-variant set), so rule tables stay
data-only and can be inspected and tested without running a scan.

The engine interprets them in ``Lexer._apply``.

Example:
    >>> Composite((Emit(TokenKind.OPERATOR, 1), Emit(TokenKind.NAME_ATTRIBUTE, 2)))
    >>> by_groups(TokenKind.OPERATOR, TokenKind.NAME_ATTRIBUTE)  # same thing

Thread Safety:
All behaviors are immutable and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from pincel.tokens import TokenKind


@dataclass(frozen=True, slots=True)
class Emit:
    """Emit one capture group as a token of ``kind``.

    ``group=0`` emits the whole match. Unmatched or empty groups emit nothing.
    """

    kind: TokenKind
    group: int = 0


@dataclass(frozen=True, slots=True)
class EmitAndPush:
    """Emit the whole match, then push ``state``."""

    kind: TokenKind
    state: str


@dataclass(frozen=True, slots=True)
class EmitAndPop:
    """Emit the whole match, then pop the active state."""

    kind: TokenKind


@dataclass(frozen=True, slots=True)
class Push:
    """Push ``state`` onto the state stack."""

    state: str


@dataclass(frozen=True, slots=True)
class Pop:
    """Pop the active state."""


@dataclass(frozen=True, slots=True)
class Delegate:
    """Scan a capture group with a fresh lexer for ``language``.

    The language may be the one currently running (self-delegation).
    Every token of the nested run is emitted before any action that
    follows this one in a Composite.
    """

    language: str
    group: int = 0


@dataclass(frozen=True, slots=True)
class Composite:
    """Ordered sequence of primitive actions over individual groups."""

    actions: tuple[Action, ...]

    def __post_init__(self) -> None:
        # Accept lists for convenience; store a tuple
        object.__setattr__(self, "actions", tuple(self.actions))


Action = Emit | EmitAndPush | EmitAndPop | Push | Pop | Delegate | Composite


def by_groups(*kinds: TokenKind | None) -> Composite:
    """Emit group ``i + 1`` as ``kinds[i]``; ``None`` skips that group.

    Example:
        >>> by_groups(TokenKind.OPERATOR, None, TokenKind.NAME)
        Composite(actions=(Emit(...OPERATOR..., group=1), Emit(...NAME..., group=3)))
    """
    return Composite(
        tuple(Emit(kind, index) for index, kind in enumerate(kinds, start=1) if kind is not None)
    )


def iter_actions(action: Action) -> Iterator[Action]:
    """Yield every primitive action, flattening nested composites."""
    if isinstance(action, Composite):
        for child in action.actions:
            yield from iter_actions(child)
    else:
        yield action


def pushed_states(action: Action) -> Iterator[str]:
    """Yield the state names an action may push."""
    for primitive in iter_actions(action):
        if isinstance(primitive, (Push, EmitAndPush)):
            yield primitive.state


def max_group(action: Action) -> int:
    """Highest capture group index referenced by an action."""
    groups = [
        primitive.group
        for primitive in iter_actions(action)
        if isinstance(primitive, (Emit, Delegate))
    ]
    return max(groups, default=0)


__all__ = [
    "Action",
    "Composite",
    "Delegate",
    "Emit",
    "EmitAndPop",
    "EmitAndPush",
    "Pop",
    "Push",
    "by_groups",
    "iter_actions",
    "max_group",
    "pushed_states",
]
