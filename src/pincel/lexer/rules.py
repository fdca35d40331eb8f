"""Rule tables: the declarative description of a language's lexical grammar.

A rule table maps state names to ordered rules. Each rule pairs a compiled
pattern with a behavior (see ``pincel.lexer.actions``). Within a state the
engine commits to the first rule whose pattern matches at the cursor, so
specific rules must be listed before general ones.

Patterns are compiled exactly once, when the table is built. A malformed
pattern, a push to an unknown state, or a missing root state raises
RuleTableError at build time; a table that built successfully never fails
for structural reasons during a scan.

Matching is always anchored: ``pattern.match(source, pos)``. Tables are
compiled with ``re.MULTILINE`` by default, so ``^`` holds only when the
cursor sits at a line start and ``$`` matches before a newline. Use
``(?s:...)`` for spans that must cross newlines.

Thread Safety:
RuleTable is immutable after creation. Safe to share.
Use RuleTableBuilder for mutable construction.

Example:
    >>> builder = RuleTableBuilder(LanguageInfo(name="Demo", aliases=("demo",)))
    >>> builder.state(ROOT, [(" +", Emit(TokenKind.TEXT)), ("[a-z]+", Emit(TokenKind.NAME))])
    >>> table = builder.build()
    >>> table.rules_for(ROOT)[1].source
    '[a-z]+'
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from pincel.errors import RuleTableError
from pincel.lexer.actions import Action, max_group, pushed_states
from pincel.utils.logger import get_logger

logger = get_logger(__name__)

# Name of the initial state in every table
ROOT = "root"

RuleSpec = tuple[str, Action]


@dataclass(frozen=True, slots=True)
class LanguageInfo:
    """Descriptive metadata for a language.

    Attributes:
        name: Display name ("Java")
        aliases: Lookup names ("java")
        filenames: Filename globs ("*.java")
        mimetypes: MIME types ("text/x-java")
        description: One-line description

    """

    name: str
    aliases: tuple[str, ...] = ()
    filenames: tuple[str, ...] = ()
    mimetypes: tuple[str, ...] = ()
    description: str = ""

    @property
    def key(self) -> str:
        """Canonical lookup key (first alias, else lowercased name)."""
        return self.aliases[0] if self.aliases else self.name.lower()


@dataclass(frozen=True, slots=True)
class Rule:
    """A compiled rule.

    Attributes:
        pattern: Compiled pattern, matched anchored at the cursor
        action: Behavior to run on a match
        source: Pattern source text (for tracing and errors)

    """

    pattern: re.Pattern[str]
    action: Action
    source: str


class RuleTable:
    """Immutable compiled rule table for one language.

    States are scoped to the table: a state name only has meaning inside
    the table that defines it, and delegation always starts a nested run
    at the target table's own root.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_info", "_states", "_root")

    def __init__(
        self,
        info: LanguageInfo,
        states: Mapping[str, tuple[Rule, ...]],
        root: str = ROOT,
    ) -> None:
        """Initialize table with pre-compiled states.

        Use RuleTableBuilder to create instances.
        """
        self._info = info
        self._states = MappingProxyType(dict(states))
        self._root = root

    @property
    def info(self) -> LanguageInfo:
        return self._info

    @property
    def name(self) -> str:
        return self._info.name

    @property
    def root(self) -> str:
        """Name of the initial state."""
        return self._root

    @property
    def states(self) -> frozenset[str]:
        """All state names defined by this table."""
        return frozenset(self._states)

    def has_state(self, state: str) -> bool:
        return state in self._states

    def rules_for(self, state: str) -> tuple[Rule, ...]:
        """Get the ordered rules of a state.

        Raises:
            KeyError: If the state is not defined in this table
        """
        return self._states[state]

    def __repr__(self) -> str:
        return f"RuleTable({self._info.name!r}, states={sorted(self._states)})"


class RuleTableBuilder:
    """Mutable builder for RuleTable.

    Register states with their ordered (pattern, action) pairs, then call
    build() to compile everything into an immutable table.

    Example:
        >>> builder = RuleTableBuilder(info)
        >>> builder.state(ROOT, [...]).state("string", [...])
        >>> table = builder.build()
    """

    __slots__ = ("_info", "_flags", "_root", "_states")

    def __init__(
        self,
        info: LanguageInfo,
        *,
        flags: int = re.MULTILINE,
        root: str = ROOT,
    ) -> None:
        """Initialize empty builder.

        Args:
            info: Metadata of the language being described
            flags: re flags applied to every pattern
            root: Name of the initial state
        """
        self._info = info
        self._flags = flags
        self._root = root
        self._states: dict[str, list[RuleSpec]] = {}

    def state(self, name: str, rules: Iterable[RuleSpec]) -> RuleTableBuilder:
        """Define a state.

        Args:
            name: State name, unique within this table
            rules: Ordered (pattern, action) pairs, highest priority first

        Returns:
            Self for chaining

        Raises:
            RuleTableError: If the state is already defined
        """
        if name in self._states:
            raise RuleTableError(self._info.name, f"state '{name}' already defined", state=name)
        self._states[name] = list(rules)
        return self

    def build(self) -> RuleTable:
        """Compile every pattern and build the immutable table.

        Raises:
            RuleTableError: For malformed patterns, unknown push targets,
                references to groups the pattern lacks, empty states,
                or a missing root state
        """
        language = self._info.name
        if self._root not in self._states:
            raise RuleTableError(language, f"missing root state '{self._root}'")

        compiled: dict[str, tuple[Rule, ...]] = {}
        for state, specs in self._states.items():
            if not specs:
                raise RuleTableError(language, "state has no rules", state=state)
            compiled[state] = tuple(
                self._compile(state, index, source, action)
                for index, (source, action) in enumerate(specs)
            )

        logger.debug(
            "Built %s rule table: %d states, %d rules",
            language,
            len(compiled),
            sum(len(rules) for rules in compiled.values()),
        )
        return RuleTable(self._info, compiled, self._root)

    def _compile(self, state: str, index: int, source: str, action: Action) -> Rule:
        language = self._info.name
        try:
            pattern = re.compile(source, self._flags)
        except re.error as exc:
            raise RuleTableError(
                language, str(exc), state=state, rule_index=index, pattern=source
            ) from exc

        for target in pushed_states(action):
            if target not in self._states:
                raise RuleTableError(
                    language,
                    f"push to unknown state '{target}'",
                    state=state,
                    rule_index=index,
                    pattern=source,
                )

        if max_group(action) > pattern.groups:
            raise RuleTableError(
                language,
                f"action uses group {max_group(action)} but pattern has {pattern.groups}",
                state=state,
                rule_index=index,
                pattern=source,
            )
        return Rule(pattern=pattern, action=action, source=source)


def build_table(
    info: LanguageInfo,
    states: Mapping[str, Sequence[RuleSpec]],
    *,
    flags: int = re.MULTILINE,
    root: str = ROOT,
) -> RuleTable:
    """Build a table from a plain mapping of state name to rules."""
    builder = RuleTableBuilder(info, flags=flags, root=root)
    for name, rules in states.items():
        builder.state(name, rules)
    return builder.build()


__all__ = [
    "ROOT",
    "LanguageInfo",
    "Rule",
    "RuleSpec",
    "RuleTable",
    "RuleTableBuilder",
    "build_table",
]
