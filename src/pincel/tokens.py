"""Token and TokenKind definitions for the Pincel lexer.

The lexer produces a stream of Token objects that emitters consume.
Each Token has a kind, the literal text it covers, and its source offset.

Kind Taxonomy:
TokenKind values are dotted qualified names ("Keyword.Declaration").
The dots form an open hierarchy: every kind knows its parent, so a
consumer can style ``Keyword.Type`` by falling back to ``Keyword``.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenKind is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Token kinds emitted by rule tables.

    Organized by category:
    - Text and errors
    - Keywords (with type/declaration/constant/namespace specializations)
    - Names (class, function, attribute, namespace, label, decorator)
    - Literals (strings and numbers)
    - Comments, operators, punctuation

    """

    # Plain text and fallback
    TEXT = "Text"
    ERROR = "Error"

    # Keywords
    KEYWORD = "Keyword"
    KEYWORD_CONSTANT = "Keyword.Constant"  # true, false, null
    KEYWORD_DECLARATION = "Keyword.Declaration"  # public, class
    KEYWORD_NAMESPACE = "Keyword.Namespace"  # package, import
    KEYWORD_TYPE = "Keyword.Type"  # int, void

    # Names
    NAME = "Name"
    NAME_ATTRIBUTE = "Name.Attribute"  # .length
    NAME_CLASS = "Name.Class"
    NAME_DECORATOR = "Name.Decorator"  # @Override
    NAME_FUNCTION = "Name.Function"
    NAME_LABEL = "Name.Label"  # outer:
    NAME_NAMESPACE = "Name.Namespace"  # java.util.*

    # Literals
    LITERAL = "Literal"
    LITERAL_STRING = "Literal.String"
    LITERAL_STRING_CHAR = "Literal.String.Char"
    LITERAL_NUMBER = "Literal.Number"
    LITERAL_NUMBER_HEX = "Literal.Number.Hex"
    LITERAL_NUMBER_INTEGER = "Literal.Number.Integer"

    # Comments
    COMMENT = "Comment"
    COMMENT_SINGLE = "Comment.Single"
    COMMENT_MULTILINE = "Comment.Multiline"

    # Operators and punctuation
    OPERATOR = "Operator"
    PUNCTUATION = "Punctuation"

    @property
    def parent(self) -> TokenKind | None:
        """Direct parent kind, or None for a top-level kind.

        Example:
            >>> TokenKind.LITERAL_NUMBER_HEX.parent
            <TokenKind.LITERAL_NUMBER: 'Literal.Number'>
        """
        head, sep, _ = self.value.rpartition(".")
        if not sep:
            return None
        return TokenKind(head)

    @property
    def short_name(self) -> str:
        """Leaf segment of the qualified name ("Declaration")."""
        return self.value.rpartition(".")[2]

    def is_a(self, other: TokenKind) -> bool:
        """Check whether this kind is ``other`` or one of its descendants."""
        return self is other or self.value.startswith(other.value + ".")

    @classmethod
    def from_name(cls, qualified: str) -> TokenKind:
        """Look up a kind by qualified name.

        Raises:
            ValueError: If no kind has that name
        """
        return cls(qualified)


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        kind: The token kind (from TokenKind)
        value: The literal source text
        offset: Absolute start offset in the outermost source (code points)

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    kind: TokenKind
    value: str
    offset: int = 0

    @property
    def end(self) -> int:
        """Offset one past the last character of this token."""
        return self.offset + len(self.value)

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.kind.value}, {val!r}, @{self.offset})"
