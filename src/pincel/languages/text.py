"""Plain text rule table: the whole input is one Text token."""

from __future__ import annotations

from pincel.lexer.actions import Emit
from pincel.lexer.rules import ROOT, LanguageInfo, RuleTable, RuleTableBuilder
from pincel.tokens import TokenKind

TEXT_INFO = LanguageInfo(
    name="Text",
    aliases=("text", "plain"),
    filenames=("*.txt",),
    mimetypes=("text/plain",),
    description="Plain text, emitted unchanged",
)


def build_text_table() -> RuleTable:
    """Compile the plain text rule table."""
    return RuleTableBuilder(TEXT_INFO).state(ROOT, [(r"(?s:.+)", Emit(TokenKind.TEXT))]).build()
