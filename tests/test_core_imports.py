"""Verify core module imports work correctly."""

from __future__ import annotations


def test_import_location() -> None:
    """Test SourceLocation import and instantiation."""
    from pincel.location import SourceLocation

    loc = SourceLocation(lineno=1, col_offset=1)
    assert loc.lineno == 1
    assert loc.col_offset == 1
    assert str(loc) == "1:1"


def test_import_tokens() -> None:
    """Test Token and TokenKind imports."""
    from pincel.tokens import Token, TokenKind

    tok = Token(TokenKind.KEYWORD_TYPE, "int", 4)
    assert tok.kind is TokenKind.KEYWORD_TYPE
    assert tok.value == "int"
    assert tok.offset == 4
    assert tok.end == 7


def test_import_actions() -> None:
    from pincel.lexer.actions import Composite, Delegate, Emit, Pop, Push
    from pincel.tokens import TokenKind

    action = Composite((Push("x"), Emit(TokenKind.TEXT), Pop(), Delegate("java", 1)))
    assert len(action.actions) == 4


def test_import_lexer() -> None:
    """Test Lexer import and a minimal run."""
    from pincel.languages import get_rule_table
    from pincel.lexer import Lexer

    lexer = Lexer("x", get_rule_table("text"))
    assert [t.value for t in lexer.tokenize()] == ["x"]
    assert lexer.at_end


def test_import_registry() -> None:
    from pincel.languages.registry import LanguageRegistry, get_default_registry

    assert isinstance(get_default_registry(), LanguageRegistry)


def test_import_emitters() -> None:
    from pincel.emitters import DebugEmitter, Emitter, TokenCollector

    assert isinstance(TokenCollector(), Emitter)
    assert isinstance(DebugEmitter(), Emitter)
