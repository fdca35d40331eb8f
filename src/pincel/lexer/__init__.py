"""Table-driven regex lexer for Pincel.

Architecture:
lexer/
├── __init__.py          # Re-exports
├── core.py              # Lexer: cursor, state stack, rule selection, delegation
├── context.py           # ScanContext handed to one rule invocation
├── actions.py           # Behavior combinators (Emit, EmitAndPush, Delegate, ...)
└── rules.py             # LanguageInfo, Rule, RuleTable, RuleTableBuilder

Usage:
    >>> from pincel.languages import get_rule_table
    >>> from pincel.lexer import Lexer
    >>> for token in Lexer(".length", get_rule_table("java")).tokenize():
    ...     print(token)
Token(Operator, '.', @0)
Token(Name.Attribute, 'length', @1)

"""

from pincel.lexer.actions import (
    Action,
    Composite,
    Delegate,
    Emit,
    EmitAndPop,
    EmitAndPush,
    Pop,
    Push,
    by_groups,
)
from pincel.lexer.context import ScanContext
from pincel.lexer.core import Lexer
from pincel.lexer.rules import (
    ROOT,
    LanguageInfo,
    Rule,
    RuleTable,
    RuleTableBuilder,
    build_table,
)

__all__ = [
    "ROOT",
    "Action",
    "Composite",
    "Delegate",
    "Emit",
    "EmitAndPop",
    "EmitAndPush",
    "LanguageInfo",
    "Lexer",
    "Pop",
    "Push",
    "Rule",
    "RuleTable",
    "RuleTableBuilder",
    "ScanContext",
    "build_table",
    "by_groups",
]
