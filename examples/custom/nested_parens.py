"""Custom language — a table that delegates to itself for nested parentheses.

Each match covers one group whose body may hold sibling groups one level
deep ("(a (b) c (d))"); the body is handed back to the same table, which
unwraps the next level. Groups nested deeper than two levels in a single
body stall.
"""

from pincel import (
    Composite,
    Delegate,
    Emit,
    LanguageInfo,
    TokenCollector,
    TokenKind,
    build_table,
    lex,
    register_language,
)

PARENS = LanguageInfo(name="Parens", aliases=("parens",))


def build_parens_table():
    return build_table(
        PARENS,
        {
            "root": [
                (
                    r"(\()((?:[^()]|\([^()]*\))*)(\))",
                    Composite(
                        (
                            Emit(TokenKind.PUNCTUATION, 1),
                            Delegate("parens", 2),
                            Emit(TokenKind.PUNCTUATION, 3),
                        )
                    ),
                ),
                (r"\w+", Emit(TokenKind.NAME)),
                (r"\s+", Emit(TokenKind.TEXT)),
            ],
        },
    )


register_language(PARENS, build_parens_table)

collector = TokenCollector()
lex("f (a (b) c (d))", collector, "parens")
for kind, value in collector.pairs:
    print(f"{kind.value:<12} {value!r}")
