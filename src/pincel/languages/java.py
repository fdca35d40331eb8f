"""Java rule table.

States:
- root: everything outside the one-shot states below
- class_name: entered on ``class``/``interface``; skips whitespace, emits one
  identifier as Name.Class, then pops
- import_path: entered on ``import``; skips whitespace, emits one dotted path
  (optional trailing ``*``) as Name.Namespace, then pops

Rule order in root is significant. The method-signature rule comes first
because it covers input the simpler rules would otherwise claim: it hands the
run of modifier/type words back to a fresh Java lexer, then emits the method
name and the opening parenthesis itself. Fixed vocabularies come before the
generic identifier rule.

The method-signature rule is tried at every word, so its modifier/type run is
capped at MAX_SIGNATURE_WORDS words. Each attempt then looks a bounded
distance ahead and long runs of bare words scan in linear time. A signature
with more leading words still matches: the extra words go through the other
root rules first and classify the same way.
"""

from __future__ import annotations

from pincel.lexer.actions import (
    Composite,
    Delegate,
    Emit,
    EmitAndPop,
    EmitAndPush,
    by_groups,
)
from pincel.lexer.rules import ROOT, LanguageInfo, RuleTable, RuleTableBuilder
from pincel.tokens import TokenKind

JAVA_INFO = LanguageInfo(
    name="Java",
    aliases=("java",),
    filenames=("*.java",),
    mimetypes=("text/x-java",),
    description="The Java programming language (java.com)",
)

CLASS_NAME = "class_name"
IMPORT_PATH = "import_path"

KEYWORDS = (
    "assert", "break", "case", "catch", "continue", "default", "do", "else",
    "finally", "for", "if", "goto", "instanceof", "new", "return", "switch",
    "this", "throw", "try", "while",
)  # fmt: skip

DECLARATIONS = (
    "abstract", "const", "enum", "extends", "final", "implements", "native",
    "private", "protected", "public", "static", "strictfp", "super",
    "synchronized", "throws", "transient", "volatile",
)  # fmt: skip

TYPES = (
    "boolean", "byte", "char", "double", "float", "int", "long", "short",
    "void",
)  # fmt: skip

SPACES = r"(?s:\s+)"
IDENT = r"[a-zA-Z_][a-zA-Z0-9_]*"


def _words(words: tuple[str, ...]) -> str:
    return "(?:" + "|".join(words) + r")\b"


# Reserved words never name a method ("else if (" is not a call to "if")
_NOT_RESERVED = "(?!" + _words(KEYWORDS + DECLARATIONS + TYPES) + ")"

# Longest modifier/type run a signature may carry before the method name
MAX_SIGNATURE_WORDS = 8

METHOD_SIGNATURE = (
    r"(\s*(?:[A-Za-z_][0-9A-Za-z_.\[\]]*\s+){1,%d}?)" % MAX_SIGNATURE_WORDS  # modifiers and return type
    + _NOT_RESERVED
    + r"([A-Za-z_][0-9A-Za-z_]*)"  # method name
    + r"(\s*)(\()"
)


def build_java_table() -> RuleTable:
    """Compile the Java rule table."""
    builder = RuleTableBuilder(JAVA_INFO)
    builder.state(
        ROOT,
        [
            (
                METHOD_SIGNATURE,
                Composite(
                    (
                        Delegate("java", 1),
                        Emit(TokenKind.NAME_FUNCTION, 2),
                        Emit(TokenKind.TEXT, 3),
                        Emit(TokenKind.PUNCTUATION, 4),
                    )
                ),
            ),
            (r"\s+", Emit(TokenKind.TEXT)),
            (r"//.*?$", Emit(TokenKind.COMMENT_SINGLE)),
            (r"(?s:/\*.*?\*/)", Emit(TokenKind.COMMENT_MULTILINE)),
            ("@" + IDENT, Emit(TokenKind.NAME_DECORATOR)),
            (_words(KEYWORDS), Emit(TokenKind.KEYWORD)),
            (_words(DECLARATIONS), Emit(TokenKind.KEYWORD_DECLARATION)),
            (_words(TYPES), Emit(TokenKind.KEYWORD_TYPE)),
            (r"package\b", Emit(TokenKind.KEYWORD_NAMESPACE)),
            (r"(?:true|false|null)\b", Emit(TokenKind.KEYWORD_CONSTANT)),
            (
                r"(?:class|interface)\b",
                EmitAndPush(TokenKind.KEYWORD_DECLARATION, CLASS_NAME),
            ),
            (r"import\b", EmitAndPush(TokenKind.KEYWORD_NAMESPACE, IMPORT_PATH)),
            (r'"(?:\\.|[^"\\])*"', Emit(TokenKind.LITERAL_STRING)),
            (r"'(?:\\u[0-9a-fA-F]{4}|\\.|[^\\'])'", Emit(TokenKind.LITERAL_STRING_CHAR)),
            (r"(\.)(" + IDENT + ")", by_groups(TokenKind.OPERATOR, TokenKind.NAME_ATTRIBUTE)),
            (IDENT + ":", Emit(TokenKind.NAME_LABEL)),
            (r"\$?" + IDENT, Emit(TokenKind.NAME)),
            (
                r"([(){}\[\];,])|([~^*%&<>|+=:./?!-])",
                by_groups(TokenKind.PUNCTUATION, TokenKind.OPERATOR),
            ),
            (r"[0-9][0-9]*\.[0-9]+(?:[eE][0-9]+)?[fd]?", Emit(TokenKind.LITERAL_NUMBER)),
            (r"0x[0-9a-fA-F]+", Emit(TokenKind.LITERAL_NUMBER_HEX)),
            (r"[0-9]+L?", Emit(TokenKind.LITERAL_NUMBER_INTEGER)),
        ],
    )
    builder.state(
        CLASS_NAME,
        [
            (SPACES, Emit(TokenKind.TEXT)),
            (IDENT, EmitAndPop(TokenKind.NAME_CLASS)),
        ],
    )
    builder.state(
        IMPORT_PATH,
        [
            (SPACES, Emit(TokenKind.TEXT)),
            (r"[a-zA-Z0-9_.]+\*?", EmitAndPop(TokenKind.NAME_NAMESPACE)),
        ],
    )
    return builder.build()
