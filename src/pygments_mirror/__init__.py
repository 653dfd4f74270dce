"""Pygments lexer for the Mirror signature/example DSL."""

from pygments.lexer import RegexLexer, bygroups, words
from pygments.token import (
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
    Whitespace,
)


class MirrorLexer(RegexLexer):
    """Pygments lexer for the Mirror DSL."""

    name = "Mirror"
    aliases = ["mirror"]
    filenames = ["*.mirror"]
    mimetypes = ["text/x-mirror"]

    tokens = {
        "root": [
            (r"\s+", Whitespace),
            # Statement keyword followed by the name it declares
            (
                r"\b(signature|example)(\s+)([a-zA-Z_]\w*)",
                bygroups(Keyword.Declaration, Whitespace, Name.Function),
            ),
            # Strings with \" escapes
            (r'"', String, "string"),
            # Numbers
            (r"[0-9]+\.[0-9]+", Number.Float),
            (r"[0-9]+", Number.Integer),
            (r"\b(true|false)\b", Keyword.Constant),
            (
                words(("string", "number", "bool", "list", "dict"), prefix=r"\b", suffix=r"\b"),
                Keyword.Type,
            ),
            # Call expressions
            (r"[a-zA-Z_]\w*(?=\s*\()", Name.Function),
            (r"[a-zA-Z_]\w*", Name),
            (r"->", Operator),
            (r"=", Operator),
            (r"[.,:()\[\]{}]", Punctuation),
            (r"\S", Text),
        ],
        "string": [
            (r'\\"', String.Escape),
            (r'[^"\\]+', String),
            (r"\\", String),
            (r'"', String, "#pop"),
        ],
    }
