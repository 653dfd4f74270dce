"""Lexer for the Mirror DSL.

Splits source text into an ordered list of token strings with a single
regular-expression scan. Whitespace is dropped; every other character
ends up in some token, so lexing never fails.
"""

from __future__ import annotations

from mirror.tokens import TOKEN_PATTERN


class Lexer:
    """Tokenizes Mirror source text."""

    def __init__(self, source: str, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.tokens: list[str] = []
        # Character offset of each token, parallel to ``tokens``.
        self.offsets: list[int] = []

    def lex(self) -> list[str]:
        """Tokenize the entire source and return the token list."""
        self.tokens = []
        self.offsets = []
        for match in TOKEN_PATTERN.finditer(self.source):
            self.tokens.append(match.group())
            self.offsets.append(match.start())
        return self.tokens


def tokenize(source: str) -> list[str]:
    """Return the token strings of ``source``."""
    return Lexer(source).lex()
