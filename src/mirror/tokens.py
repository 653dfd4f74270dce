"""Token patterns, reserved words and token classification for Mirror.

Tokens are plain strings. Nothing is tagged at lex time; the parser asks
these predicates what a token is at the point where it consumes it.
"""

from __future__ import annotations

import re

# Alternatives are tried left to right. Decimal numbers come first so that
# ``3.0`` stays a single token instead of ``3`` ``.`` ``0``.
TOKEN_PATTERN = re.compile(
    r"""
      \d+\.\d+                  # decimal number
    | \w+                       # identifier, keyword or integer run
    | ->                        # arrow
    | [.,:()\[\]{}]             # punctuation
    | "(?:\\"|[^"])*"           # double-quoted string, \" escapes
    | \d+                       # bare number
    | \S                        # any other single character
    """,
    re.VERBOSE | re.ASCII,
)

_IDENTIFIER = re.compile(r"[a-zA-Z_]\w*", re.ASCII)
_NUMBER = re.compile(r"\d+(?:\.\d+)?", re.ASCII)
_STRING = re.compile(r'"(?:\\"|[^"])*"', re.DOTALL)

# Statement keywords
SIGNATURE = "signature"
EXAMPLE = "example"

ARROW = "->"

PRIMITIVE_TYPES: frozenset[str] = frozenset({"string", "number", "bool"})
LIST_TYPE = "list"
DICT_TYPE = "dict"

BOOLEANS: dict[str, bool] = {"true": True, "false": False}

STATEMENT_KEYWORDS: frozenset[str] = frozenset({SIGNATURE, EXAMPLE})

# Words that never name a call nested inside an argument list; a boolean
# there is a literal.
RESERVED: frozenset[str] = STATEMENT_KEYWORDS | frozenset(BOOLEANS)

KEYWORDS: frozenset[str] = (
    STATEMENT_KEYWORDS
    | PRIMITIVE_TYPES
    | frozenset({LIST_TYPE, DICT_TYPE})
    | frozenset(BOOLEANS)
)


def is_identifier(token: str | None) -> bool:
    return token is not None and _IDENTIFIER.fullmatch(token) is not None


def is_number(token: str | None) -> bool:
    return token is not None and _NUMBER.fullmatch(token) is not None


def is_string(token: str | None) -> bool:
    return token is not None and _STRING.fullmatch(token) is not None


def is_keyword(token: str | None) -> bool:
    return token in KEYWORDS


def is_call_name(token: str | None) -> bool:
    """True if ``token`` starts a nested call rather than a literal argument."""
    return is_identifier(token) and token not in RESERVED
