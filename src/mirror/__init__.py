"""Mirror: a small DSL for function signatures, examples and call expressions."""

from __future__ import annotations

from mirror.analysis import extract_expressions, group_signatures_with_examples
from mirror.errors import CompileError, MirrorSyntaxError
from mirror.lexer import tokenize
from mirror.parser import Parser, parse

__version__ = "0.1.0"

__all__ = [
    "CompileError",
    "MirrorSyntaxError",
    "Parser",
    "__version__",
    "extract_expressions",
    "group_signatures_with_examples",
    "parse",
    "tokenize",
]
