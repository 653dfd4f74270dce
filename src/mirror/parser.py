"""Parser for the Mirror DSL.

Recursive descent over the token strings produced by the lexer. A program
is a flat sequence of statements:

    signature name(param: type, ...) -> type
    example name(literal, ...) = literal
    name(argument, ...)

Parsing is fail-fast: the first grammar violation raises
``MirrorSyntaxError`` and no partial program is returned.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn

from mirror.ast_nodes import (
    Argument,
    BooleanLit,
    DictLit,
    DictType,
    Example,
    Expression,
    ListLit,
    ListType,
    Literal,
    NumberLit,
    Parameter,
    PrimitiveType,
    Program,
    Signature,
    Statement,
    StringLit,
    TypeExpr,
)
from mirror.errors import NESTING_TOO_DEEP, SYNTAX_ERROR, MirrorSyntaxError
from mirror.lexer import Lexer
from mirror.source import SourceText, Span
from mirror.tokens import (
    ARROW,
    BOOLEANS,
    DICT_TYPE,
    EXAMPLE,
    LIST_TYPE,
    PRIMITIVE_TYPES,
    SIGNATURE,
    STATEMENT_KEYWORDS,
    is_call_name,
    is_identifier,
    is_number,
    is_string,
)

# Nested calls, lists, dicts and types all count towards this limit.
DEFAULT_MAX_DEPTH = 200
# Each nesting level costs up to two Python frames; stay clear of the
# interpreter's default recursion limit of 1000.
MAX_DEPTH_CEILING = 300


class Parser:
    """Parses Mirror source text into a program. One instance per input."""

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        check_max_depth(max_depth)
        lexer = Lexer(source, filename)
        self.tokens = lexer.lex()
        self._offsets = lexer.offsets
        self._source = SourceText(source, filename)
        self.filename = filename
        self.max_depth = max_depth
        self.current = 0
        self._depth = 0
        self._used = False

    # ── Top-level parsing ────────────────────────────────────────

    def parse(self) -> Program:
        """Parse every statement in the input, in source order."""
        if self._used:
            raise RuntimeError("Parser instances are single-use; create a new one per input")
        self._used = True

        program: list[Statement] = []
        try:
            while not self._is_at_end():
                stmt = self._parse_statement()
                if stmt is not None:
                    program.append(stmt)
        except RecursionError:
            # The caller's own stack was already deep.
            self._nesting_error()
        return tuple(program)

    def _parse_statement(self) -> Statement | None:
        if self._match(SIGNATURE):
            return self._parse_signature()
        if self._match(EXAMPLE):
            return self._parse_example()
        if self._peek_identifier() and self._peek() not in STATEMENT_KEYWORDS:
            return self._parse_expression()
        self._error(f"Unexpected token: {self._found()}")

    # ── Signatures ───────────────────────────────────────────────

    def _parse_signature(self) -> Signature:
        name = self._consume_identifier()
        self._consume("(")
        parameters = self._parse_parameters()
        self._consume(")")
        self._consume(ARROW)
        return_type = self._parse_type()
        return Signature(name, parameters, return_type)

    def _parse_parameters(self) -> tuple[Parameter, ...]:
        parameters: list[Parameter] = []
        if self._check(")"):
            return ()
        while True:
            name = self._consume_identifier()
            self._consume(":")
            parameters.append(Parameter(name, self._parse_type()))
            if not self._match(","):
                break
        return tuple(parameters)

    # ── Type expressions ─────────────────────────────────────────

    def _parse_type(self) -> TypeExpr:
        """Parse ``string``, ``number``, ``bool``, ``list[T]`` or ``dict[K, V]``."""
        with self._nested():
            if self._match(*PRIMITIVE_TYPES):
                return PrimitiveType(self._previous())
            if self._match(LIST_TYPE):
                self._consume("[")
                inner = self._parse_type()
                self._consume("]")
                return ListType(inner)
            if self._match(DICT_TYPE):
                self._consume("[")
                key = self._parse_type()
                self._consume(",")
                value = self._parse_type()
                self._consume("]")
                return DictType(key, value)
            self._error(f"Unexpected type: {self._found()}")

    # ── Examples ─────────────────────────────────────────────────

    def _parse_example(self) -> Example:
        name = self._consume_identifier()
        self._consume("(")
        arguments = self._parse_literals(")")
        self._consume(")")
        self._consume("=")
        result = self._parse_literal()
        return Example(name, arguments, result)

    # ── Literals ─────────────────────────────────────────────────

    def _parse_literals(self, closing: str) -> tuple[Literal, ...]:
        """Comma-separated literals, possibly none, up to ``closing``."""
        if self._check(closing):
            return ()
        literals = [self._parse_literal()]
        while self._match(","):
            literals.append(self._parse_literal())
        return tuple(literals)

    def _parse_literal(self) -> Literal:
        with self._nested():
            if self._match(*BOOLEANS):
                return BooleanLit(BOOLEANS[self._previous()])
            token = self._peek()
            if is_number(token) and math.isinf(float(token)):
                self._error(f"Number out of range: '{_abbreviate(token)}'")
            if self._match_number():
                return NumberLit(float(self._previous()))
            if self._match_string():
                return StringLit(self._previous())
            if self._match("["):
                items = self._parse_literals("]")
                self._consume("]")
                return ListLit(items)
            if self._match("{"):
                key = self._parse_literal()
                self._consume(":")
                value = self._parse_literal()
                self._consume("}")
                return DictLit(key, value)
            self._error(f"Unexpected literal: {self._found()}")

    # ── Expressions ──────────────────────────────────────────────

    def _parse_expression(self) -> Expression:
        with self._nested():
            name = self._consume_identifier()
            self._consume("(")
            arguments = self._parse_mix()
            self._consume(")")
            return Expression(name, arguments)

    def _parse_mix(self) -> tuple[Argument, ...]:
        """Call arguments: nested calls and literals, possibly none."""
        if self._check(")"):
            return ()
        arguments: list[Argument] = []
        while True:
            if is_call_name(self._peek()):
                arguments.append(self._parse_expression())
            else:
                arguments.append(self._parse_literal())
            if not self._match(","):
                break
        return tuple(arguments)

    # ── Token access ─────────────────────────────────────────────

    def _peek(self) -> str | None:
        if self._is_at_end():
            return None
        return self.tokens[self.current]

    def _previous(self) -> str:
        return self.tokens[self.current - 1]

    def _advance(self) -> str:
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self.current >= len(self.tokens)

    def _check(self, expected: str) -> bool:
        if self._is_at_end():
            return False
        return self._peek() == expected

    def _match(self, *expected: str) -> bool:
        for candidate in expected:
            if self._check(candidate):
                self._advance()
                return True
        return False

    def _match_number(self) -> bool:
        if is_number(self._peek()):
            self._advance()
            return True
        return False

    def _match_string(self) -> bool:
        if is_string(self._peek()):
            self._advance()
            return True
        return False

    def _consume(self, expected: str) -> str:
        if self._check(expected):
            return self._advance()
        self._error(f"Expected '{expected}', but got {self._found()}")

    def _peek_identifier(self) -> bool:
        return is_identifier(self._peek())

    def _consume_identifier(self) -> str:
        if self._peek_identifier():
            return self._advance()
        self._error(f"Expected identifier, but got {self._found()}")

    # ── Errors ───────────────────────────────────────────────────

    @contextmanager
    def _nested(self) -> Iterator[None]:
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                self._nesting_error()
            yield
        finally:
            self._depth -= 1

    def _found(self) -> str:
        token = self._peek()
        if token is None:
            return "end of input"
        return f"'{token}'"

    def _current_span(self) -> Span:
        if self._is_at_end():
            return self._source.end_span()
        return self._source.span(self._offsets[self.current], len(self.tokens[self.current]))

    def _error(
        self, message: str, *, code: str = SYNTAX_ERROR, notes: list[str] | None = None,
    ) -> NoReturn:
        raise MirrorSyntaxError(message, self._current_span(), code, notes=notes)

    def _nesting_error(self) -> NoReturn:
        self._error(
            f"Nesting too deep: exceeds maximum depth of {self.max_depth}",
            code=NESTING_TOO_DEEP,
            notes=[
                f"the limit is {self.max_depth}; raise [parser] max_depth"
                f" in mirror.toml (at most {MAX_DEPTH_CEILING})"
            ],
        )


def check_max_depth(max_depth: int) -> None:
    """Raise ValueError unless 1 <= max_depth <= MAX_DEPTH_CEILING."""
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        raise ValueError(f"max_depth must be an integer, got {max_depth!r}")
    if not 1 <= max_depth <= MAX_DEPTH_CEILING:
        raise ValueError(
            f"max_depth must be between 1 and {MAX_DEPTH_CEILING}, got {max_depth}"
        )


def _abbreviate(token: str, limit: int = 20) -> str:
    return token if len(token) <= limit else token[:limit] + "…"


def parse(source: str, filename: str = "<input>", *, max_depth: int = DEFAULT_MAX_DEPTH) -> Program:
    """Parse Mirror source text into a program."""
    return Parser(source, filename, max_depth=max_depth).parse()
