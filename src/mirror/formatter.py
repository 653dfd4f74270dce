"""AST-walking pretty-printer for Mirror source.

Produces the canonical text of a program: one statement per line, a
single space after commas and colons, spaces around ``->`` and ``=``.
Parsing the output yields the same program again.

Source comments do not exist in the DSL, so nothing is lost.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import Decimal

from mirror.ast_nodes import (
    BooleanLit,
    DictLit,
    DictType,
    Example,
    Expression,
    ListLit,
    ListType,
    NumberLit,
    PrimitiveType,
    Signature,
    SignatureWithExamples,
    Statement,
    StringLit,
)


class MirrorFormatter:
    """Format a parsed Mirror program back to canonical source text."""

    # ── Public API ─────────────────────────────────────────────

    def format(self, program: Iterable[Statement]) -> str:
        """Format a program; the result always ends with a newline."""
        lines = [self.format_statement(stmt) for stmt in program]
        return "\n".join(lines) + "\n" if lines else ""

    def format_statement(self, stmt: object) -> str:
        if isinstance(stmt, (Signature, SignatureWithExamples)):
            return self._format_signature(stmt)
        if isinstance(stmt, Example):
            return self._format_example(stmt)
        if isinstance(stmt, Expression):
            return self._format_expression(stmt)
        raise TypeError(f"not a Mirror statement: {stmt!r}")

    # ── Statements ─────────────────────────────────────────────

    def _format_signature(self, sig: Signature | SignatureWithExamples) -> str:
        params = ", ".join(
            f"{p.name}: {self.format_type(p.type)}" for p in sig.parameters
        )
        return f"signature {sig.name}({params}) -> {self.format_type(sig.return_type)}"

    def _format_example(self, ex: Example) -> str:
        args = ", ".join(self.format_literal(a) for a in ex.arguments)
        return f"example {ex.name}({args}) = {self.format_literal(ex.result)}"

    def _format_expression(self, expr: Expression) -> str:
        args = ", ".join(
            self._format_expression(a) if isinstance(a, Expression) else self.format_literal(a)
            for a in expr.arguments
        )
        return f"{expr.name}({args})"

    # ── Types ──────────────────────────────────────────────────

    def format_type(self, te: object) -> str:
        if isinstance(te, PrimitiveType):
            return te.name
        if isinstance(te, ListType):
            return f"list[{self.format_type(te.inner)}]"
        if isinstance(te, DictType):
            return f"dict[{self.format_type(te.key)}, {self.format_type(te.value)}]"
        raise TypeError(f"not a Mirror type: {te!r}")

    # ── Literals ───────────────────────────────────────────────

    def format_literal(self, lit: object) -> str:
        if isinstance(lit, BooleanLit):
            return "true" if lit.value else "false"
        if isinstance(lit, NumberLit):
            return _format_number(lit.value)
        if isinstance(lit, StringLit):
            return lit.value
        if isinstance(lit, ListLit):
            return "[" + ", ".join(self.format_literal(i) for i in lit.items) + "]"
        if isinstance(lit, DictLit):
            return f"{{{self.format_literal(lit.key)}: {self.format_literal(lit.value)}}}"
        raise TypeError(f"not a Mirror literal: {lit!r}")


def _format_number(value: float) -> str:
    """Positional notation; the grammar has no exponents or signs."""
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"number {value!r} has no Mirror literal form")
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")
