"""Derived views over a parsed Mirror program.

Both helpers are pure: they read the program and build new sequences,
leaving the AST untouched. Views are rebuilt on every call.
"""

from __future__ import annotations

from collections.abc import Iterable

from mirror.ast_nodes import (
    Example,
    Expression,
    Signature,
    SignatureWithExamples,
    Statement,
)


def extract_expressions(program: Iterable[Statement]) -> list[Expression]:
    """Return every top-level expression statement, in source order."""
    return [stmt for stmt in program if isinstance(stmt, Expression)]


def group_signatures_with_examples(
    program: Iterable[Statement],
) -> list[SignatureWithExamples]:
    """Attach to each signature the examples whose name matches it exactly.

    Signatures keep source order, and so do the examples attached to each.
    A signature without examples gets an empty tuple. Signatures sharing a
    name each receive the same examples.
    """
    statements = list(program)
    signatures = [stmt for stmt in statements if isinstance(stmt, Signature)]
    examples = [stmt for stmt in statements if isinstance(stmt, Example)]

    return [
        SignatureWithExamples(
            name=sig.name,
            parameters=sig.parameters,
            return_type=sig.return_type,
            examples=tuple(ex for ex in examples if ex.name == sig.name),
        )
        for sig in signatures
    ]
