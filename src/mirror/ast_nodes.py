"""AST node definitions for the Mirror DSL."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# ── Type expressions ─────────────────────────────────────────────


@dataclass(frozen=True)
class PrimitiveType:
    name: str  # "string", "number" or "bool"


@dataclass(frozen=True)
class ListType:
    inner: TypeExpr


@dataclass(frozen=True)
class DictType:
    key: TypeExpr
    value: TypeExpr


TypeExpr = Union[PrimitiveType, ListType, DictType]


# ── Literals ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class BooleanLit:
    value: bool


@dataclass(frozen=True)
class NumberLit:
    value: float


@dataclass(frozen=True)
class StringLit:
    value: str  # surrounding quotes included, escapes left as written


@dataclass(frozen=True)
class ListLit:
    items: tuple[Literal, ...]


@dataclass(frozen=True)
class DictLit:
    """A dict literal holds exactly one key/value pair."""

    key: Literal
    value: Literal


Literal = Union[BooleanLit, NumberLit, StringLit, ListLit, DictLit]


# ── Statements ───────────────────────────────────────────────────


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeExpr


@dataclass(frozen=True)
class Signature:
    name: str
    parameters: tuple[Parameter, ...]
    return_type: TypeExpr


@dataclass(frozen=True)
class Example:
    name: str
    arguments: tuple[Literal, ...]
    result: Literal


@dataclass(frozen=True)
class Expression:
    name: str
    arguments: tuple[Argument, ...]


Argument = Union[Literal, Expression]

Statement = Union[Signature, Example, Expression]

Program = tuple[Statement, ...]


# ── Derived views ────────────────────────────────────────────────


@dataclass(frozen=True)
class SignatureWithExamples:
    """A signature together with every example that shares its name."""

    name: str
    parameters: tuple[Parameter, ...]
    return_type: TypeExpr
    examples: tuple[Example, ...]

    @property
    def signature(self) -> Signature:
        return Signature(self.name, self.parameters, self.return_type)
