"""Tests for the Mirror parser."""

from __future__ import annotations

import dataclasses
import sys

import pytest

from mirror import parse as parse_program
from mirror.ast_nodes import (
    BooleanLit,
    DictLit,
    DictType,
    Example,
    Expression,
    ListLit,
    ListType,
    NumberLit,
    Parameter,
    PrimitiveType,
    Signature,
    StringLit,
)
from mirror.errors import NESTING_TOO_DEEP, SYNTAX_ERROR, MirrorSyntaxError
from mirror.parser import DEFAULT_MAX_DEPTH, MAX_DEPTH_CEILING, Parser
from tests.helpers import parse, parse_one

NUMBER = PrimitiveType("number")
STRING = PrimitiveType("string")
BOOL = PrimitiveType("bool")


def syntax_error(source: str, **kwargs) -> MirrorSyntaxError:
    with pytest.raises(MirrorSyntaxError) as exc_info:
        Parser(source, "test.mirror", **kwargs).parse()
    return exc_info.value


class TestParserProgram:
    def test_empty_program(self):
        assert parse("") == ()

    def test_program_is_tuple_in_source_order(self):
        program = parse(
            "signature myFunc(a: string, b: number) -> bool\n"
            'example test1("hello", 123) = true\n'
            'myFunc("world", 456)\n'
        )
        assert isinstance(program, tuple)
        assert [type(s) for s in program] == [Signature, Example, Expression]

    def test_statements_need_no_separator(self):
        program = parse("f(1) g(2)")
        assert program == (
            Expression("f", (NumberLit(1.0),)),
            Expression("g", (NumberLit(2.0),)),
        )

    def test_module_level_parse(self):
        assert parse_program("f()") == (Expression("f", ()),)

    def test_parser_is_single_use(self):
        parser = Parser("f()")
        parser.parse()
        with pytest.raises(RuntimeError, match="single-use"):
            parser.parse()

    def test_nodes_are_immutable(self):
        sig = parse_one("signature f(a: number) -> bool")
        with pytest.raises(dataclasses.FrozenInstanceError):
            sig.name = "g"
        assert isinstance(sig.parameters, tuple)


class TestParserSignatures:
    def test_signature(self):
        sig = parse_one("signature myFunc(a: string, b: number) -> bool")
        assert sig == Signature(
            "myFunc",
            (Parameter("a", STRING), Parameter("b", NUMBER)),
            BOOL,
        )

    def test_empty_parameter_list(self):
        assert parse_one("signature f() -> bool") == Signature("f", (), BOOL)

    def test_compact_spacing(self):
        assert parse_one("signature f(a:number)->bool") == Signature(
            "f", (Parameter("a", NUMBER),), BOOL,
        )

    def test_list_type(self):
        sig = parse_one("signature f(xs: list[number]) -> list[string]")
        assert sig.parameters[0].type == ListType(NUMBER)
        assert sig.return_type == ListType(STRING)

    def test_nested_type(self):
        sig = parse_one("signature f() -> list[dict[string,number]]")
        assert sig.return_type == ListType(DictType(STRING, NUMBER))

    def test_dict_of_lists(self):
        sig = parse_one("signature f() -> dict[list[bool], dict[string, list[number]]]")
        assert sig.return_type == DictType(
            ListType(BOOL), DictType(STRING, ListType(NUMBER)),
        )

    def test_keyword_words_as_names(self):
        sig = parse_one("signature list(string: string) -> string")
        assert sig == Signature("list", (Parameter("string", STRING),), STRING)

    def test_multiline_signature(self):
        sig = parse_one("signature f(\n  a: number,\n  b: bool\n)\n-> bool")
        assert [p.name for p in sig.parameters] == ["a", "b"]


class TestParserExamples:
    def test_example(self):
        ex = parse_one('example test1("hello", 123) = true')
        assert ex == Example(
            "test1",
            (StringLit('"hello"'), NumberLit(123.0)),
            BooleanLit(True),
        )

    def test_empty_arguments(self):
        assert parse_one("example f() = false") == Example("f", (), BooleanLit(False))

    def test_list_result(self):
        ex = parse_one("example f(1) = [1, 2, 3]")
        assert ex.result == ListLit((NumberLit(1.0), NumberLit(2.0), NumberLit(3.0)))

    def test_dict_argument(self):
        ex = parse_one('example f({"a": 1}) = true')
        assert ex.arguments == (DictLit(StringLit('"a"'), NumberLit(1.0)),)


class TestParserLiterals:
    def test_integer_and_decimal_are_floats(self):
        ex = parse_one("example f(3, 3.0) = 2.5")
        assert ex.arguments == (NumberLit(3.0), NumberLit(3.0))
        assert isinstance(ex.arguments[0].value, float)
        assert ex.result == NumberLit(2.5)

    def test_booleans(self):
        ex = parse_one("example f(true, false) = true")
        assert ex.arguments == (BooleanLit(True), BooleanLit(False))

    def test_string_keeps_quotes_and_escapes(self):
        ex = parse_one('example f("a \\"b\\"") = ""')
        assert ex.arguments == (StringLit('"a \\"b\\""'),)
        assert ex.result == StringLit('""')

    def test_empty_list(self):
        assert parse_one("example f([]) = []").result == ListLit(())

    def test_nested_lists(self):
        ex = parse_one("example f([[1], []]) = true")
        assert ex.arguments == (ListLit((ListLit((NumberLit(1.0),)), ListLit(()))),)

    def test_nested_dicts(self):
        ex = parse_one('example f({"a": {"b": [true]}}) = true')
        assert ex.arguments == (
            DictLit(StringLit('"a"'), DictLit(StringLit('"b"'), ListLit((BooleanLit(True),)))),
        )


class TestParserExpressions:
    def test_simple_call(self):
        assert parse_one('myFunc("world", 456)') == Expression(
            "myFunc", (StringLit('"world"'), NumberLit(456.0)),
        )

    def test_empty_call(self):
        assert parse_one("f()") == Expression("f", ())

    def test_deeply_nested_calls(self):
        expr = parse_one("a(b(c(d(1))))")
        assert expr == Expression("a", (
            Expression("b", (
                Expression("c", (
                    Expression("d", (NumberLit(1.0),)),
                )),
            )),
        ))

    def test_mixed_arguments(self):
        expr = parse_one('f(1, g("x"), [true], {1: 2}, h())')
        assert expr.arguments == (
            NumberLit(1.0),
            Expression("g", (StringLit('"x"'),)),
            ListLit((BooleanLit(True),)),
            DictLit(NumberLit(1.0), NumberLit(2.0)),
            Expression("h", ()),
        )

    def test_booleans_are_literals_not_calls(self):
        expr = parse_one("f(true, false)")
        assert expr.arguments == (BooleanLit(True), BooleanLit(False))

    def test_boolean_can_start_a_statement(self):
        assert parse_one("true(1)") == Expression("true", (NumberLit(1.0),))
        assert parse("false()") == (Expression("false", ()),)

    def test_type_keyword_can_name_a_call(self):
        assert parse_one("list(1)") == Expression("list", (NumberLit(1.0),))


class TestParserErrors:
    def test_unclosed_signature(self):
        err = syntax_error("signature f(a:number")
        assert err.message == "Expected ')', but got end of input"
        assert err.code == SYNTAX_ERROR

    def test_missing_arrow(self):
        err = syntax_error("signature f(a: number) bool")
        assert err.message == "Expected '->', but got 'bool'"

    def test_missing_return_type(self):
        err = syntax_error("signature f() ->")
        assert err.message == "Unexpected type: end of input"

    def test_unknown_type(self):
        err = syntax_error("signature f(a: int) -> bool")
        assert err.message == "Unexpected type: 'int'"

    def test_dict_type_needs_two_arguments(self):
        err = syntax_error("signature f() -> dict[string]")
        assert err.message == "Expected ',', but got ']'"

    def test_list_type_needs_bracket(self):
        err = syntax_error("signature f() -> list string")
        assert err.message == "Expected '[', but got 'string'"

    def test_missing_identifier(self):
        err = syntax_error("signature (a: number) -> bool")
        assert err.message == "Expected identifier, but got '('"

    def test_keyword_at_end(self):
        err = syntax_error("example")
        assert err.message == "Expected identifier, but got end of input"

    def test_identifier_is_not_a_literal(self):
        err = syntax_error("example f(x) = 1")
        assert err.message == "Unexpected literal: 'x'"

    def test_example_needs_result(self):
        err = syntax_error("example f(1)")
        assert err.message == "Expected '=', but got end of input"

    def test_trailing_comma(self):
        err = syntax_error("f(1,)")
        assert err.message == "Unexpected literal: ')'"

    def test_dict_literal_single_pair(self):
        err = syntax_error("example f({1: 2, 3: 4}) = true")
        assert err.message == "Expected '}', but got ','"

    def test_dict_literal_needs_colon(self):
        err = syntax_error("example f({1, 2}) = true")
        assert err.message == "Expected ':', but got ','"

    def test_unexpected_top_level_token(self):
        err = syntax_error("123")
        assert err.message == "Unexpected token: '123'"

    def test_boolean_inside_arguments_is_a_literal(self):
        err = syntax_error("f(true(1))")
        assert err.message == "Expected ')', but got '('"

    def test_number_out_of_range(self):
        err = syntax_error("f(" + "9" * 400 + ")")
        assert err.code == SYNTAX_ERROR
        assert err.message == "Number out of range: '" + "9" * 20 + "…'"
        assert (err.span.start_line, err.span.start_col) == (1, 3)

    def test_number_out_of_range_in_example_result(self):
        err = syntax_error("example f() = " + "1" * 320 + ".5")
        assert err.message.startswith("Number out of range: ")

    def test_negative_numbers_are_not_literals(self):
        err = syntax_error("f(-1)")
        assert err.message == "Unexpected literal: '-'"

    def test_error_after_valid_statements_aborts_everything(self):
        parser = Parser("f(1)\ng(2)\nh(")
        with pytest.raises(MirrorSyntaxError):
            parser.parse()

    def test_error_span_points_at_token(self):
        err = syntax_error("signature f(\n  a: int\n) -> bool")
        assert err.span.file == "test.mirror"
        assert (err.span.start_line, err.span.start_col) == (2, 6)
        assert (err.span.end_line, err.span.end_col) == (2, 8)

    def test_error_span_at_end_of_input(self):
        err = syntax_error("f(1")
        assert (err.span.start_line, err.span.start_col) == (1, 4)

    def test_error_carries_one_diagnostic(self):
        err = syntax_error("f(")
        assert len(err.diagnostics) == 1
        assert err.diagnostic.message == err.message
        assert "test.mirror:1:3" in str(err)


class TestParserNesting:
    def test_within_limit(self):
        expr = Parser("a(b(1))", max_depth=3).parse()[0]
        assert expr.arguments[0].arguments == (NumberLit(1.0),)

    def test_beyond_limit(self):
        err = syntax_error("a(b(c(1)))", max_depth=3)
        assert err.code == NESTING_TOO_DEEP
        assert err.message == "Nesting too deep: exceeds maximum depth of 3"

    def test_default_limit_on_calls(self):
        depth = DEFAULT_MAX_DEPTH + 10
        err = syntax_error("a(" * depth + "1" + ")" * depth)
        assert err.code == NESTING_TOO_DEEP

    def test_default_limit_on_lists(self):
        depth = DEFAULT_MAX_DEPTH + 10
        err = syntax_error("example f(" + "[" * depth + "]" * depth + ") = true")
        assert err.code == NESTING_TOO_DEEP

    def test_default_limit_on_types(self):
        depth = DEFAULT_MAX_DEPTH + 10
        err = syntax_error("signature f() -> " + "list[" * depth + "bool" + "]" * depth)
        assert err.code == NESTING_TOO_DEEP

    def test_moderate_nesting_is_fine(self):
        depth = 100
        program = parse("a(" * depth + "1" + ")" * depth)
        node = program[0]
        for _ in range(depth - 1):
            node = node.arguments[0]
        assert node.arguments == (NumberLit(1.0),)

    def test_sibling_arguments_do_not_accumulate_depth(self):
        args = ", ".join(["f(1)"] * 50)
        expr = Parser(f"g({args})", max_depth=3).parse()[0]
        assert len(expr.arguments) == 50

    def test_nesting_error_has_note(self):
        err = syntax_error("a(b(c(1)))", max_depth=2)
        assert len(err.diagnostic.notes) == 1
        assert "max_depth" in err.diagnostic.notes[0]
        assert str(MAX_DEPTH_CEILING) in err.diagnostic.notes[0]

    def test_ceiling_is_accepted(self):
        depth = MAX_DEPTH_CEILING
        program = Parser("a(" * depth + "1" + ")" * depth, max_depth=depth).parse()
        assert program[0].name == "a"

    @pytest.mark.parametrize("value", [0, -1, MAX_DEPTH_CEILING + 1, 2000])
    def test_max_depth_out_of_range(self, value):
        with pytest.raises(ValueError, match="max_depth must be between 1 and"):
            Parser("f()", max_depth=value)

    @pytest.mark.parametrize("value", [True, 2.5, "10"])
    def test_max_depth_must_be_an_integer(self, value):
        with pytest.raises(ValueError, match="max_depth must be an integer"):
            Parser("f()", max_depth=value)

    def test_recursion_error_becomes_nesting_error(self):
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(_stack_depth() + 150)
        try:
            err = syntax_error(
                "example f(" + "[" * 250 + "]" * 250 + ") = true",
                max_depth=MAX_DEPTH_CEILING,
            )
        finally:
            sys.setrecursionlimit(limit)
        assert err.code == NESTING_TOO_DEEP


def _stack_depth() -> int:
    frame, depth = sys._getframe(), 0
    while frame is not None:
        frame, depth = frame.f_back, depth + 1
    return depth
