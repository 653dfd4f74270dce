"""Shared test helpers for the Mirror test suite."""

from __future__ import annotations

from mirror.parser import Parser


def parse(source: str):
    """Parse source and return the program tuple."""
    return Parser(source, "test.mirror").parse()


def parse_one(source: str):
    """Parse source and return its only statement."""
    program = parse(source)
    assert len(program) == 1, program
    return program[0]
