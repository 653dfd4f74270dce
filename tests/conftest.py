"""Shared pytest fixtures for the Mirror test suite."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

SAMPLE = (
    "signature myFunc(a: string, b: number) -> bool\n"
    'example myFunc("hello", 123) = true\n'
    'myFunc("world", 456)\n'
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def sample_file(tmp_path):
    """A well-formed, canonically formatted .mirror file."""
    path = tmp_path / "sample.mirror"
    path.write_text(SAMPLE)
    return path


@pytest.fixture
def broken_file(tmp_path):
    """A .mirror file with a signature missing its closing paren."""
    path = tmp_path / "broken.mirror"
    path.write_text("signature f(a: number\n")
    return path
