"""Source text representation and span tracking for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """A range within a source text (1-indexed lines and columns)."""

    file: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.file}:{self.start_line}:{self.start_col}"


class SourceText:
    """Source text with line access, used to place diagnostics."""

    def __init__(self, content: str, filename: str = "<input>") -> None:
        self.content = content
        self.filename = filename
        self.lines = content.splitlines()

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        if 1 <= n <= len(self.lines):
            return self.lines[n - 1]
        return ""

    def position(self, offset: int) -> tuple[int, int]:
        """Convert a character offset into a (line, column) pair."""
        offset = max(0, min(offset, len(self.content)))
        line = self.content.count("\n", 0, offset) + 1
        line_start = self.content.rfind("\n", 0, offset) + 1
        return line, offset - line_start + 1

    def span(self, offset: int, length: int = 1) -> Span:
        """Build a Span covering ``length`` characters starting at ``offset``."""
        start_line, start_col = self.position(offset)
        end_line, end_col = self.position(offset + max(length, 1) - 1)
        return Span(self.filename, start_line, start_col, end_line, end_col)

    def end_span(self) -> Span:
        """Span pointing just past the last character of the source."""
        line, col = self.position(len(self.content))
        return Span(self.filename, line, col, line, col)
