"""Line/column to character offset mapping."""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass

# Same line terminators the XML parser counts: CRLF, lone CR, LF.
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class LineIndex:
    """Start offset of every line in a document text.

    Built once per reconciliation pass; a new index is needed whenever the
    text changes.
    """

    line_starts: tuple[int, ...]
    length: int

    @classmethod
    def build(cls, text: str) -> LineIndex:
        starts = [0]
        starts.extend(match.end() for match in _LINE_BREAK_RE.finditer(text))
        return cls(line_starts=tuple(starts), length=len(text))

    @property
    def line_count(self) -> int:
        return len(self.line_starts)

    def line_start(self, line: int) -> int:
        """Start offset of a 1-based *line*, clamped to the first/last line."""
        index = min(max(line, 1), self.line_count) - 1
        return self.line_starts[index]

    def offset_of(self, line: int, column: int) -> int:
        """Absolute offset of 1-based ``(line, column)``, clamped to ``[0, length]``."""
        offset = self.line_start(line) + (column - 1)
        return min(max(offset, 0), self.length)

    def position_of(self, offset: int) -> tuple[int, int]:
        """Inverse of :meth:`offset_of`: 1-based ``(line, column)`` for *offset*."""
        offset = min(max(offset, 0), self.length)
        index = bisect_right(self.line_starts, offset) - 1
        return index + 1, offset - self.line_starts[index] + 1


def offset_of(text: str, line: int, column: int) -> int:
    """Convert a 1-based ``(line, column)`` into an offset within *text*.

    Never raises: a line past the end of the text maps to the last line
    (parsers report unterminated constructs at end of file), and the result
    is clamped to ``[0, len(text)]``.
    """
    return LineIndex.build(text).offset_of(line, column)
