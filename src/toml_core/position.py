"""Offset → (line, column) lookup used to decorate error messages."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    line: int    # 1-based
    column: int  # 1-based, counted from the start of the line

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class PositionIndex:
    """Precomputed newline offsets of a text buffer.

    Built once before parsing starts and never mutated afterwards.
    Offsets past the end of the buffer are clamped to the end.
    """

    def __init__(self, text: str) -> None:
        self._length = len(text)
        self._line_starts: list[int] = [0]
        start = text.find("\n")
        while start != -1:
            self._line_starts.append(start + 1)
            start = text.find("\n", start + 1)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def locate(self, offset: int) -> Position:
        offset = max(0, min(offset, self._length))
        line_idx = bisect_right(self._line_starts, offset) - 1
        return Position(line=line_idx + 1, column=offset - self._line_starts[line_idx] + 1)
