"""Line model used by the line-oriented operations and metrics."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

_SEPARATORS = re.compile(r"(\r\n|\r|\n)")
DEFAULT_SEPARATOR = "\n"


@dataclass(frozen=True, slots=True)
class LineLayout:
    """A buffer split into lines, keeping the exact separator after each one.

    ``separators[i]`` sits between ``lines[i]`` and ``lines[i + 1]``, so a
    layout always has one fewer separator than lines. A trailing newline
    produces a final empty line, and the empty buffer is a single empty line.
    """

    lines: Tuple[str, ...]
    separators: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("a layout holds at least one line")
        if len(self.separators) != len(self.lines) - 1:
            raise ValueError("separator count must be line count - 1")

    @classmethod
    def from_text(cls, text: str) -> "LineLayout":
        parts = _SEPARATORS.split(text)
        return cls(lines=tuple(parts[0::2]), separators=tuple(parts[1::2]))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def join(self) -> str:
        chunks: list[str] = []
        for index, line in enumerate(self.lines):
            chunks.append(line)
            if index < len(self.separators):
                chunks.append(self.separators[index])
        return "".join(chunks)

    def dominant_separator(self) -> str:
        if not self.separators:
            return DEFAULT_SEPARATOR
        return Counter(self.separators).most_common(1)[0][0]

    def numbered(self) -> Iterator[tuple[int, str]]:
        """Yield ``(1-based number, line)`` pairs."""

        return enumerate(self.lines, start=1)

    def with_lines(self, lines: Sequence[str]) -> "LineLayout":
        return LineLayout(lines=tuple(lines), separators=self.separators)

    def insert(self, index: int, content: str, separator: str) -> "LineLayout":
        """Return a layout with ``content`` as the new line at ``index``."""

        index = max(0, min(index, self.line_count))
        lines = list(self.lines)
        separators = list(self.separators)
        lines.insert(index, content)
        separators.insert(index, separator)
        return LineLayout(lines=tuple(lines), separators=tuple(separators))


def split_lines(text: str) -> LineLayout:
    return LineLayout.from_text(text)


__all__ = ["DEFAULT_SEPARATOR", "LineLayout", "split_lines"]
