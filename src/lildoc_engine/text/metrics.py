"""Word, line, and character counting over a buffer."""

from __future__ import annotations

from dataclasses import dataclass

import grapheme  # type: ignore[import]

from .lines import split_lines


@dataclass(frozen=True, slots=True)
class DocumentInfo:
    words: int
    lines: int
    characters: int

    def describe(self) -> str:
        return f"Words: {self.words}, Lines: {self.lines}, Characters: {self.characters}"


def word_count(text: str) -> int:
    """Count runs of non-whitespace characters."""

    return len(text.split())


def line_count(text: str) -> int:
    """Count newline-delimited lines; the empty buffer is one line."""

    return split_lines(text).line_count


def character_count(text: str) -> int:
    """Count user-perceived characters (extended grapheme clusters).

    A base letter with combining marks, an emoji sequence, or a CRLF pair each
    count once. Match offsets stay in codepoints.
    """

    return grapheme.length(text)


def measure(text: str) -> DocumentInfo:
    return DocumentInfo(
        words=word_count(text),
        lines=line_count(text),
        characters=character_count(text),
    )


__all__ = [
    "DocumentInfo",
    "character_count",
    "line_count",
    "measure",
    "word_count",
]
