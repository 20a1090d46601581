"""Case-insensitive match finding over a buffer.

Two matching flavours share one scanner:

* ``find_matches`` -- whole-word matches used by interactive search.
* ``find_occurrences`` -- plain substring matches used by replace/wrap/count.

Both compare under Unicode case folding and report offsets in source
codepoints, even where folding changes length (``"ß"`` folds to ``"ss"``).
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .lines import split_lines


@dataclass(frozen=True, slots=True)
class Match:
    """A span of a specific buffer snapshot, in codepoints."""

    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def text_in(self, buffer: str) -> str:
        return buffer[self.start : self.end]


MatchSet = Tuple[Match, ...]


@dataclass(frozen=True, slots=True)
class LineHit:
    number: int
    text: str

    def describe(self) -> str:
        return f"Line {self.number}: {self.text}"


class _FoldedText:
    """Case-folded copy of a buffer with a map back to source offsets."""

    __slots__ = ("text", "origin")

    def __init__(self, source: str) -> None:
        chunks: list[str] = []
        origin: list[int] = []
        for index, char in enumerate(source):
            folded = char.casefold()
            chunks.append(folded)
            origin.extend([index] * len(folded))
        self.text = "".join(chunks)
        self.origin = origin

    def source_span(self, start: int, end: int) -> Optional[Match]:
        """Map folded ``[start, end)`` back to the source, if it is aligned.

        A span that starts or ends in the middle of one source character's
        folding (half of ``"ss"`` from ``"ß"``) has no source equivalent.
        """

        origin = self.origin
        if start > 0 and origin[start - 1] == origin[start]:
            return None
        if end < len(origin) and origin[end] == origin[end - 1]:
            return None
        first = origin[start]
        return Match(start=first, length=origin[end - 1] + 1 - first)


def _candidates(buffer: str, pattern: str) -> Iterator[Match]:
    needle = pattern.casefold()
    if not needle:
        return
    folded = _FoldedText(buffer)
    position = 0
    while True:
        start = folded.text.find(needle, position)
        if start < 0:
            return
        end = start + len(needle)
        span = folded.source_span(start, end)
        if span is None:
            position = start + 1
            continue
        yield span
        # Resume after the whole candidate; overlapping spans are never seen.
        position = end


def is_alphanumeric(char: str) -> bool:
    """Letters, marks and numbers; anything unclassifiable is a boundary.

    Characters outside the Basic Multilingual Plane (surrogate pairs in UTF-16
    hosts) never classify, so they are always boundaries.
    """

    if not char or ord(char[0]) > 0xFFFF:
        return False
    try:
        category = unicodedata.category(char)
    except (TypeError, ValueError):
        return False
    return category[0] in "LMN"


def is_word_boundary(buffer: str, match: Match) -> bool:
    if match.start > 0 and is_alphanumeric(buffer[match.start - 1]):
        return False
    if match.end < len(buffer) and is_alphanumeric(buffer[match.end]):
        return False
    return True


def find_matches(buffer: str, query: str) -> MatchSet:
    """Return every whole-word, case-insensitive match of ``query``.

    An empty query yields an empty set. Candidates rejected by the boundary
    rule are still consumed, so the scan never revisits their span.
    """

    return tuple(
        match for match in _candidates(buffer, query) if is_word_boundary(buffer, match)
    )


def find_occurrences(buffer: str, pattern: str) -> MatchSet:
    """Return every case-insensitive substring occurrence of ``pattern``."""

    return tuple(_candidates(buffer, pattern))


def count_occurrences(buffer: str, pattern: str) -> int:
    return sum(1 for _ in _candidates(buffer, pattern))


def find_lines(
    buffer: str, query: str, *, limit: Optional[int] = None
) -> Tuple[LineHit, ...]:
    """Return lines containing ``query`` (case-insensitive), 1-based."""

    needle = query.casefold()
    if not needle:
        return ()
    hits: list[LineHit] = []
    for number, line in split_lines(buffer).numbered():
        if needle in line.casefold():
            hits.append(LineHit(number=number, text=line))
            if limit is not None and len(hits) >= limit:
                break
    return tuple(hits)


__all__ = [
    "LineHit",
    "Match",
    "MatchSet",
    "count_occurrences",
    "find_lines",
    "find_matches",
    "find_occurrences",
    "is_alphanumeric",
    "is_word_boundary",
]
