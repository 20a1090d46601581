"""Pure buffer mutations.

Every operation takes the current buffer and returns an ``EditResult`` with
the new text and the number of locations it changed. Nothing here mutates
state; ``EditorSession`` commits results and recomputes its match set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional, Sequence

from .lines import split_lines
from .matching import Match, find_occurrences

InsertPosition = Literal["before", "after"]
INSERT_POSITIONS: tuple[str, ...] = ("before", "after")


@dataclass(frozen=True, slots=True)
class EditResult:
    text: str
    affected: int

    @property
    def changed(self) -> bool:
        return self.affected > 0


def _splice(buffer: str, spans: Sequence[Match], render: Callable[[Match], str]) -> str:
    chunks: list[str] = []
    cursor = 0
    for span in spans:
        chunks.append(buffer[cursor : span.start])
        chunks.append(render(span))
        cursor = span.end
    chunks.append(buffer[cursor:])
    return "".join(chunks)


def replace(
    buffer: str, search: str, replacement: str, *, replace_all: bool = False
) -> EditResult:
    """Replace the first (or every) case-insensitive occurrence of ``search``.

    Occurrences are collected from the original buffer in one pass, so text
    introduced by ``replacement`` is never matched again.
    """

    occurrences = find_occurrences(buffer, search)
    if not replace_all:
        occurrences = occurrences[:1]
    if not occurrences:
        return EditResult(text=buffer, affected=0)
    return EditResult(
        text=_splice(buffer, occurrences, lambda _span: replacement),
        affected=len(occurrences),
    )


def wrap_matches(buffer: str, search: str, prefix: str, suffix: str) -> EditResult:
    """Surround every occurrence of ``search`` with ``prefix``/``suffix``.

    The matched text keeps its original casing.
    """

    occurrences = find_occurrences(buffer, search)
    if not occurrences:
        return EditResult(text=buffer, affected=0)
    return EditResult(
        text=_splice(
            buffer, occurrences, lambda span: prefix + span.text_in(buffer) + suffix
        ),
        affected=len(occurrences),
    )


def prefix_lines(
    buffer: str, prefix: str, matching: Optional[str] = None
) -> EditResult:
    """Prepend ``prefix`` to non-empty lines, or to lines containing ``matching``."""

    layout = split_lines(buffer)
    needle = matching.casefold() if matching else None
    affected = 0
    lines: list[str] = []
    for line in layout.lines:
        if needle is None:
            hit = bool(line)
        else:
            hit = needle in line.casefold()
        if hit:
            affected += 1
            lines.append(prefix + line)
        else:
            lines.append(line)
    if not affected:
        return EditResult(text=buffer, affected=0)
    return EditResult(text=layout.with_lines(lines).join(), affected=affected)


def insert_line(
    buffer: str,
    content: str,
    at_line: int,
    position: InsertPosition = "before",
) -> EditResult:
    """Insert ``content`` as a new line before/after the 1-indexed ``at_line``.

    Line numbers past either end clamp to before the first line or after the
    last one.
    """

    if position not in INSERT_POSITIONS:
        raise ValueError(f"position must be 'before' or 'after', got {position!r}")
    layout = split_lines(buffer)
    if at_line < 1:
        index = 0
    elif at_line > layout.line_count:
        index = layout.line_count
    elif position == "before":
        index = at_line - 1
    else:
        index = at_line
    updated = layout.insert(index, content, layout.dominant_separator())
    return EditResult(text=updated.join(), affected=1)


def prepend(buffer: str, text: str) -> EditResult:
    return EditResult(text=text + buffer, affected=1 if text else 0)


def append(buffer: str, text: str) -> EditResult:
    return EditResult(text=buffer + text, affected=1 if text else 0)


__all__ = [
    "EditResult",
    "INSERT_POSITIONS",
    "InsertPosition",
    "append",
    "insert_line",
    "prefix_lines",
    "prepend",
    "replace",
    "wrap_matches",
]
