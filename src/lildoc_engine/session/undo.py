"""Linear undo/redo history of committed buffer mutations."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional


@dataclass(frozen=True, slots=True)
class UndoEntry:
    label: str
    before_text: str
    after_text: str
    caret_before: int
    caret_after: int


class UndoTimeline:
    """Bounded history; the oldest entries fall off once ``limit`` is reached."""

    def __init__(self, *, limit: int = 100) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self._done: Deque[UndoEntry] = deque(maxlen=limit)
        self._undone: list[UndoEntry] = []

    def push(self, entry: UndoEntry) -> None:
        self._undone.clear()
        self._done.append(entry)

    def can_undo(self) -> bool:
        return bool(self._done)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def undo(self) -> Optional[UndoEntry]:
        if not self._done:
            return None
        entry = self._done.pop()
        self._undone.append(entry)
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self._undone:
            return None
        entry = self._undone.pop()
        self._done.append(entry)
        return entry

    def __len__(self) -> int:
        return len(self._done)


__all__ = ["UndoEntry", "UndoTimeline"]
