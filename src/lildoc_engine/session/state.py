"""Read-only views of session state handed to callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lildoc_engine.text.matching import Match, MatchSet


@dataclass(frozen=True, slots=True)
class CursorState:
    current_match_index: int
    query: str


@dataclass(frozen=True, slots=True)
class SessionView:
    """Everything a renderer needs to draw one frame."""

    version: int
    text: str
    query: str
    matches: MatchSet
    current_index: int
    caret: int
    can_jump_back: bool

    @property
    def match_count(self) -> int:
        return len(self.matches)

    @property
    def current(self) -> Optional[Match]:
        if not self.matches:
            return None
        return self.matches[self.current_index]


__all__ = ["CursorState", "SessionView"]
