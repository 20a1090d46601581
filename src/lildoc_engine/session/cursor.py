"""Current-match cursor with wraparound navigation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from lildoc_engine.runtime import telemetry
from lildoc_engine.text.matching import Match, MatchSet

Direction = Literal["next", "previous"]
_STEPS = {"next": 1, "previous": -1}


class CursorInvariantError(RuntimeError):
    """Raised in strict mode when the cursor index escapes its match set."""

    def __init__(self, message: str, *, index: int, count: int) -> None:
        super().__init__(message)
        self.index = index
        self.count = count


@dataclass(slots=True)
class MatchCursor:
    """Tracks ``index`` into a match set of ``count`` entries.

    ``index`` is ``0`` when there are no matches; that value is a sentinel,
    not a valid position.
    """

    count: int = 0
    index: int = 0
    strict: bool = False
    logger_name: Optional[str] = None

    def advance(self, direction: Direction) -> bool:
        """Step with wraparound. Returns ``False`` when there is nothing to visit."""

        try:
            step = _STEPS[direction]
        except KeyError as exc:
            raise ValueError(f"Unknown direction '{direction}'") from exc
        if self.count == 0:
            return False
        self.index = (self.index + step + self.count) % self.count
        return True

    def recompute(self, new_count: int) -> None:
        if new_count < 0:
            raise ValueError("match count cannot be negative")
        self.count = new_count
        if new_count == 0:
            self.index = 0
        elif self.index >= new_count:
            self.index = new_count - 1

    def current(self, matches: MatchSet) -> Optional[Match]:
        if len(matches) != self.count:
            self._violation(f"cursor tracks {self.count} matches, set has {len(matches)}")
            self.recompute(len(matches))
        if self.count == 0:
            return None
        self.ensure_valid()
        return matches[self.index]

    def ensure_valid(self) -> None:
        if self.count == 0 and self.index == 0:
            return
        if 0 <= self.index < self.count:
            return
        self._violation(f"index {self.index} outside 0..{self.count}")
        self.index = min(max(self.index, 0), max(self.count - 1, 0))

    def _violation(self, message: str) -> None:
        if self.strict:
            raise CursorInvariantError(message, index=self.index, count=self.count)
        telemetry.record_event(
            "cursor.reclamp",
            level="warning",
            logger_name=self.logger_name,
            index=self.index,
            count=self.count,
            detail=message,
        )


__all__ = ["CursorInvariantError", "Direction", "MatchCursor"]
