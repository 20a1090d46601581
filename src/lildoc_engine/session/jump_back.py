"""Single-slot memory of the caret position before a match jump."""

from __future__ import annotations

from typing import Optional


class JumpBackTracker:
    """Remembers one caret offset; recording again overwrites it."""

    def __init__(self) -> None:
        self._slot: Optional[int] = None

    def record_before_jump(self, caret_offset: int) -> None:
        if caret_offset < 0:
            raise ValueError("caret offset cannot be negative")
        self._slot = caret_offset

    def consume(self) -> Optional[int]:
        offset, self._slot = self._slot, None
        return offset

    def is_armed(self) -> bool:
        return self._slot is not None


__all__ = ["JumpBackTracker"]
