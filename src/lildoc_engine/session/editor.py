"""Editor session orchestrating buffer, matches, cursor, and jump-back."""

from __future__ import annotations

from typing import Any, Callable, Optional

from lildoc_engine.runtime import EngineConfig, telemetry
from lildoc_engine.text import matching, metrics
from lildoc_engine.text import operations as ops
from lildoc_engine.text.matching import LineHit, Match, MatchSet
from lildoc_engine.text.metrics import DocumentInfo
from lildoc_engine.text.operations import EditResult, InsertPosition
from lildoc_engine.text.validation import TextInput, ensure_text

from .cursor import Direction, MatchCursor
from .jump_back import JumpBackTracker
from .state import CursorState, SessionView
from .undo import UndoEntry, UndoTimeline

Operation = Callable[..., EditResult]


def _accept(value: Any) -> Any:
    if isinstance(value, (str, bytes, bytearray)):
        return ensure_text(value, field="argument")
    return value


class EditorSession:
    """Owns one document buffer and keeps search state consistent with it.

    Every committed change recomputes the match set and re-clamps the cursor
    before returning, so reads after any public call see a coherent state.
    Sessions are not thread-safe; callers serialize access to one session.
    """

    def __init__(
        self,
        text: TextInput = "",
        *,
        name: str = "default",
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.name = name
        self.config = config or EngineConfig.from_env()
        self._text = ensure_text(text)
        self._query = ""
        self._matches: MatchSet = ()
        self._caret = 0
        self._version = 0
        self.cursor = MatchCursor(
            strict=self.config.strict_invariants,
            logger_name=self.config.logger_name,
        )
        self.jump_back_tracker = JumpBackTracker()
        self.history = UndoTimeline(limit=self.config.history_limit)

    @property
    def text(self) -> str:
        return self._text

    @property
    def query(self) -> str:
        return self._query

    @property
    def matches(self) -> MatchSet:
        return self._matches

    @property
    def match_count(self) -> int:
        return len(self._matches)

    @property
    def current_index(self) -> int:
        return self.cursor.index

    @property
    def caret(self) -> int:
        return self._caret

    @property
    def version(self) -> int:
        return self._version

    @property
    def can_jump_back(self) -> bool:
        return self.jump_back_tracker.is_armed()

    # -- search -------------------------------------------------------------

    def set_query(self, query: TextInput) -> int:
        """Search for ``query``; returns the number of matches."""

        self._query = ensure_text(query, field="query")
        self._recompute()
        self._event("session.query", query=self._query, matches=len(self._matches))
        return len(self._matches)

    def current(self) -> Optional[Match]:
        return self.cursor.current(self._matches)

    def state(self) -> CursorState:
        return CursorState(current_match_index=self.cursor.index, query=self._query)

    def snapshot(self) -> SessionView:
        self.cursor.ensure_valid()
        return SessionView(
            version=self._version,
            text=self._text,
            query=self._query,
            matches=self._matches,
            current_index=self.cursor.index,
            caret=self._caret,
            can_jump_back=self.can_jump_back,
        )

    # -- navigation ---------------------------------------------------------

    def next(self) -> Optional[Match]:
        return self._navigate("next")

    def previous(self) -> Optional[Match]:
        return self._navigate("previous")

    def jump_back(self) -> Optional[int]:
        """Return the caret to where it was before the last match jump.

        Returns the new caret offset, or ``None`` when nothing was recorded.
        """

        offset = self.jump_back_tracker.consume()
        if offset is None:
            self._event("session.jump_back", status="not_available")
            return None
        self._caret = min(offset, len(self._text))
        self._event("session.jump_back", status="ok", caret=self._caret)
        return self._caret

    def move_caret(self, offset: int) -> int:
        """Accept caret feedback from a rendering surface (clamped)."""

        self._caret = max(0, min(offset, len(self._text)))
        return self._caret

    def _navigate(self, direction: Direction) -> Optional[Match]:
        if not self._matches:
            return None
        self.jump_back_tracker.record_before_jump(self._caret)
        self.cursor.advance(direction)
        match = self.current()
        if match is not None:
            self._caret = match.end
        self._event(
            "session.navigate",
            direction=direction,
            index=self.cursor.index,
            count=len(self._matches),
        )
        return match

    # -- mutation -----------------------------------------------------------

    def apply(self, operation: Operation, *args: Any, **kwargs: Any) -> int:
        """Run a text operation against the buffer, commit it, recompute.

        Returns the operation's affected count.
        """

        label = getattr(operation, "__name__", "mutation")
        args = tuple(_accept(value) for value in args)
        kwargs = {key: _accept(value) for key, value in kwargs.items()}
        with telemetry.span(
            f"session::{label}",
            session=self.name,
            logger_name=self.config.logger_name,
        ) as handle:
            result = operation(self._text, *args, **kwargs)
            handle.note("affected", result.affected)
            self._commit(result.text, label=label)
        return result.affected

    def replace(self, search: str, replacement: str, *, replace_all: bool = False) -> int:
        return self.apply(ops.replace, search, replacement, replace_all=replace_all)

    def wrap_matches(self, search: str, prefix: str, suffix: str) -> int:
        return self.apply(ops.wrap_matches, search, prefix, suffix)

    def prefix_lines(self, prefix: str, matching: Optional[str] = None) -> int:
        return self.apply(ops.prefix_lines, prefix, matching)

    def insert_line(
        self, content: str, at_line: int, position: InsertPosition = "before"
    ) -> int:
        return self.apply(ops.insert_line, content, at_line, position)

    def prepend(self, text: str) -> int:
        return self.apply(ops.prepend, text)

    def append(self, text: str) -> int:
        return self.apply(ops.append, text)

    def push_host_edit(self, text: TextInput) -> bool:
        """Commit text typed directly into a host widget."""

        return self._commit(ensure_text(text), label="host_edit")

    def undo(self) -> bool:
        entry = self.history.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.caret_before)
        self._event("session.undo", label=entry.label)
        return True

    def redo(self) -> bool:
        entry = self.history.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.caret_after)
        self._event("session.redo", label=entry.label)
        return True

    # -- inspection ---------------------------------------------------------

    def info(self) -> DocumentInfo:
        return metrics.measure(self._text)

    def find_lines(self, query: str, *, limit: Optional[int] = None) -> tuple[LineHit, ...]:
        return matching.find_lines(self._text, query, limit=limit)

    def count_occurrences(self, pattern: str) -> int:
        return matching.count_occurrences(self._text, pattern)

    # -- internals ----------------------------------------------------------

    def _commit(self, new_text: str, *, label: str) -> bool:
        if new_text == self._text:
            return False
        before_text, caret_before = self._text, self._caret
        self._text = new_text
        self._version += 1
        self._caret = min(self._caret, len(new_text))
        self.history.push(
            UndoEntry(
                label=label,
                before_text=before_text,
                after_text=new_text,
                caret_before=caret_before,
                caret_after=self._caret,
            )
        )
        self._recompute()
        return True

    def _restore(self, text: str, caret: int) -> None:
        self._text = text
        self._version += 1
        self._caret = min(caret, len(text))
        self._recompute()

    def _recompute(self) -> None:
        self._matches = matching.find_matches(self._text, self._query)
        self.cursor.recompute(len(self._matches))

    def _event(self, name: str, **data: Any) -> None:
        telemetry.record_event(
            name,
            level="debug",
            session=self.name,
            logger_name=self.config.logger_name,
            **data,
        )


__all__ = ["EditorSession", "Operation"]
