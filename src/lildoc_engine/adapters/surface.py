"""Adapter that drives a host rendering surface from an ``EditorSession``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from lildoc_engine.session import EditorSession, SessionView
from lildoc_engine.text.matching import Match, MatchSet
from lildoc_engine.text.validation import TextValidationError
from lildoc_engine.tools import (
    ToolArgumentError,
    ToolRegistry,
    ToolResult,
    UnknownToolError,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class SurfaceHooks:
    """Callbacks the adapter invokes to update host widgets."""

    update_text: Callable[[str], None]
    highlight: Callable[[MatchSet, Optional[Match]], None] = _noop
    move_caret: Callable[[int], None] = _noop
    show_match_status: Callable[[str], None] = _noop
    update_status: Callable[[str], None] = _noop
    set_jump_back_enabled: Callable[[bool], None] = _noop
    log: Callable[[str], None] = _noop


class SessionSurfaceAdapter:
    """Bridges host events into the session and re-renders what changed.

    The adapter remembers the last text version and caret it pushed to the
    host, so repeated renders do not reset the host's text or selection.
    """

    def __init__(
        self,
        session: EditorSession,
        hooks: SurfaceHooks,
        *,
        tools: Optional[ToolRegistry] = None,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.tools = tools
        self._rendered_version: Optional[int] = None
        self._rendered_caret: Optional[int] = None
        self.refresh(force=True)

    def search(self, query: str) -> int:
        count = self.session.set_query(query)
        self._log_state("search ->", query=query, matches=count)
        self.refresh()
        return count

    def next_match(self) -> Optional[Match]:
        match = self.session.next()
        self._log_state("next ->", match=match)
        self.refresh()
        return match

    def previous_match(self) -> Optional[Match]:
        match = self.session.previous()
        self._log_state("previous ->", match=match)
        self.refresh()
        return match

    def jump_back(self) -> Optional[int]:
        caret = self.session.jump_back()
        if caret is None:
            self.hooks.update_status("jump_back_unavailable")
        self._log_state("jump_back ->", caret=caret)
        self.refresh()
        return caret

    def caret_moved(self, offset: int) -> None:
        """Record a selection change that originated in the host."""

        self._rendered_caret = self.session.move_caret(offset)

    def host_edit(self, text: str) -> bool:
        try:
            changed = self.session.push_host_edit(text)
        except TextValidationError as exc:
            self.hooks.update_status(f"rejected::{exc.reason}")
            self._log_state("host_edit !!", reason=exc.reason)
            return False
        if changed:
            # The host already shows this text.
            self._rendered_version = self.session.version
        self.refresh()
        return changed

    def run_tool(
        self, name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> Optional[ToolResult]:
        if self.tools is None:
            raise RuntimeError("SessionSurfaceAdapter was created without tools")
        try:
            result = self.tools.invoke(name, self.session, arguments)
        except (ToolArgumentError, UnknownToolError, TextValidationError) as exc:
            self.hooks.update_status(f"tool_error::{exc}")
            self._log_state("tool !!", tool=name, error=str(exc))
            return None
        self.hooks.update_status(result.message)
        self._log_state("tool ->", tool=name, status=result.status, affected=result.affected)
        self.refresh()
        return result

    def match_status(self) -> str:
        """``"n/m"`` label for the search overlay, empty when nothing matches."""

        if not self.session.query or not self.session.match_count:
            return ""
        return f"{self.session.current_index + 1}/{self.session.match_count}"

    def refresh(self, *, force: bool = False) -> None:
        view = self.session.snapshot()
        if force or view.version != self._rendered_version:
            self.hooks.update_text(view.text)
            self._rendered_version = view.version
        self.hooks.highlight(view.matches, view.current)
        if force or view.caret != self._rendered_caret:
            self.hooks.move_caret(view.caret)
            self._rendered_caret = view.caret
        self.hooks.show_match_status(self.match_status())
        self.hooks.set_jump_back_enabled(view.can_jump_back)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata(self.session.snapshot())
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self, view: SessionView) -> Dict[str, object]:
        return {
            "session": self.session.name,
            "version": view.version,
            "query": view.query,
            "index": view.current_index,
            "count": view.match_count,
            "caret": view.caret,
        }


__all__ = ["SessionSurfaceAdapter", "SurfaceHooks"]
