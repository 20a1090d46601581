from __future__ import annotations

from typing import List, Optional

import pytest

from lildoc_engine.adapters import SessionSurfaceAdapter, SurfaceHooks
from lildoc_engine.runtime import EngineConfig
from lildoc_engine.session import EditorSession
from lildoc_engine.text import Match
from lildoc_engine.tools import ToolRegistry, load_default_tools

GREETING = "Hello, world!\nThis is a test.\nHello again!"


class Recorder:
    def __init__(self) -> None:
        self.texts: List[str] = []
        self.carets: List[int] = []
        self.highlights: List[tuple[int, Optional[Match]]] = []
        self.match_status: List[str] = []
        self.statuses: List[str] = []
        self.jump_back: List[bool] = []
        self.logs: List[str] = []

    def hooks(self) -> SurfaceHooks:
        return SurfaceHooks(
            update_text=self.texts.append,
            highlight=lambda matches, current: self.highlights.append(
                (len(matches), current)
            ),
            move_caret=self.carets.append,
            show_match_status=self.match_status.append,
            update_status=self.statuses.append,
            set_jump_back_enabled=self.jump_back.append,
            log=self.logs.append,
        )


def make_adapter(
    text: str = GREETING, *, with_tools: bool = False
) -> tuple[SessionSurfaceAdapter, Recorder]:
    recorder = Recorder()
    session = EditorSession(text, config=EngineConfig())
    tools = load_default_tools(ToolRegistry()) if with_tools else None
    return SessionSurfaceAdapter(session, recorder.hooks(), tools=tools), recorder


def test_adapter_renders_initial_state() -> None:
    _adapter, recorder = make_adapter()

    assert recorder.texts == [GREETING]
    assert recorder.carets == [0]
    assert recorder.match_status == [""]
    assert recorder.jump_back == [False]


def test_search_updates_highlights_and_status() -> None:
    adapter, recorder = make_adapter()

    adapter.search("hello")

    assert recorder.highlights[-1] == (2, Match(0, 5))
    assert recorder.match_status[-1] == "1/2"
    assert recorder.texts == [GREETING]


def test_next_moves_caret_and_enables_jump_back() -> None:
    adapter, recorder = make_adapter()
    adapter.search("hello")

    match = adapter.next_match()

    assert match is not None
    assert recorder.carets[-1] == match.end
    assert recorder.match_status[-1] == "2/2"
    assert recorder.jump_back[-1] is True


def test_jump_back_restores_caret_and_reports_unavailable() -> None:
    adapter, recorder = make_adapter()
    adapter.search("hello")
    adapter.caret_moved(7)
    adapter.previous_match()

    assert adapter.jump_back() == 7
    assert recorder.carets[-1] == 7
    assert recorder.jump_back[-1] is False

    assert adapter.jump_back() is None
    assert recorder.statuses[-1] == "jump_back_unavailable"


def test_caret_feedback_is_not_echoed_back() -> None:
    adapter, recorder = make_adapter()

    adapter.caret_moved(5)
    adapter.refresh()

    assert recorder.carets == [0]


def test_host_edit_is_not_echoed_back() -> None:
    adapter, recorder = make_adapter()
    adapter.search("hello")

    assert adapter.host_edit("hello there") is True

    assert recorder.texts == [GREETING]
    assert recorder.match_status[-1] == "1/1"


def test_rejected_host_edit_reports_status() -> None:
    adapter, recorder = make_adapter()

    assert adapter.host_edit("bad \ud800") is False

    assert recorder.statuses[-1] == "rejected::lone_surrogate"
    assert adapter.session.text == GREETING


def test_run_tool_commits_and_rerenders() -> None:
    adapter, recorder = make_adapter(with_tools=True)
    adapter.search("hello")

    result = adapter.run_tool(
        "replaceInDocument", {"search": "hello", "replacement": "Bye", "all": True}
    )

    assert result is not None
    assert recorder.statuses[-1] == "Replaced 2 occurrence(s) of 'hello'."
    assert recorder.texts[-1] == "Bye, world!\nThis is a test.\nBye again!"
    assert recorder.match_status[-1] == ""


def test_run_tool_reports_argument_errors() -> None:
    adapter, recorder = make_adapter(with_tools=True)

    assert adapter.run_tool("replaceInDocument", {"search": "x"}) is None
    assert adapter.run_tool("noSuchTool") is None

    assert all(status.startswith("tool_error::") for status in recorder.statuses[-2:])


def test_run_tool_requires_registry() -> None:
    adapter, _recorder = make_adapter()

    with pytest.raises(RuntimeError):
        adapter.run_tool("getInfo")


def test_adapter_emits_log_lines() -> None:
    adapter, recorder = make_adapter()

    adapter.search("hello")

    assert any(line.startswith("search ->") for line in recorder.logs)
    assert "query='hello'" in recorder.logs[-1]
