from __future__ import annotations

from lildoc_engine.session import UndoEntry, UndoTimeline


def make_entry(label: str) -> UndoEntry:
    return UndoEntry(
        label=label, before_text="", after_text=label, caret_before=0, caret_after=0
    )


def test_undo_timeline_undo_redo_and_branching() -> None:
    timeline = UndoTimeline()
    timeline.push(make_entry("one"))
    timeline.push(make_entry("two"))

    assert timeline.undo() == make_entry("two")
    assert timeline.can_redo() is True

    timeline.push(make_entry("three"))
    assert timeline.can_redo() is False
    assert timeline.redo() is None
    assert len(timeline) == 2


def test_undo_timeline_drops_oldest_entries_past_limit() -> None:
    timeline = UndoTimeline(limit=2)
    for label in ("a", "b", "c"):
        timeline.push(make_entry(label))

    assert timeline.undo() == make_entry("c")
    assert timeline.undo() == make_entry("b")
    assert timeline.undo() is None
