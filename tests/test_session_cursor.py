from __future__ import annotations

import pytest

from lildoc_engine.session import CursorInvariantError, JumpBackTracker, MatchCursor
from lildoc_engine.text import Match


def make_matches(count: int) -> tuple[Match, ...]:
    return tuple(Match(start=index * 4, length=3) for index in range(count))


def test_advance_without_matches_is_a_noop() -> None:
    cursor = MatchCursor()

    assert cursor.advance("next") is False
    assert cursor.advance("previous") is False
    assert cursor.index == 0


def test_advance_wraps_in_both_directions() -> None:
    cursor = MatchCursor(count=3, index=2)

    cursor.advance("next")
    assert cursor.index == 0

    cursor.advance("previous")
    assert cursor.index == 2


@pytest.mark.parametrize("start", [0, 1, 2, 3, 4])
def test_next_then_previous_restores_index(start: int) -> None:
    cursor = MatchCursor(count=5, index=start)

    cursor.advance("next")
    cursor.advance("previous")

    assert cursor.index == start


def test_advance_rejects_unknown_direction() -> None:
    with pytest.raises(ValueError):
        MatchCursor(count=1).advance("sideways")  # type: ignore[arg-type]


def test_recompute_clamps_and_resets() -> None:
    cursor = MatchCursor(count=5, index=4)

    cursor.recompute(7)
    assert cursor.index == 4

    cursor.recompute(2)
    assert cursor.index == 1

    cursor.recompute(0)
    assert cursor.index == 0


def test_current_reads_from_match_set() -> None:
    matches = make_matches(3)
    cursor = MatchCursor(count=3, index=1)

    assert cursor.current(matches) == matches[1]
    assert MatchCursor().current(()) is None


def test_strict_cursor_raises_on_invariant_violation() -> None:
    cursor = MatchCursor(count=2, index=5, strict=True)

    with pytest.raises(CursorInvariantError) as excinfo:
        cursor.ensure_valid()

    assert excinfo.value.index == 5
    assert excinfo.value.count == 2


def test_lenient_cursor_reclamps_on_invariant_violation() -> None:
    cursor = MatchCursor(count=2, index=5)

    cursor.ensure_valid()

    assert cursor.index == 1


def test_lenient_cursor_resyncs_with_a_shorter_match_set() -> None:
    cursor = MatchCursor(count=4, index=3)

    match = cursor.current(make_matches(2))

    assert cursor.count == 2
    assert match == make_matches(2)[1]


def test_jump_back_slot_lifecycle() -> None:
    tracker = JumpBackTracker()
    assert tracker.is_armed() is False
    assert tracker.consume() is None

    tracker.record_before_jump(4)
    tracker.record_before_jump(9)
    assert tracker.is_armed() is True

    assert tracker.consume() == 9
    assert tracker.consume() is None
    assert tracker.is_armed() is False


def test_jump_back_rejects_negative_offsets() -> None:
    with pytest.raises(ValueError):
        JumpBackTracker().record_before_jump(-1)
