from __future__ import annotations

import pytest

from lildoc_engine.text import (
    append,
    count_occurrences,
    insert_line,
    prefix_lines,
    prepend,
    replace,
    wrap_matches,
)


def test_replace_first_is_case_insensitive() -> None:
    result = replace("Cat cat CAT", "cat", "dog")

    assert result.text == "dog cat CAT"
    assert result.affected == 1


def test_replace_all_counts_every_occurrence() -> None:
    result = replace("Cat cat CAT", "cat", "dog", replace_all=True)

    assert result.text == "dog dog dog"
    assert result.affected == 3


def test_replace_matches_inside_identifiers() -> None:
    result = replace("foobar foo", "foo", "baz", replace_all=True)

    assert result.text == "bazbar baz"
    assert result.affected == 2


def test_replace_never_rematches_inserted_text() -> None:
    result = replace("a a", "a", "aa", replace_all=True)

    assert result.text == "aa aa"
    assert result.affected == 2


def test_replace_without_occurrences_is_a_noop() -> None:
    assert replace("hello", "zzz", "x").affected == 0
    assert replace("hello", "zzz", "x").text == "hello"
    assert replace("hello", "", "x", replace_all=True).affected == 0


@pytest.mark.parametrize(
    ("buffer", "search", "replacement"),
    [
        ("TODO one, todo two, ToDo three", "todo", "DONE"),
        ("abab ab", "ab", "xyz"),
        ("b b b", "b", "aba"),
    ],
)
def test_replace_all_produces_at_least_as_many_replacements(
    buffer: str, search: str, replacement: str
) -> None:
    result = replace(buffer, search, replacement, replace_all=True)

    assert count_occurrences(result.text, replacement) >= count_occurrences(
        buffer, search
    )


def test_wrap_matches_keeps_original_casing() -> None:
    result = wrap_matches("TODO: a\ntodo: b", "todo", "**", "**")

    assert result.text == "**TODO**: a\n**todo**: b"
    assert result.affected == 2


def test_wrap_matches_without_occurrences() -> None:
    result = wrap_matches("plain", "TODO", "[", "]")

    assert result.text == "plain"
    assert result.affected == 0


def test_prefix_lines_skips_empty_lines() -> None:
    result = prefix_lines("a\nb\n\nc", "- ")

    assert result.text == "- a\n- b\n\n- c"
    assert result.affected == 3


def test_prefix_lines_with_matching_filter() -> None:
    result = prefix_lines("Buy milk\nCall mom\nbuy eggs", "[ ] ", "BUY")

    assert result.text == "[ ] Buy milk\nCall mom\n[ ] buy eggs"
    assert result.affected == 2


def test_prefix_lines_preserves_separators() -> None:
    assert prefix_lines("a\r\nb\rc", "> ").text == "> a\r\n> b\r> c"


def test_prefix_lines_reapplied_adds_one_prefix_per_line() -> None:
    buffer = "one\ntwo\n\nthree"
    once = prefix_lines(buffer, "> ").text

    twice = prefix_lines(once, "> ").text

    assert len(twice) == len(once) + len("> ") * 3
    assert twice.splitlines()[0] == "> > one"


def test_insert_line_clamps_low_line_numbers() -> None:
    assert insert_line("a\nb\nc", "X", 0, "before").text == "X\na\nb\nc"
    assert insert_line("a\nb\nc", "X", -3, "after").text == "X\na\nb\nc"


def test_insert_line_clamps_high_line_numbers() -> None:
    result = insert_line("a\nb\nc", "X", 99, "before")

    assert result.text == "a\nb\nc\nX"
    assert result.affected == 1


def test_insert_line_before_and_after() -> None:
    assert insert_line("a\nb\nc", "X", 2, "before").text == "a\nX\nb\nc"
    assert insert_line("a\nb\nc", "X", 2, "after").text == "a\nb\nX\nc"
    assert insert_line("a\nb\nc", "X", 3, "after").text == "a\nb\nc\nX"


def test_insert_line_uses_document_separator() -> None:
    assert insert_line("a\r\nb", "X", 1, "after").text == "a\r\nX\r\nb"


def test_insert_line_rejects_unknown_position() -> None:
    with pytest.raises(ValueError):
        insert_line("a", "X", 1, "middle")  # type: ignore[arg-type]


def test_prepend_and_append() -> None:
    assert prepend("body", "# Title\n").text == "# Title\nbody"
    assert append("body", "\n---\nEnd of notes.").text == "body\n---\nEnd of notes."
    assert append("body", "").affected == 0
