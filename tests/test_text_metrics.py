from __future__ import annotations

import pytest

from lildoc_engine.text import TextValidationError, ensure_text, measure, split_lines
from lildoc_engine.text.metrics import line_count, word_count


def test_measure_counts_words_lines_and_characters() -> None:
    text = "Hello, world!\nThis is a test.\nHello again!"

    info = measure(text)

    assert (info.words, info.lines, info.characters) == (8, 3, len(text))
    assert info.describe() == f"Words: 8, Lines: 3, Characters: {len(text)}"


def test_empty_buffer_is_one_empty_line() -> None:
    info = measure("")

    assert (info.words, info.lines, info.characters) == (0, 1, 0)


def test_characters_count_grapheme_clusters() -> None:
    assert measure("cafe\u0301").characters == 4
    assert measure("hi \U0001F642").characters == 4
    assert measure("a\r\nb").characters == 3


def test_word_count_uses_any_whitespace() -> None:
    assert word_count("  tabs\tand\nnewlines  ") == 3


def test_line_count_treats_crlf_as_one_separator() -> None:
    assert line_count("a\r\nb\r\nc") == 3
    assert line_count("a\n") == 2


def test_split_lines_round_trips_mixed_separators() -> None:
    text = "a\r\nb\nc\rd"

    layout = split_lines(text)

    assert layout.lines == ("a", "b", "c", "d")
    assert layout.separators == ("\r\n", "\n", "\r")
    assert layout.join() == text


def test_dominant_separator_defaults_to_newline() -> None:
    assert split_lines("single").dominant_separator() == "\n"
    assert split_lines("a\r\nb\r\nc\nd").dominant_separator() == "\r\n"


def test_ensure_text_decodes_utf8_bytes() -> None:
    assert ensure_text(b"caf\xc3\xa9") == "café"


@pytest.mark.parametrize(
    ("value", "reason"),
    [
        (b"\xff\xfe", "invalid_utf8"),
        ("broken \ud800 text", "lone_surrogate"),
        (42, "wrong_type"),
    ],
)
def test_ensure_text_rejects_malformed_input(value: object, reason: str) -> None:
    with pytest.raises(TextValidationError) as excinfo:
        ensure_text(value)  # type: ignore[arg-type]

    assert excinfo.value.reason == reason
