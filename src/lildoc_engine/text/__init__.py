"""Pure text logic: line model, metrics, matching, and mutations."""

from .lines import LineLayout, split_lines
from .matching import (
    LineHit,
    Match,
    MatchSet,
    count_occurrences,
    find_lines,
    find_matches,
    find_occurrences,
)
from .metrics import DocumentInfo, measure
from .operations import (
    EditResult,
    InsertPosition,
    append,
    insert_line,
    prefix_lines,
    prepend,
    replace,
    wrap_matches,
)
from .validation import TextValidationError, ensure_text

__all__ = [
    "DocumentInfo",
    "EditResult",
    "InsertPosition",
    "LineHit",
    "LineLayout",
    "Match",
    "MatchSet",
    "TextValidationError",
    "append",
    "count_occurrences",
    "ensure_text",
    "find_lines",
    "find_matches",
    "find_occurrences",
    "insert_line",
    "measure",
    "prefix_lines",
    "prepend",
    "replace",
    "split_lines",
    "wrap_matches",
]
