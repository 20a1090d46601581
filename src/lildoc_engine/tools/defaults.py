"""Built-in document tools exposed to a tool-calling surface."""

from __future__ import annotations

from typing import Sequence

from lildoc_engine.session import EditorSession
from lildoc_engine.text.operations import INSERT_POSITIONS

from .models import ToolParameter, ToolResult, ToolSpec
from .registry import ToolRegistry


def get_info(session: EditorSession) -> ToolResult:
    return ToolResult(status="ok", message=session.info().describe())


def find_in_document(session: EditorSession, query: str) -> ToolResult:
    hits = session.find_lines(query, limit=session.config.find_lines_limit)
    if not hits:
        return ToolResult(status="no_match", message="No matches found.")
    return ToolResult(
        status="ok",
        message="\n".join(hit.describe() for hit in hits),
        affected=len(hits),
    )


def count_pattern(session: EditorSession, pattern: str) -> ToolResult:
    count = session.count_occurrences(pattern)
    return ToolResult(
        status="ok", message=f"{pattern}: {count} occurrences", affected=count
    )


def replace_in_document(
    session: EditorSession, search: str, replacement: str, all: bool
) -> ToolResult:
    count = session.replace(search, replacement, replace_all=all)
    if count == 0:
        return ToolResult(status="no_match", message=f"No match found for '{search}'.")
    if all:
        message = f"Replaced {count} occurrence(s) of '{search}'."
    else:
        message = f"Replaced 1 occurrence of '{search}'."
    return ToolResult(status="ok", message=message, affected=count)


def wrap_matches(
    session: EditorSession, search: str, prefix: str, suffix: str
) -> ToolResult:
    count = session.wrap_matches(search, prefix, suffix)
    if count == 0:
        return ToolResult(status="no_match", message=f"No match found for '{search}'.")
    return ToolResult(
        status="ok",
        message=f"Wrapped {count} occurrence(s) of '{search}'.",
        affected=count,
    )


def prefix_lines(session: EditorSession, prefix: str, matching: str) -> ToolResult:
    count = session.prefix_lines(prefix, matching or None)
    if count == 0:
        return ToolResult(status="no_match", message="No lines matched.")
    return ToolResult(
        status="ok",
        message=f"Added prefix '{prefix}' to {count} line(s).",
        affected=count,
    )


def insert_line(
    session: EditorSession, content: str, line: int, position: str
) -> ToolResult:
    count = session.insert_line(content, line, position)  # type: ignore[arg-type]
    return ToolResult(
        status="ok", message=f"Inserted a line {position} line {line}.", affected=count
    )


def prepend_to_document(session: EditorSession, text: str) -> ToolResult:
    count = session.prepend(text)
    if count == 0:
        return ToolResult(status="noop", message="Nothing to prepend.")
    return ToolResult(status="ok", message="Prepended text to document.", affected=count)


def append_to_document(session: EditorSession, text: str) -> ToolResult:
    count = session.append(text)
    if count == 0:
        return ToolResult(status="noop", message="Nothing to append.")
    return ToolResult(status="ok", message="Appended text to document.", affected=count)


DEFAULT_TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="getInfo",
        handler=get_info,
        description="Get document statistics: word count, line count, and character count.",
    ),
    ToolSpec(
        name="findInDocument",
        handler=find_in_document,
        description="Search the document for a word or phrase. Returns matching lines with line numbers.",
        parameters=(
            ToolParameter("query", description="The word or phrase to search for"),
        ),
    ),
    ToolSpec(
        name="countPattern",
        handler=count_pattern,
        description="Count how many times a word or phrase appears in the document.",
        parameters=(
            ToolParameter("pattern", description="The word or phrase to count"),
        ),
    ),
    ToolSpec(
        name="replaceInDocument",
        handler=replace_in_document,
        description="Find and replace text in the document. Can replace the first match or all matches.",
        parameters=(
            ToolParameter("search", description="The text to find"),
            ToolParameter("replacement", description="The replacement text"),
            ToolParameter(
                "all",
                type="boolean",
                description="Replace all occurrences (true) or just the first (false)",
                required=False,
                default=False,
            ),
        ),
        mutating=True,
    ),
    ToolSpec(
        name="wrapMatches",
        handler=wrap_matches,
        description=(
            "Find every occurrence of a word or phrase and wrap each one with a "
            "prefix and suffix. Example: wrap 'TODO' with '**' and '**' to bold "
            "every TODO in Markdown."
        ),
        parameters=(
            ToolParameter("search", description="The text to search for"),
            ToolParameter("prefix", description="Text to insert before each match"),
            ToolParameter("suffix", description="Text to insert after each match"),
        ),
        mutating=True,
    ),
    ToolSpec(
        name="prefixLines",
        handler=prefix_lines,
        description=(
            "Add a prefix to every line in the document, or only lines containing "
            "a specific word. Useful for adding bullet points or markers."
        ),
        parameters=(
            ToolParameter(
                "prefix",
                description="The prefix to add to each matching line (e.g. '- ' for bullets)",
            ),
            ToolParameter(
                "matching",
                description="Only prefix lines containing this text. Leave empty to prefix all lines.",
                required=False,
                default="",
            ),
        ),
        mutating=True,
    ),
    ToolSpec(
        name="insertLine",
        handler=insert_line,
        description="Insert a new line before or after a given line number (1-based).",
        parameters=(
            ToolParameter("content", description="Text of the new line"),
            ToolParameter("line", type="integer", description="1-based line number"),
            ToolParameter(
                "position",
                description="Insert 'before' or 'after' the given line",
                required=False,
                default="before",
                choices=INSERT_POSITIONS,
            ),
        ),
        mutating=True,
    ),
    ToolSpec(
        name="prependToDocument",
        handler=prepend_to_document,
        description="Add text to the very beginning of the document.",
        parameters=(ToolParameter("text", description="The text to prepend"),),
        mutating=True,
    ),
    ToolSpec(
        name="appendToDocument",
        handler=append_to_document,
        description="Add text to the very end of the document.",
        parameters=(ToolParameter("text", description="The text to append"),),
        mutating=True,
    ),
)


def load_default_tools(
    registry: ToolRegistry,
    *,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
    replace: bool = False,
) -> ToolRegistry:
    """Register the built-in tools, optionally filtered by name."""

    filters = _build_filters(include, exclude)
    for spec in DEFAULT_TOOLS:
        if _selected(spec.name, filters):
            registry.register(spec, replace=replace)
    return registry


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(name: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and name not in include:
        return False
    return name not in exclude


__all__ = ["DEFAULT_TOOLS", "load_default_tools"]
