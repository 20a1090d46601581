"""UI-agnostic text search and mutation engine for plain documents."""

__all__ = [
    "adapters",
    "runtime",
    "session",
    "text",
    "tools",
]

__version__ = "0.1.0"
