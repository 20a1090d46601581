"""Named document tools for agent and scripting surfaces."""

from .models import ToolParameter, ToolResult, ToolSpec
from .registry import (
    RegistryStats,
    ToolArgumentError,
    ToolConflictError,
    ToolRegistry,
    UnknownToolError,
)
from .defaults import DEFAULT_TOOLS, load_default_tools

__all__ = [
    "DEFAULT_TOOLS",
    "RegistryStats",
    "ToolArgumentError",
    "ToolConflictError",
    "ToolParameter",
    "ToolRegistry",
    "ToolResult",
    "ToolSpec",
    "UnknownToolError",
    "load_default_tools",
]
