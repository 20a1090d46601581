"""Host-side adapters that render session state."""

from .surface import SessionSurfaceAdapter, SurfaceHooks

__all__ = ["SessionSurfaceAdapter", "SurfaceHooks"]
