"""Search session state: cursor, jump-back, history, and the orchestrator."""

from .cursor import CursorInvariantError, Direction, MatchCursor
from .editor import EditorSession, Operation
from .jump_back import JumpBackTracker
from .state import CursorState, SessionView
from .undo import UndoEntry, UndoTimeline

__all__ = [
    "CursorInvariantError",
    "CursorState",
    "Direction",
    "EditorSession",
    "JumpBackTracker",
    "MatchCursor",
    "Operation",
    "SessionView",
    "UndoEntry",
    "UndoTimeline",
]
