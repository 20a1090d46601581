"""Engine configuration resolved from ``LILDOC_ENGINE_*`` environment variables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .telemetry import DEFAULT_LOGGER_NAME, env, env_flag


def _env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Knobs shared by sessions and the tool surface.

    ``strict_invariants`` turns cursor invariant violations into hard
    failures (development); otherwise the cursor is re-clamped and a warning
    event is recorded (production).
    """

    strict_invariants: bool = False
    find_lines_limit: int = 10
    history_limit: int = 100
    logger_name: str = DEFAULT_LOGGER_NAME

    def __post_init__(self) -> None:
        if self.find_lines_limit <= 0:
            raise ValueError("find_lines_limit must be positive")
        if self.history_limit <= 0:
            raise ValueError("history_limit must be positive")

    @classmethod
    def from_env(cls, *, logger_name: Optional[str] = None) -> "EngineConfig":
        return cls(
            strict_invariants=env_flag("STRICT", False),
            find_lines_limit=_env_int("FIND_LINES_LIMIT", 10),
            history_limit=_env_int("HISTORY_LIMIT", 100),
            logger_name=logger_name or DEFAULT_LOGGER_NAME,
        )


__all__ = ["EngineConfig"]
