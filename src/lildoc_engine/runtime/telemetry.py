"""Structured logging for sessions and tools, built on telelog.

Every line the engine writes names the session it concerns, and the tool when
one is running, so a transcript of several documents stays readable:

``configure(...)`` -- pick an output profile (explicit config or preset)
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, session=..., tool=..., **fields)`` -- one structured line
``span(operation, session=..., tool=...)`` -- profile a mutation or tool call
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "LILDOC_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "lildoc_engine")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


@dataclass(frozen=True, slots=True)
class OutputProfile:
    """Where engine logs go and how they are formatted.

    ``buffer_size`` of zero writes every line immediately.
    """

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: int = 0

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level.upper())
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        config.with_json_format(self.json)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(True)
        return config

    @classmethod
    def from_env(cls) -> "OutputProfile":
        return cls(
            level=env("LOG_LEVEL") or "INFO",
            console=not env_flag("DISABLE_CONSOLE", False),
            colored=not env_flag("NO_COLOR", False),
            json=env_flag("LOG_JSON", False),
            log_file=env("LOG_FILE") or "",
            buffer_size=(
                int(env("LOG_BUFFER_SIZE") or "2048")
                if env_flag("LOG_BUFFERED", False)
                else 0
            ),
        )


PRESETS: Dict[str, OutputProfile] = {
    "development": OutputProfile(level="DEBUG"),
    "production": OutputProfile(
        console=False, log_file="lildoc_engine.log", buffer_size=2048
    ),
    "performance": OutputProfile(
        level="DEBUG",
        console=False,
        json=True,
        log_file="lildoc_engine-performance.log",
        buffer_size=2048,
    ),
}


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``config`` is an explicit ``tl.Config``; ``preset`` names one of
    ``PRESETS``. ``LILDOC_ENGINE_LOG_FILE`` overrides a preset's log file.
    With neither argument the profile is read from the environment.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset is not None:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset is not None:
        try:
            profile = PRESETS[preset.lower()]
        except KeyError:
            raise ValueError(f"Unknown preset '{preset}'.") from None
        if env("LOG_FILE"):
            profile = replace(profile, log_file=env("LOG_FILE") or "")
        config = profile.build()
    elif config is None:
        config = OutputProfile.from_env().build()

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for the engine."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = OutputProfile.from_env().build()
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _scope(
    session: Optional[str], tool: Optional[str], extra: Dict[str, Any]
) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    if session:
        fields["session"] = session
    if tool:
        fields["tool"] = tool
    for key, value in extra.items():
        if value is not None:
            fields[key] = _stringify(value)
    return fields


def _emit(logger: Any, level: str, message: str, fields: Dict[str, str]) -> None:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, list(fields.items()))
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {fields}")


def record_event(
    name: str,
    *,
    level: str = "info",
    session: Optional[str] = None,
    tool: Optional[str] = None,
    logger_name: Optional[str] = None,
    **fields: Any,
) -> None:
    """Emit an ``event::<name>`` line scoped to a session and/or tool."""

    payload = _scope(session, tool, {"event": name, **fields})
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class OperationSpan:
    """Yielded by ``span``; ``note`` records outcome fields for the closing line."""

    operation: str
    session: Optional[str] = None
    tool: Optional[str] = None
    outcome: Dict[str, str] = field(default_factory=dict)

    @property
    def component(self) -> str:
        return self.operation.partition("::")[0]

    def note(self, key: str, value: Any) -> None:
        self.outcome[key] = _stringify(value)

    def fields(self) -> Dict[str, str]:
        return _scope(self.session, self.tool, {"operation": self.operation, **self.outcome})


@contextmanager
def span(
    operation: str,
    *,
    session: Optional[str] = None,
    tool: Optional[str] = None,
    logger_name: Optional[str] = None,
) -> Iterator[OperationSpan]:
    """Profile ``operation`` (``"<component>::<action>"``) and log its outcome.

    The session and tool names are pushed as logger context for the duration
    of the block. A clean exit writes a ``span::done`` debug line with the
    noted outcome; an exception writes ``span::error`` and propagates.
    """

    log = get_logger(logger_name)
    handle = OperationSpan(operation, session=session, tool=tool)
    context = _scope(session, tool, {})
    for key, value in context.items():
        log.add_context(key, value)
    try:
        with log.track_component(handle.component), log.profile(operation):
            try:
                yield handle
            except Exception as exc:
                failure = {**handle.fields(), "error": type(exc).__name__, "reason": str(exc)}
                _emit(log, "error", "span::error", failure)
                raise
        _emit(log, "debug", "span::done", handle.fields())
    finally:
        for key in context:
            log.remove_context(key)


configure()

__all__ = [
    "DEFAULT_LOGGER_NAME",
    "ENV_PREFIX",
    "OperationSpan",
    "OutputProfile",
    "PRESETS",
    "configure",
    "env",
    "env_flag",
    "get_logger",
    "record_event",
    "span",
]
