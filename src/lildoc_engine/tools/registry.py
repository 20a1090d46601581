"""Tool registry: stores tool specs and dispatches calls by name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Optional

from lildoc_engine.runtime.telemetry import span
from lildoc_engine.session import EditorSession

from .models import ToolResult, ToolSpec


@dataclass(slots=True)
class RegistryStats:
    tool_count: int
    mutating_count: int
    names: tuple[str, ...]


class ToolConflictError(RuntimeError):
    """Raised when a tool name is registered twice without ``replace``."""

    def __init__(self, spec: ToolSpec, existing: ToolSpec) -> None:
        super().__init__(f"Tool '{spec.name}' is already registered")
        self.spec = spec
        self.existing = existing


class UnknownToolError(KeyError):
    """Raised when a call names a tool that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Tool '{self.name}' is not registered"


class ToolArgumentError(ValueError):
    """Raised for missing, unknown, or mistyped tool arguments."""

    def __init__(self, message: str, *, tool: str, argument: Optional[str] = None) -> None:
        super().__init__(message)
        self.tool = tool
        self.argument = argument


class ToolRegistry:
    """Owns tool specs; each ``invoke`` is independent of earlier calls."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._tools: Dict[str, ToolSpec] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get(self, name: str) -> ToolSpec:
        try:
            return self._tools[name]
        except KeyError as exc:
            raise UnknownToolError(name) from exc

    def register(self, spec: ToolSpec, *, replace: bool = False) -> ToolSpec:
        with span(
            "tools::register",
            tool=spec.name,
            logger_name=self._logger_name,
        ):
            existing = self._tools.get(spec.name)
            if existing is not None and not replace:
                raise ToolConflictError(spec, existing)
            self._tools[spec.name] = spec
            self._revision += 1
            return spec

    def unregister(self, name: str) -> Optional[ToolSpec]:
        spec = self._tools.pop(name, None)
        if spec is not None:
            self._revision += 1
        return spec

    def iter_tools(self, *, mutating: Optional[bool] = None) -> Iterator[ToolSpec]:
        for spec in self._tools.values():
            if mutating is None or spec.mutating is mutating:
                yield spec

    def schemas(self) -> list[Dict[str, Any]]:
        return [spec.schema() for spec in self._tools.values()]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            tool_count=len(self._tools),
            mutating_count=sum(1 for spec in self._tools.values() if spec.mutating),
            names=tuple(sorted(self._tools)),
        )

    def bind_arguments(
        self, spec: ToolSpec, arguments: Optional[Mapping[str, Any]]
    ) -> Dict[str, Any]:
        provided = dict(arguments or {})
        unknown = sorted(key for key in provided if spec.parameter(key) is None)
        if unknown:
            raise ToolArgumentError(
                f"Tool '{spec.name}' got unexpected arguments {unknown}",
                tool=spec.name,
                argument=unknown[0],
            )

        bound: Dict[str, Any] = {}
        for parameter in spec.parameters:
            if parameter.name not in provided:
                if parameter.required:
                    raise ToolArgumentError(
                        f"Tool '{spec.name}' is missing argument '{parameter.name}'",
                        tool=spec.name,
                        argument=parameter.name,
                    )
                bound[parameter.name] = parameter.default
                continue
            try:
                bound[parameter.name] = parameter.coerce(provided[parameter.name])
            except ValueError as exc:
                raise ToolArgumentError(
                    f"Tool '{spec.name}' argument '{parameter.name}': {exc}",
                    tool=spec.name,
                    argument=parameter.name,
                ) from exc
        return bound

    def invoke(
        self,
        name: str,
        session: EditorSession,
        arguments: Optional[Mapping[str, Any]] = None,
    ) -> ToolResult:
        spec = self.get(name)
        with span(
            "tools::invoke",
            session=session.name,
            tool=spec.telemetry_name,
            logger_name=self._logger_name,
        ) as handle:
            bound = self.bind_arguments(spec, arguments)
            result = spec(session, **bound)
            handle.note("status", result.status)
            handle.note("affected", result.affected)
            return result


__all__ = [
    "RegistryStats",
    "ToolArgumentError",
    "ToolConflictError",
    "ToolRegistry",
    "UnknownToolError",
]
