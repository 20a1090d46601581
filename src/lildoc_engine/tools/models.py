"""Dataclasses describing callable document tools and their arguments."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Literal, Mapping, Optional

ParameterType = Literal["string", "integer", "boolean"]
PARAMETER_TYPES: tuple[str, ...] = ("string", "integer", "boolean")
_TRUE_WORDS = {"true", "yes", "1", "on"}
_FALSE_WORDS = {"false", "no", "0", "off"}


@dataclass(frozen=True, slots=True)
class ToolParameter:
    """One named, typed argument of a tool."""

    name: str
    type: ParameterType = "string"
    description: str = ""
    required: bool = True
    default: Any = None
    choices: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("parameter name cannot be empty")
        if self.type not in PARAMETER_TYPES:
            raise ValueError(f"Unsupported parameter type '{self.type}'")

    def coerce(self, value: Any) -> Any:
        """Convert a loosely-typed argument, raising ``ValueError`` on mismatch."""

        if self.type == "boolean":
            if isinstance(value, bool):
                return value
            if isinstance(value, str) and value.strip().lower() in _TRUE_WORDS:
                return True
            if isinstance(value, str) and value.strip().lower() in _FALSE_WORDS:
                return False
            raise ValueError(f"expected a boolean, got {value!r}")

        if self.type == "integer":
            if isinstance(value, bool):
                raise ValueError(f"expected an integer, got {value!r}")
            if isinstance(value, int):
                return value
            if isinstance(value, str):
                try:
                    return int(value.strip())
                except ValueError as exc:
                    raise ValueError(f"expected an integer, got {value!r}") from exc
            raise ValueError(f"expected an integer, got {value!r}")

        if not isinstance(value, str):
            raise ValueError(f"expected a string, got {type(value).__name__}")
        if self.choices and value not in self.choices:
            raise ValueError(f"expected one of {list(self.choices)}, got {value!r}")
        return value

    def schema(self) -> Dict[str, Any]:
        entry: Dict[str, Any] = {"type": self.type, "description": self.description}
        if self.choices:
            entry["enum"] = list(self.choices)
        if not self.required and self.default is not None:
            entry["default"] = self.default
        return entry


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Outcome of a tool call, relayed back to the calling agent."""

    status: str
    message: str
    affected: int = 0

    @property
    def ok(self) -> bool:
        return self.status == "ok"


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Named entry point plus the argument contract a tool surface exposes."""

    name: str
    handler: Callable[..., ToolResult]
    description: str = ""
    parameters: tuple[ToolParameter, ...] = ()
    mutating: bool = False
    telemetry_name: str | None = None
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ToolSpec name cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        names = [parameter.name for parameter in self.parameters]
        if len(names) != len(set(names)):
            raise ValueError(f"Tool '{self.name}' declares duplicate parameters")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", f"tools.{self.name}")

    def parameter(self, name: str) -> Optional[ToolParameter]:
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None

    def schema(self) -> Dict[str, Any]:
        """JSON-schema style description for tool-calling surfaces."""

        return {
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": "object",
                "properties": {p.name: p.schema() for p in self.parameters},
                "required": [p.name for p in self.parameters if p.required],
            },
        }

    def __call__(self, *args: object, **kwargs: object) -> ToolResult:
        return self.handler(*args, **kwargs)


__all__ = [
    "PARAMETER_TYPES",
    "ParameterType",
    "ToolParameter",
    "ToolResult",
    "ToolSpec",
]
