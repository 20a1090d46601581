"""Boundary checks applied before text is accepted into a buffer."""

from __future__ import annotations

from typing import Union

TextInput = Union[str, bytes, bytearray]


class TextValidationError(ValueError):
    """Raised when incoming text is malformed (bad UTF-8, lone surrogates)."""

    def __init__(self, message: str, *, reason: str) -> None:
        super().__init__(message)
        self.reason = reason


def ensure_text(value: TextInput, *, field: str = "text") -> str:
    """Return ``value`` as a well-formed ``str`` or raise ``TextValidationError``."""

    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TextValidationError(
                f"{field} is not valid UTF-8 at byte {exc.start}",
                reason="invalid_utf8",
            ) from exc

    if not isinstance(value, str):
        raise TextValidationError(
            f"{field} must be str or UTF-8 bytes, got {type(value).__name__}",
            reason="wrong_type",
        )

    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise TextValidationError(
            f"{field} contains an unpaired surrogate at offset {exc.start}",
            reason="lone_surrogate",
        ) from exc
    return value


__all__ = ["TextInput", "TextValidationError", "ensure_text"]
