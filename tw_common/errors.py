"""Error types raised while building or rendering widgets."""

from __future__ import annotations

from typing import Any, Mapping


def _jsonable(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Copy ``context`` into plain JSON types; anything else becomes its ``str``."""
    return {str(key): _jsonable(val) for key, val in context.items()}


class TWError(Exception):
    """Base for every termwidgets failure.

    ``context`` holds the details a caller needs to report the problem (option
    class, offending preset name, validation messages). It is normalized on
    construction so it can always be logged or serialized.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def describe(self) -> str:
        """One-line report: the message followed by ``key=value`` context pairs."""
        if not self.context:
            return str(self)
        details = "; ".join(
            f"{key}={_describe_value(value)}" for key, value in self.context.items()
        )
        return f"{self} ({details})"


def _describe_value(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


class ConfigurationError(TWError):
    """Widget options failed validation."""


class UnknownPresetError(ConfigurationError):
    """A named preset (border, spinner frames, progress style) does not exist."""


def error_to_payload(error: TWError) -> dict[str, Any]:
    """Flat mapping describing ``error``, suitable as structured log fields."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
