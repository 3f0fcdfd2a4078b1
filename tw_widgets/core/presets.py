"""Lookup of process-wide named presets (borders, frame sets, bar styles)."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, TypeVar

from tw_common.errors import UnknownPresetError

V = TypeVar("V")


def freeze(presets: dict[str, V]) -> Mapping[str, V]:
    """Return a read-only view over a preset table."""
    return MappingProxyType(presets)


def resolve_preset(kind: str, presets: Mapping[str, V], name: str | None, default: str) -> V:
    """Return the preset called ``name``, or ``default`` when no name is given.

    Raises:
        UnknownPresetError: if ``name`` is not one of the known presets.
    """
    key = default if name is None else name
    try:
        return presets[key]
    except KeyError as exc:
        raise UnknownPresetError(
            f"Unknown {kind} preset: {key!r}",
            context={"kind": kind, "name": key, "available": sorted(presets)},
            cause=exc,
        ) from exc
