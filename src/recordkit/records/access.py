"""Field accessors: list field paths and resolve dotted paths to values."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from recordkit.core.errors import FieldResolutionError
from recordkit.core.settings import get_settings
from recordkit.records.kinds import is_record
from recordkit.records.walker import field_names, walk

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")

PATH_SEPARATOR = "."


def get_field_names(record: Any) -> list[str]:
    """Every declared field path of ``record``, depth first.

    >>> from dataclasses import dataclass, field
    >>> @dataclass
    ... class Moon:
    ...     name: str = ""
    >>> @dataclass
    ... class Planet:
    ...     name: str = ""
    ...     moon: Moon = field(default_factory=Moon)
    >>> get_field_names(Planet())
    ['name', 'moon', 'moon.name']
    """
    names: list[str] = []
    _collect_names(record, "", "", names)
    return names


def get_api_field_names(record: Any) -> list[str]:
    """Field paths built from the ``api`` tag."""
    return get_tag_field_names(record, get_settings().api_tag)


def get_tag_field_names(record: Any, tag: str) -> list[str]:
    """Field paths built from ``tag``; untagged fields are left out."""
    names: list[str] = []
    _collect_names(record, tag, "", names)
    return names


def _collect_names(record: Any, tag: str, prefix: str, names: list[str]) -> None:
    for descriptor in walk(record, tag):
        path = _join(prefix, descriptor.external_name)
        if descriptor.external_name:
            names.append(path)

        if descriptor.is_record:
            value = descriptor.get(record)
            if is_record(value):
                _collect_names(value, tag, path, names)


def get_field_value(record: Any, path: str) -> Any:
    """Resolve a dotted ``path`` against records and mappings.

    Each segment is looked up by its exact name, then as snake_case
    (``createdAt`` → ``created_at``), then capitalised. Returns None when
    any segment cannot be resolved.
    """
    value = record
    for segment in path.split(PATH_SEPARATOR):
        if value is None:
            return None
        _, value = _lookup(value, segment)
    return value


def require_field_value(record: Any, path: str) -> Any:
    """Like ``get_field_value`` but raise when the path does not resolve.

    A field that exists and holds None is still returned as None.

    Raises:
        FieldResolutionError: A segment names no field or key
    """
    value = record
    resolved: list[str] = []
    for segment in path.split(PATH_SEPARATOR):
        found, value = _lookup(value, segment)
        if not found:
            raise FieldResolutionError(
                f"cannot resolve {segment!r} in {path!r}"
            ).with_context(
                record_type=type(record).__name__,
                field_path=path,
                resolved=PATH_SEPARATOR.join(resolved),
            )
        resolved.append(segment)
    return value


def _lookup(value: Any, segment: str) -> tuple[bool, Any]:
    if isinstance(value, Mapping):
        if segment in value:
            return True, value[segment]
        return False, None
    if not is_record(value):
        return False, None

    names = field_names(value)
    for candidate in _candidates(segment):
        if candidate in names:
            return True, getattr(value, candidate)
    return False, None


def _candidates(segment: str) -> list[str]:
    candidates = [segment]
    snake = _CAMEL_BOUNDARY.sub(r"_\1", segment).lower()
    if snake not in candidates:
        candidates.append(snake)
    capitalised = segment[:1].upper() + segment[1:]
    if capitalised not in candidates:
        candidates.append(capitalised)
    return candidates


def _join(prefix: str, name: str) -> str:
    if not prefix:
        return name
    if not name:
        return prefix
    return prefix + PATH_SEPARATOR + name


__all__ = [
    "get_api_field_names",
    "get_field_names",
    "get_field_value",
    "get_tag_field_names",
    "require_field_value",
]
