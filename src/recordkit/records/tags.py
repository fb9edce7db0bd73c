"""Field tags.

A tag is a ``namespace -> value`` annotation on a record field. The value's
first comma-separated part is the field's external name in that namespace;
the remaining parts are modifiers (``"created,omitempty"``).

Tags are stored in the field's metadata, either one key per namespace::

    @dataclass
    class Planet:
        name: str = tagged(default="", api="name", env="PLANET_NAME")

or as a single struct-tag string under the ``"tags"`` key::

    name: str = field(default="", metadata={"tags": 'api:"name" env:"PLANET_NAME"'})

Pydantic models carry the same mapping in ``Field(json_schema_extra=...)``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

# Metadata key holding a struct-tag string.
STRUCT_TAGS_KEY = "tags"


def parse_tags(tags: str) -> dict[str, str]:
    """Parse a struct-tag string into ``{namespace: raw value}``.

    Namespaces are lower-cased; the first occurrence of a namespace wins.

    >>> parse_tags('api:"name,omitempty" Env:"PLANET"')
    {'api': 'name,omitempty', 'env': 'PLANET'}
    """
    result: dict[str, str] = {}
    name = ""
    buffer: list[str] = []
    in_title, in_value = True, False
    for c in tags:
        if in_value:
            if c == '"':
                in_value = False
                result.setdefault(name, "".join(buffer))
                buffer = []
            else:
                buffer.append(c)
        elif in_title:
            if c == ":":
                in_title = False
                name = "".join(buffer).strip().lower()
                buffer = []
            else:
                buffer.append(c)
        elif c == '"':
            in_value = True
        elif c == " ":
            in_title = True
    return result


def get_tag_value(tags: str, name: str) -> tuple[str, bool]:
    """Return ``(external name, found)`` for ``name`` in a struct-tag string."""
    raw = parse_tags(tags).get(name)
    if raw is None:
        return "", False
    return split_tag(raw)[0], True


def split_tag(raw: str) -> tuple[str, tuple[str, ...]]:
    """Split a raw tag value into its external name and modifiers."""
    name, *modifiers = raw.split(",")
    return name, tuple(modifiers)


def lookup_tag(metadata: Mapping[str, Any] | None, namespace: str) -> str | None:
    """Return the raw tag value for ``namespace``, or None when untagged."""
    if not metadata:
        return None
    value = metadata.get(namespace)
    if isinstance(value, str):
        return value
    struct_tags = metadata.get(STRUCT_TAGS_KEY)
    if isinstance(struct_tags, str):
        return parse_tags(struct_tags).get(namespace.lower())
    return None


def tags(**namespaces: str) -> dict[str, str]:
    """Build a tag mapping, e.g. for pydantic ``Field(json_schema_extra=...)``."""
    return dict(namespaces)


def tagged(
    *,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    **namespaces: str,
) -> Any:
    """Declare a tagged dataclass field."""
    return dataclasses.field(
        default=default,
        default_factory=default_factory,
        metadata=tags(**namespaces),
    )


__all__ = [
    "STRUCT_TAGS_KEY",
    "get_tag_value",
    "lookup_tag",
    "parse_tags",
    "split_tag",
    "tagged",
    "tags",
]
