"""
Diff engine - field-level differences between two records.

``calculate_diff`` compares two records field by field through a tag
namespace and reports what changed as a flat ``{path: value}`` mapping that
can be stored directly as a change document.

Manifesto:
    - **Flat output:** Nested records and maps become ``parent_child`` paths
    - **Removals are explicit:** A ``-`` prefix marks cleared fields
    - **Booleans only change:** ``False`` is a value, never a removal
    - **Storage friendly:** ``_`` joins paths since some document stores reject periods

Architecture:
    ::

        before ──┐
                 ├── walk(before, "api") ── per field:
        after  ──┘        │
                          ├─ missing / None in after   → "-path": old
                          ├─ equal                     → skip
                          ├─ zero in after (not bool)  → "-path": old
                          ├─ mapping                   → per key (path_key)
                          ├─ record                    → recurse (prefix=path)
                          └─ otherwise                 → "path": new
                  walk(after, "api") ── unvisited, non-zero → "path": new

Examples:
    >>> from dataclasses import dataclass, field
    >>> from recordkit.records.tags import tagged
    >>> @dataclass
    ... class Doc:
    ...     a: int = tagged(default=0, api="A")
    ...     labels: dict = tagged(default_factory=dict, api="map")
    >>> before = Doc(a=1, labels={"x": "1", "y": "2"})
    >>> after = Doc(a=2, labels={"x": "1", "z": "3"})
    >>> sorted(calculate_diff(before, after).items())
    [('-map_y', '2'), ('A', '2'), ('map_z', '3')]

Tags:
    diff, change-tracking, reflection, recordkit

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from recordkit.core.logging import LogContext, get_logger
from recordkit.core.settings import get_settings
from recordkit.records.kinds import FieldKind, is_record
from recordkit.records.sprint import sprint
from recordkit.records.walker import deep_equal, field_names, is_zero, walk

logger = get_logger(__name__)

REMOVED_PREFIX = "-"


def calculate_diff(
    before: Any,
    after: Any,
    tag_namespace: str | None = None,
) -> dict[str, str]:
    """Compute the differences between two records.

    Args:
        before: Original record
        after: Updated record
        tag_namespace: Namespace naming the fields to compare
            (default: ``settings.api_tag``)

    Returns:
        ``{path: new value}`` for added/changed fields and
        ``{"-" + path: old value}`` for removed ones; empty when equal.
    """
    settings = get_settings()
    namespace = tag_namespace or settings.api_tag
    differ = _Differ(namespace, settings.path_separator)
    with LogContext(diff_tag=namespace, record_type=type(before).__name__):
        differ.diff(before, after, "")
        logger.debug("records.diff.computed", changes=len(differ.result))
    return differ.result


class _Differ:
    def __init__(self, tag_namespace: str, separator: str):
        self.tag_namespace = tag_namespace
        self.separator = separator
        self.result: dict[str, str] = {}

    def join(self, prefix: str, name: str) -> str:
        if not prefix:
            return name
        if not name:
            return prefix
        return prefix + self.separator + name

    def removed(self, path: str, value: Any) -> None:
        self.result[REMOVED_PREFIX + path] = sprint(value)

    def diff(self, before: Any, after: Any, prefix: str) -> None:
        visited: set[str] = set()
        after_names = field_names(after)

        for descriptor in walk(before, self.tag_namespace):
            before_value = descriptor.get(before)
            if before_value is None or callable(before_value):
                continue
            kind = descriptor.value_kind(before_value)

            path = self.join(prefix, descriptor.external_name)
            visited.add(path)

            after_value = (
                getattr(after, descriptor.name) if descriptor.name in after_names else None
            )
            if after_value is None:
                if kind is not FieldKind.BOOL:
                    self.removed(path, before_value)
                continue

            if deep_equal(before_value, after_value):
                continue

            if kind is not FieldKind.BOOL and is_zero(after_value):
                self.removed(path, before_value)
                continue

            if kind is FieldKind.MAPPING:
                if isinstance(after_value, Mapping):
                    self.diff_mapping(before_value, after_value, path)
            elif kind is FieldKind.RECORD and is_record(after_value):
                self.diff(before_value, after_value, path)
            else:
                self.result[path] = sprint(after_value)

        for descriptor in walk(after, self.tag_namespace):
            after_value = descriptor.get(after)
            if after_value is None or callable(after_value):
                continue
            path = self.join(prefix, descriptor.external_name)
            if path in visited:
                continue
            visited.add(path)
            if not is_zero(after_value):
                self.result[path] = sprint(after_value)

    def diff_mapping(self, before: Mapping, after: Mapping, path: str) -> None:
        for key, before_value in before.items():
            key_path = self.join(path, sprint(key))
            if key in after:
                if not deep_equal(before_value, after[key]):
                    self.result[key_path] = sprint(after[key])
            else:
                self.removed(key_path, before_value)

        for key, after_value in after.items():
            if key not in before:
                self.result[self.join(path, sprint(key))] = sprint(after_value)


__all__ = ["REMOVED_PREFIX", "calculate_diff"]
