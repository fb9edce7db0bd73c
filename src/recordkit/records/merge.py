"""
Inherit / overwrite engine - fill a record from an ordered list of ancestors.

``inherit`` only fills fields that are still at their zero value, so the
output keeps anything it already set. ``overwrite`` replaces fields with the
ancestors' values. Both accumulate sequences and mappings from every ancestor
and recurse into nested records with the same mode.

Manifesto:
    - **Order matters:** The first ancestor with a usable value wins
    - **In place:** The output is mutated; frozen records are rejected
    - **Opt-in booleans:** Inherit merges booleans tagged ``<namespace>bool``;
      overwrite takes the first ancestor's value for any field in the namespace
    - **Accumulating containers:** Sequences append, mappings union

Architecture:
    ::

        inherit_with_tag(output, [a, b], "api")
            │
            ├── ensure_mutable(output)        → PointerRequiredError
            └── walk(output, "api") ── per field, dispatch on FieldKind:
                    SEQUENCE    output + a + b
                    MAPPING     output | a | b
                    BOOL        "<ns>bool" strategy (and / or), or first ancestor
                    INT ...     first non-zero ancestor
                    OPTIONAL    first non-None ancestor (shallow copy)
                    TIMESTAMP   first ancestor
                    RECORD      recurse with [a.sub, b.sub]

Examples:
    >>> from dataclasses import dataclass, field
    >>> @dataclass
    ... class Limits:
    ...     name: str = ""
    ...     retries: int = 0
    ...     hosts: list = field(default_factory=list)
    >>> out = Limits(name="local")
    >>> inherit(out, [Limits(name="base", retries=3, hosts=["a"])])
    >>> out
    Limits(name='local', retries=3, hosts=['a'])

Tags:
    merge, inheritance, defaults, reflection, recordkit

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, MutableMapping, Sequence
from datetime import datetime
from typing import Any

from recordkit.core.logging import LogContext, get_logger
from recordkit.records.kinds import FieldKind, is_record
from recordkit.records.walker import FieldDescriptor, ensure_mutable, walk

logger = get_logger(__name__)

# Suffix of the companion tag that opts a boolean field into merging.
BOOL_TAG_SUFFIX = "bool"

BOOL_STRATEGY_AND = "and"
BOOL_STRATEGY_OR = "or"

_MISSING = object()


def inherit(output: Any, ancestors: Sequence[Any]) -> None:
    """Fill zero-valued fields of ``output`` from ``ancestors``."""
    inherit_with_tag(output, ancestors, "")


def inherit_with_tag(output: Any, ancestors: Sequence[Any], tag_namespace: str) -> None:
    """Like ``inherit``, restricted to fields tagged in ``tag_namespace``.

    Raises:
        PointerRequiredError: ``output`` is a class or a frozen record
        InvalidRecordKindError: ``output`` is not a record
    """
    with LogContext(merge_mode="inherit", tag_namespace=tag_namespace or None):
        _merge(output, ancestors, tag_namespace, overwrite=False)


def overwrite(output: Any, ancestors: Sequence[Any]) -> None:
    """Replace fields of ``output`` with values from ``ancestors``."""
    overwrite_with_tag(output, ancestors, "")


def overwrite_with_tag(output: Any, ancestors: Sequence[Any], tag_namespace: str) -> None:
    """Like ``overwrite``, restricted to fields tagged in ``tag_namespace``.

    Raises:
        PointerRequiredError: ``output`` is a class or a frozen record
        InvalidRecordKindError: ``output`` is not a record
    """
    with LogContext(merge_mode="overwrite", tag_namespace=tag_namespace or None):
        _merge(output, ancestors, tag_namespace, overwrite=True)


def _merge(output: Any, ancestors: Sequence[Any], namespace: str, *, overwrite: bool) -> None:
    if not ancestors:
        return
    ensure_mutable(output)

    merger = _Merger(namespace, overwrite)
    for descriptor in walk(output, namespace):
        merger.merge_field(output, descriptor, ancestors)

    logger.debug(
        "records.merge.completed",
        record_type=type(output).__name__,
        ancestors=len(ancestors),
    )


class _Merger:
    """Per-kind merge rules for one inherit/overwrite pass."""

    def __init__(self, namespace: str, overwrite: bool):
        self.namespace = namespace
        self.overwrite = overwrite

    def merge_field(self, output: Any, field: FieldDescriptor, ancestors: Sequence[Any]) -> None:
        values = [getattr(ancestor, field.name, _MISSING) for ancestor in ancestors]
        current = field.get(output)
        kind = field.kind

        if kind is FieldKind.SEQUENCE:
            self.merge_sequence(output, field, current, values)
        elif kind is FieldKind.MAPPING:
            self.merge_mapping(output, field, current, values)
        elif kind is FieldKind.BOOL:
            self.merge_bool(output, field, current, values)
        elif kind in (FieldKind.COMPLEX, FieldKind.FLOAT, FieldKind.UINT):
            if self.overwrite or not current:
                found = _first(values, lambda v: _is_number(v) and v != 0)
                if found is not _MISSING:
                    field.set(output, found)
        elif kind is FieldKind.INT:
            if self.overwrite:
                found = _first(values, _is_number)
            else:
                found = _first(values, lambda v: _is_number(v) and v != 0) if not current else _MISSING
            if found is not _MISSING:
                field.set(output, found)
        elif kind is FieldKind.STRING:
            if self.overwrite or not current:
                found = _first(values, lambda v: isinstance(v, str) and v != "")
                if found is not _MISSING:
                    field.set(output, found)
        elif kind is FieldKind.OPTIONAL and field.elem_kind is not FieldKind.IGNORED:
            if self.overwrite or current is None:
                found = _first(values, lambda v: v is not None)
                if found is not _MISSING:
                    field.set(output, copy.copy(found))
        elif kind is FieldKind.TIMESTAMP:
            found = _first(values, lambda v: isinstance(v, datetime))
            if found is not _MISSING:
                field.set(output, found)
        elif kind is FieldKind.RECORD:
            subrecords = [v for v in values if is_record(v)]
            if subrecords and is_record(current):
                _merge(current, subrecords, self.namespace, overwrite=self.overwrite)
        else:
            logger.debug("records.merge.skipped", field=field.name, kind=kind.value)

    def merge_sequence(
        self, output: Any, field: FieldDescriptor, current: Any, values: list[Any]
    ) -> None:
        items = list(current) if current is not None else []
        for value in values:
            if isinstance(value, (list, tuple)):
                items.extend(value)
        field.set(output, tuple(items) if isinstance(current, tuple) else items)

    def merge_mapping(
        self, output: Any, field: FieldDescriptor, current: Any, values: list[Any]
    ) -> None:
        if not isinstance(current, MutableMapping):
            current = dict(current) if isinstance(current, Mapping) else {}
            field.set(output, current)
        for value in values:
            if isinstance(value, Mapping):
                current.update(value)

    def merge_bool(
        self, output: Any, field: FieldDescriptor, current: Any, values: list[Any]
    ) -> None:
        # Booleans only merge through a tag namespace
        if not self.namespace:
            return
        if self.overwrite:
            if values and isinstance(values[0], bool):
                field.set(output, values[0])
            return

        strategy = field.tag(self.namespace + BOOL_TAG_SUFFIX)
        if strategy is None:
            return
        booleans = [v for v in values if isinstance(v, bool)]
        if strategy == BOOL_STRATEGY_AND:
            if current and not all(booleans):
                field.set(output, False)
        elif not current and any(booleans):
            field.set(output, True)


def _first(values: list[Any], predicate: Any) -> Any:
    for value in values:
        if value is not _MISSING and predicate(value):
            return value
    return _MISSING


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, complex)) and not isinstance(value, bool)


__all__ = [
    "BOOL_STRATEGY_AND",
    "BOOL_STRATEGY_OR",
    "BOOL_TAG_SUFFIX",
    "inherit",
    "inherit_with_tag",
    "overwrite",
    "overwrite_with_tag",
]
