"""
Field walker - ordered field descriptors for any record.

Every record operation (diff, inherit, overwrite, env binding, query
flattening, field accessors) starts by asking the walker which fields a record
has under a tag namespace. The walker is shallow: it describes one level of
fields and leaves recursion into nested records to its callers.

Manifesto:
    - **One walk, many engines:** Tag parsing and kind classification live here
    - **Declaration order:** Fields come back in the order they were declared
    - **Cached per type:** Type hints are resolved once per (type, namespace)
    - **Values stay live:** Descriptors read and write the instance on demand

Architecture:
    ::

        walk(record, "api")
            │
            ├── record_type(record)        → InvalidRecordKindError if not a record
            ├── _field_specs(cls)          → (name, annotation, metadata, kind)
            └── _descriptors(cls, "api")   → FieldDescriptor per tagged field
                                              (external name, modifiers, kind)

Examples:
    >>> from dataclasses import dataclass
    >>> from recordkit.records.tags import tagged
    >>> @dataclass
    ... class Planet:
    ...     name: str = tagged(default="", api="planet,omitempty")
    ...     mass: float = 0.0
    >>> [d.external_name for d in walk(Planet(), "api")]
    ['planet']
    >>> [d.external_name for d in walk(Planet())]
    ['name', 'mass']

Tags:
    reflection, dataclasses, pydantic, field-walker, recordkit

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any, get_type_hints

from recordkit.core.errors import InvalidRecordKindError, PointerRequiredError
from recordkit.core.timestamps import is_zero_timestamp
from recordkit.records.kinds import (
    UNSIGNED,
    FieldKind,
    UInt,
    classify,
    is_record,
    is_record_type,
    kind_of_value,
)
from recordkit.records.tags import lookup_tag, split_tag


@dataclass(frozen=True, slots=True)
class _FieldSpec:
    name: str
    annotation: Any
    metadata: Mapping[str, Any]
    kind: FieldKind
    elem_kind: FieldKind | None
    elem_annotation: Any


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One field of a record as seen through a tag namespace.

    Attributes:
        name: Declared attribute name
        external_name: Tag-derived name (declared name when no namespace is used)
        kind: Kind of the declared type
        annotation: Resolved type annotation
        modifiers: Tag modifiers after the external name (``omitempty``, ...)
        elem_kind: Kind of the wrapped type for ``OPTIONAL`` fields
        elem_annotation: Wrapped type for ``OPTIONAL`` fields
        metadata: Raw field metadata, for looking up companion tags
    """

    name: str
    external_name: str
    kind: FieldKind
    annotation: Any
    modifiers: tuple[str, ...] = ()
    elem_kind: FieldKind | None = None
    elem_annotation: Any = None
    metadata: Mapping[str, Any] = dataclasses.field(
        default_factory=dict, compare=False, hash=False, repr=False
    )

    @property
    def is_record(self) -> bool:
        """True when the field holds a nested record (directly or optionally)."""
        return self.kind is FieldKind.RECORD or (
            self.kind is FieldKind.OPTIONAL and self.elem_kind is FieldKind.RECORD
        )

    def get(self, record: Any) -> Any:
        return getattr(record, self.name, None)

    def set(self, record: Any, value: Any) -> None:
        setattr(record, self.name, value)

    def tag(self, namespace: str) -> str | None:
        """Raw value of another tag on the same field."""
        return lookup_tag(self.metadata, namespace)

    def value_kind(self, value: Any) -> FieldKind:
        """Kind of a present value, looking through optionals and ``Any``."""
        kind = self.kind
        if kind is FieldKind.OPTIONAL:
            kind = self.elem_kind or FieldKind.DYNAMIC
        if kind is FieldKind.DYNAMIC:
            return kind_of_value(value)
        return kind


def record_type(record: Any) -> type:
    """Return the record's class or raise ``InvalidRecordKindError``."""
    if not is_record(record):
        raise InvalidRecordKindError(
            f"expected a dataclass or pydantic model instance, got {type(record).__name__}"
        ).with_context(record_type=type(record).__name__)
    return type(record)


def walk(record: Any, tag_namespace: str = "") -> list[FieldDescriptor]:
    """Describe a record's fields in declaration order.

    With a namespace only fields carrying that tag are returned and their
    external name comes from the tag. Without one every field is returned
    under its declared name.
    """
    return list(_descriptors(record_type(record), tag_namespace))


def field_names(record: Any) -> frozenset[str]:
    """Declared names of every field on a record."""
    return frozenset(spec.name for spec in _field_specs(record_type(record)))


def ensure_mutable(record: Any) -> None:
    """Raise unless ``record`` is a record instance that can be assigned to."""
    if is_record_type(record):
        raise PointerRequiredError(
            f"expected a {record.__name__} instance, got the class itself"
        ).with_context(record_type=record.__name__)
    cls = record_type(record)
    frozen = False
    if dataclasses.is_dataclass(cls):
        frozen = cls.__dataclass_params__.frozen
    else:
        frozen = bool(cls.model_config.get("frozen"))
    if frozen:
        raise PointerRequiredError(
            f"{cls.__name__} is frozen and cannot be updated in place"
        ).with_context(record_type=cls.__name__)


def is_zero(value: Any) -> bool:
    """True when ``value`` is the zero value of its type."""
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float, complex)):
        return value == 0
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if isinstance(value, datetime):
        return is_zero_timestamp(value)
    if is_record(value):
        return all(is_zero(spec_value) for spec_value in _values(value))
    return False


def deep_equal(a: Any, b: Any) -> bool:
    """Type-sensitive equality (``1 != True``, ``1 != 1.0``)."""
    if type(a) is not type(b):
        return False
    return a == b


def _values(record: Any) -> list[Any]:
    return [getattr(record, spec.name, None) for spec in _field_specs(type(record))]


@lru_cache(maxsize=None)
def _field_specs(cls: type) -> tuple[_FieldSpec, ...]:
    specs: list[_FieldSpec] = []
    if dataclasses.is_dataclass(cls):
        try:
            hints = get_type_hints(cls, include_extras=True)
        except (NameError, TypeError):
            hints = {}
        for f in dataclasses.fields(cls):
            specs.append(_spec(f.name, hints.get(f.name, f.type), f.metadata))
    else:
        for name, info in cls.model_fields.items():
            annotation = info.annotation
            # pydantic moves Annotated metadata off the annotation
            if any(item is UNSIGNED for item in info.metadata):
                annotation = UInt
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            specs.append(_spec(name, annotation, extra))
    return tuple(specs)


def _spec(name: str, annotation: Any, metadata: Mapping[str, Any]) -> _FieldSpec:
    kind, elem_kind, elem_annotation = classify(annotation)
    return _FieldSpec(
        name=name,
        annotation=annotation,
        metadata=metadata,
        kind=kind,
        elem_kind=elem_kind,
        elem_annotation=elem_annotation,
    )


@lru_cache(maxsize=None)
def _descriptors(cls: type, namespace: str) -> tuple[FieldDescriptor, ...]:
    descriptors = []
    for spec in _field_specs(cls):
        if namespace:
            raw = lookup_tag(spec.metadata, namespace)
            if raw is None:
                continue
            external_name, modifiers = split_tag(raw)
        else:
            external_name, modifiers = spec.name, ()
        descriptors.append(
            FieldDescriptor(
                name=spec.name,
                external_name=external_name,
                kind=spec.kind,
                annotation=spec.annotation,
                modifiers=modifiers,
                elem_kind=spec.elem_kind,
                elem_annotation=spec.elem_annotation,
                metadata=spec.metadata,
            )
        )
    return tuple(descriptors)


__all__ = [
    "FieldDescriptor",
    "deep_equal",
    "ensure_mutable",
    "field_names",
    "is_zero",
    "record_type",
    "walk",
]
