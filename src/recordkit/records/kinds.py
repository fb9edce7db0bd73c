"""Field kind classification.

Every field a record operation touches is reduced to one ``FieldKind`` so the
engines can dispatch on a closed set of cases instead of on open-ended Python
types. Classification is driven by the field's type annotation; ``DYNAMIC``
fields (annotated ``Any``) are classified again from their runtime value.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel, Field


class _Unsigned:
    """Annotation marker for unsigned integers."""

    def __repr__(self) -> str:
        return "UNSIGNED"


UNSIGNED = _Unsigned()

# Integer field that only holds non-negative values. Pydantic enforces the
# bound when it validates the value.
UInt = Annotated[int, UNSIGNED, Field(ge=0)]


class FieldKind(str, Enum):
    """Closed classification of a field's type."""

    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    COMPLEX = "complex"
    STRING = "string"
    TIMESTAMP = "timestamp"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    RECORD = "record"
    OPTIONAL = "optional"
    DYNAMIC = "dynamic"
    IGNORED = "ignored"

    @property
    def is_scalar(self) -> bool:
        return self in _SCALAR_KINDS


_SCALAR_KINDS = frozenset(
    {
        FieldKind.BOOL,
        FieldKind.INT,
        FieldKind.UINT,
        FieldKind.FLOAT,
        FieldKind.COMPLEX,
        FieldKind.STRING,
        FieldKind.DYNAMIC,
    }
)

_SEQUENCE_ORIGINS = (list, tuple, collections.abc.Sequence, collections.abc.MutableSequence)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


def is_record_type(tp: Any) -> bool:
    """True for dataclass types and pydantic model types."""
    if not isinstance(tp, type):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def is_record(value: Any) -> bool:
    """True for dataclass instances and pydantic model instances."""
    return not isinstance(value, type) and is_record_type(type(value))


def classify(annotation: Any) -> tuple[FieldKind, FieldKind | None, Any]:
    """Classify an annotation.

    Returns ``(kind, elem_kind, elem_annotation)``; the last two are only set
    for ``OPTIONAL`` and describe the wrapped type.
    """
    origin = get_origin(annotation)

    if origin is Annotated:
        base, *extras = get_args(annotation)
        if any(extra is UNSIGNED for extra in extras):
            return FieldKind.UINT, None, None
        return classify(base)

    if annotation is Any or annotation is object:
        return FieldKind.DYNAMIC, None, None

    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1 and len(members) < len(args):
            elem_kind, _, _ = classify(members[0])
            return FieldKind.OPTIONAL, elem_kind, members[0]
        return FieldKind.DYNAMIC, None, None

    if origin is not None:
        if origin in _SEQUENCE_ORIGINS:
            return FieldKind.SEQUENCE, None, None
        if origin in _MAPPING_ORIGINS:
            return FieldKind.MAPPING, None, None
        if origin is collections.abc.Callable:
            return FieldKind.IGNORED, None, None
        return FieldKind.DYNAMIC, None, None

    if not isinstance(annotation, type):
        return FieldKind.IGNORED, None, None

    return _classify_type(annotation), None, None


def _classify_type(tp: type) -> FieldKind:
    # bool before int: bool is an int subclass
    if issubclass(tp, bool):
        return FieldKind.BOOL
    if issubclass(tp, int):
        return FieldKind.INT
    if issubclass(tp, float):
        return FieldKind.FLOAT
    if issubclass(tp, complex):
        return FieldKind.COMPLEX
    if issubclass(tp, str):
        return FieldKind.STRING
    if issubclass(tp, datetime):
        return FieldKind.TIMESTAMP
    if issubclass(tp, (list, tuple)):
        return FieldKind.SEQUENCE
    if issubclass(tp, dict):
        return FieldKind.MAPPING
    if is_record_type(tp):
        return FieldKind.RECORD
    return FieldKind.IGNORED


def kind_of_value(value: Any) -> FieldKind:
    """Classify a runtime value; used for ``DYNAMIC`` fields."""
    if value is None:
        return FieldKind.DYNAMIC
    if callable(value) and not isinstance(value, type):
        return FieldKind.IGNORED
    kind = _classify_type(type(value))
    if kind is FieldKind.IGNORED:
        return FieldKind.DYNAMIC
    return kind


__all__ = [
    "FieldKind",
    "UInt",
    "UNSIGNED",
    "classify",
    "is_record",
    "is_record_type",
    "kind_of_value",
]
