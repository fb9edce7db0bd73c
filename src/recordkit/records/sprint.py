"""Canonical string form of field values.

Diff results and query maps store every value as a string. ``sprint`` is the
single place that decides what that string looks like, so two calls on equal
values always agree.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from recordkit.records.kinds import is_record
from recordkit.records.walker import walk


def sprint(value: Any) -> str:
    """Render ``value`` as a string.

    >>> sprint(None), sprint(True), sprint(9.99), sprint(3 + 4j)
    ('', 'true', '9.99', '(3+4j)')
    >>> sprint({"b": 2, "a": [1, None]})
    '{"a":[1,null],"b":2}'
    """
    if value is None:
        return ""
    if isinstance(value, Enum):
        return sprint(value.value)
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, complex):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (Mapping, list, tuple)) or is_record(value):
        return json.dumps(_plain(value), sort_keys=True, separators=(",", ":"))
    return str(value)


def _plain(value: Any) -> Any:
    """Reduce a value to JSON-compatible types."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, Enum):
        return _plain(value.value)
    if is_record(value):
        fields = ((d.name, d.get(value)) for d in walk(value))
        return {name: _plain(item) for name, item in fields if not callable(item)}
    return sprint(value)


__all__ = ["sprint"]
