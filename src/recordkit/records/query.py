"""
Query flattening - a record as a flat string map plus a search blob.

Search indexes usually want two views of a document: one ``{field: text}``
entry per queryable field and one free-text string holding every value.
``set_query_fields`` produces both from the record's ``api``-tagged fields.

Manifesto:
    - **Flat keys:** Nested records and map entries land at the top level
    - **Text only:** Every value goes through ``sprint``; timestamps use a
      readable UTC wall-clock layout
    - **Each value once:** The blob lists distinct values in first-seen order

Examples:
    >>> from dataclasses import dataclass
    >>> from recordkit.records.tags import tagged
    >>> @dataclass
    ... class Planet:
    ...     name: str = tagged(default="", api="planet")
    ...     moon: str = tagged(default="", api="moon")
    >>> flattened = flatten_query_fields(Planet(name="Earth", moon="Luna"))
    >>> flattened.values
    {'planet': 'Earth', 'moon': 'Luna'}
    >>> flattened.all_values
    'Earth Luna'

Tags:
    search, flattening, query, reflection, recordkit

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import io
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TextIO

from recordkit.core.logging import get_logger
from recordkit.core.settings import get_settings
from recordkit.core.timestamps import format_wall_clock
from recordkit.records.kinds import FieldKind, is_record
from recordkit.records.sprint import sprint
from recordkit.records.walker import walk

logger = get_logger(__name__)


@dataclass
class QueryFields:
    """Result of ``flatten_query_fields``."""

    values: dict[str, str] = field(default_factory=dict)
    all_values: str = ""


def set_query_fields(
    record: Any,
    query_values: MutableMapping[str, str],
    all_values: TextIO,
) -> None:
    """Flatten ``record`` into ``query_values`` and write the blob to ``all_values``.

    Args:
        record: Record whose ``api``-tagged fields are flattened
        query_values: Receives ``{external name: text}`` entries
        all_values: Receives the distinct values joined by single spaces
    """
    settings = get_settings()
    flattener = _Flattener(query_values, settings.api_tag, settings.query_time_format)
    flattener.flatten(record)
    all_values.write(" ".join(flattener.seen))
    logger.debug(
        "records.query.flattened",
        record_type=type(record).__name__,
        fields=len(query_values),
        distinct_values=len(flattener.seen),
    )


def flatten_query_fields(record: Any) -> QueryFields:
    """Return the query map and blob of ``record`` as a ``QueryFields``."""
    values: dict[str, str] = {}
    buffer = io.StringIO()
    set_query_fields(record, values, buffer)
    return QueryFields(values=values, all_values=buffer.getvalue())


class _Flattener:
    def __init__(self, query_values: MutableMapping[str, str], namespace: str, time_format: str):
        self.query_values = query_values
        self.namespace = namespace
        self.time_format = time_format
        # dict as an insertion-ordered set
        self.seen: dict[str, None] = {}

    def add(self, key: str, text: str) -> None:
        if text == "":
            return
        self.query_values[key] = text
        self.seen[text] = None

    def text(self, value: Any) -> str:
        if isinstance(value, datetime):
            return format_wall_clock(value, self.time_format)
        return sprint(value)

    def flatten(self, record: Any) -> None:
        for descriptor in walk(record, self.namespace):
            value = descriptor.get(record)
            if value is None or callable(value):
                continue
            kind = descriptor.kind
            if kind is FieldKind.OPTIONAL:
                kind = descriptor.elem_kind or FieldKind.DYNAMIC

            if kind.is_scalar:
                self.add(descriptor.external_name, sprint(value))
            elif kind is FieldKind.TIMESTAMP:
                self.add(descriptor.external_name, self.text(value))
            elif kind is FieldKind.MAPPING and isinstance(value, Mapping):
                for key, item in value.items():
                    if isinstance(key, str):
                        self.add(key, self.text(item))
            elif kind is FieldKind.RECORD and is_record(value):
                self.flatten(value)


__all__ = ["QueryFields", "flatten_query_fields", "set_query_fields"]
