"""recordkit Records -- generic operations over tagged records.

A record is a dataclass or pydantic model instance. Fields opt into an
operation through tags stored in their metadata; the operations below walk
those fields at runtime and dispatch on each field's ``FieldKind``.

ARCHITECTURE
────────────
::

    tags.py / kinds.py      tag parsing, FieldKind classification
          │
          ▼
    walker.py               walk(record, namespace) → FieldDescriptor list
          │
          ├── diff.py       calculate_diff(before, after)
          ├── merge.py      inherit / overwrite from ancestors
          ├── env.py        set_env_field_values(output)
          ├── query.py      set_query_fields / flatten_query_fields
          └── access.py     get_field_names / get_field_value

    coercion.py             parse_typed_value("12.345,6") → 12345.6
    sprint.py               canonical string form of any value
    inject.py               "${name}" templates

Example::

    from dataclasses import dataclass
    from recordkit.records import calculate_diff, tagged

    @dataclass
    class Planet:
        name: str = tagged(default="", api="planet")
        moons: int = tagged(default=0, api="moons")

    calculate_diff(Planet("Earth", 1), Planet("Earth", 2))  # {"moons": "2"}
"""

from recordkit.records.access import (
    get_api_field_names,
    get_field_names,
    get_field_value,
    get_tag_field_names,
    require_field_value,
)
from recordkit.records.coercion import TypedValue, parse_typed_value
from recordkit.records.diff import calculate_diff
from recordkit.records.env import set_env_field_values
from recordkit.records.inject import inject_variables
from recordkit.records.kinds import UNSIGNED, FieldKind, UInt, is_record
from recordkit.records.merge import (
    inherit,
    inherit_with_tag,
    overwrite,
    overwrite_with_tag,
)
from recordkit.records.query import QueryFields, flatten_query_fields, set_query_fields
from recordkit.records.sprint import sprint
from recordkit.records.tags import get_tag_value, parse_tags, tagged, tags
from recordkit.records.walker import FieldDescriptor, deep_equal, is_zero, walk

__all__ = [
    "FieldDescriptor",
    "FieldKind",
    "QueryFields",
    "TypedValue",
    "UInt",
    "UNSIGNED",
    "calculate_diff",
    "deep_equal",
    "flatten_query_fields",
    "get_api_field_names",
    "get_field_names",
    "get_field_value",
    "get_tag_field_names",
    "get_tag_value",
    "inherit",
    "inherit_with_tag",
    "inject_variables",
    "is_record",
    "is_zero",
    "overwrite",
    "overwrite_with_tag",
    "parse_tags",
    "parse_typed_value",
    "require_field_value",
    "set_env_field_values",
    "set_query_fields",
    "sprint",
    "tagged",
    "tags",
    "walk",
]
