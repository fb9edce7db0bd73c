"""Bind environment variables into record fields.

Fields tagged ``env:"NAME"`` receive the value of the ``NAME`` variable,
decoded as JSON into the field's annotated type::

    @dataclass
    class ServerConfig:
        port: int = tagged(default=80, env="PORT")
        host: str = tagged(default="localhost", env="HOST")

    config = ServerConfig()
    set_env_field_values(config)   # PORT=8080 HOST=example.org

String and timestamp values may be given bare (``HOST=example.org``); they are
quoted before decoding unless they already contain a double quote.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from recordkit.core.errors import ValueDecodeError
from recordkit.core.logging import get_logger
from recordkit.core.settings import get_settings
from recordkit.records.kinds import FieldKind
from recordkit.records.walker import FieldDescriptor, ensure_mutable, walk

logger = get_logger(__name__)

_QUOTED_KINDS = frozenset({FieldKind.STRING, FieldKind.TIMESTAMP})


def set_env_field_values(output: Any, environ: Mapping[str, str] | None = None) -> None:
    """Set every env-tagged field of ``output`` from the environment.

    Args:
        output: Mutable record to update in place
        environ: Variables to read instead of ``os.environ``

    Raises:
        PointerRequiredError: ``output`` is a class or a frozen record
        ValueDecodeError: A variable does not decode into its field's type
    """
    ensure_mutable(output)
    if environ is None:
        environ = os.environ
    namespace = get_settings().env_tag

    for field in walk(output, namespace):
        raw = environ.get(field.external_name, "")
        if raw == "":
            continue
        if _is_quoted_kind(field) and '"' not in raw:
            raw = f'"{raw}"'

        try:
            value = TypeAdapter(field.annotation).validate_json(raw)
        except ValidationError as exc:
            raise ValueDecodeError(
                f"cannot decode {field.external_name} into {field.name}: "
                f"{exc.error_count()} validation error(s)",
                cause=exc,
            ).with_context(
                record_type=type(output).__name__,
                field_name=field.name,
                env_var=field.external_name,
                tag=namespace,
            ) from exc

        field.set(output, value)
        logger.debug("records.env.bound", field=field.name, env_var=field.external_name)


def _is_quoted_kind(field: FieldDescriptor) -> bool:
    if field.kind is FieldKind.OPTIONAL:
        return field.elem_kind in _QUOTED_KINDS
    return field.kind in _QUOTED_KINDS


__all__ = ["set_env_field_values"]
