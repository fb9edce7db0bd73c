"""recordkit Core -- the ambient layer every record operation relies on.

Manifesto:
    The record engines are pure functions over caller-supplied records, but
    they still need to report failures in a structured way, log what they
    did, read a few conventions from the environment and agree on what a
    timestamp looks like. ``recordkit.core`` holds exactly those concerns and
    nothing that knows about fields or tags.

    - **Typed failures:** Every error is a ``RecordKitError`` with a category
    - **structlog everywhere:** Engines log event-style names at debug level
    - **Environment-driven:** ``RECORDKIT_*`` variables override conventions

Architecture::

    errors.py          Structured error hierarchy (RecordKitError, categories)
    logging.py         structlog configuration + context binding
    settings.py        RecordKitSettings (pydantic-settings)
    timestamps.py      UTC helpers, zero timestamp, epoch millis (stdlib-only)

Tags:
    recordkit-core, errors, logging, settings, timestamps

Doc-Types:
    package-overview, module-index
"""

from recordkit.core.errors import (
    ConfigError,
    DecodeError,
    ErrorCategory,
    ErrorContext,
    FieldResolutionError,
    InvalidRecordKindError,
    PointerRequiredError,
    RecordError,
    RecordKitError,
    TemplateError,
    ValueDecodeError,
    VariableNotFoundError,
    categorize_error,
    is_retryable,
)
from recordkit.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)
from recordkit.core.settings import RecordKitSettings, get_settings, reset_settings
from recordkit.core.timestamps import (
    ZERO_TIMESTAMP,
    format_wall_clock,
    is_zero_timestamp,
    parse_timestamp,
    to_epoch_millis,
    to_utc,
    utc_now,
)

__all__ = [
    # errors
    "ConfigError",
    "DecodeError",
    "ErrorCategory",
    "ErrorContext",
    "FieldResolutionError",
    "InvalidRecordKindError",
    "PointerRequiredError",
    "RecordError",
    "RecordKitError",
    "TemplateError",
    "ValueDecodeError",
    "VariableNotFoundError",
    "categorize_error",
    "is_retryable",
    # logging
    "LogContext",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
    # settings
    "RecordKitSettings",
    "get_settings",
    "reset_settings",
    # timestamps
    "ZERO_TIMESTAMP",
    "format_wall_clock",
    "is_zero_timestamp",
    "parse_timestamp",
    "to_epoch_millis",
    "to_utc",
    "utc_now",
]
