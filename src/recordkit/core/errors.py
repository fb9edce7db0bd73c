"""
Structured error types for recordkit.

Every failure raised by the record toolkit is a ``RecordKitError`` subclass
carrying a category, a retry flag, structured context and an optional chained
cause, so callers can log and route errors without parsing messages.

Manifesto:
    - **Typed Error Hierarchy:** One subclass per failure the toolkit can report
    - **Explicit Retry Semantics:** Each error knows if it's retryable
    - **Rich Context:** Errors carry the record type, field and tag involved
    - **Error Chaining:** Decode failures keep the original validation error

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                      RecordKitError                              │
        │  (category, retryable, context, cause)                           │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  RecordError          DecodeError         TemplateError          │
        │  (RECORD)             (PARSE)             (VALIDATION)           │
        │       │                    │                    │                │
        │  InvalidRecordKind    ValueDecodeError    VariableNotFound       │
        │  PointerRequired                                                 │
        │  FieldResolution      ConfigError                                │
        │                       (CONFIG)                                   │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = InvalidRecordKindError("expected a record, got int")
    >>> error.category
    <ErrorCategory.RECORD: 'RECORD'>
    >>> error.with_context(record_type="int").context.record_type
    'int'

Tags:
    error-handling, exception-hierarchy, error-context, recordkit

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        RECORD: Wrong record shape or record argument
        PARSE: Value decoding failures
        VALIDATION: Template and input validation
        CONFIG: Invalid settings
        NETWORK: Transient failures surfaced through retry helpers
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    RECORD = "RECORD"
    PARSE = "PARSE"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    NETWORK = "NETWORK"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Attributes:
        record_type: Class name of the record being walked
        field_name: Declared field name involved in the failure
        field_path: External (tag-derived) path of the field
        tag: Tag namespace in use
        env_var: Environment variable being bound
        metadata: Additional key-value pairs
    """

    record_type: str | None = None
    field_name: str | None = None
    field_path: str | None = None
    tag: str | None = None
    env_var: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["record_type", "field_name", "field_path", "tag", "env_var"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RecordKitError(Exception):
    """
    Base exception for all recordkit errors.

    Subclasses set ``default_category`` and ``default_retryable`` so that
    callers rarely pass them explicitly.

    Examples:
        >>> error = RecordKitError("Something went wrong")
        >>> error.retryable
        False
        >>> error.to_dict()["error_type"]
        'RecordKitError'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RecordKitError:
        """
        Add context to this error (fluent API).

        Usage:
            raise PointerRequiredError("output is frozen").with_context(
                record_type="Planet", tag="inherit"
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# RECORD ERRORS
# =============================================================================


class RecordError(RecordKitError):
    """A record argument has the wrong shape or cannot be used."""

    default_category = ErrorCategory.RECORD


class InvalidRecordKindError(RecordError):
    """A non-record value was passed where a record was required."""


class PointerRequiredError(RecordError):
    """The output record cannot be mutated in place.

    Raised for classes passed instead of instances, frozen dataclasses and
    frozen pydantic models.
    """


class FieldResolutionError(RecordError):
    """A dotted field path could not be resolved.

    Only raised by ``require_field_value``; ``get_field_value`` returns None.
    """


# =============================================================================
# DECODE ERRORS
# =============================================================================


class DecodeError(RecordKitError):
    """A raw value could not be decoded."""

    default_category = ErrorCategory.PARSE


class ValueDecodeError(DecodeError):
    """An environment variable could not be decoded into its field's type."""


# =============================================================================
# TEMPLATE ERRORS
# =============================================================================


class TemplateError(RecordKitError):
    """A template could not be rendered."""

    default_category = ErrorCategory.VALIDATION


class VariableNotFoundError(TemplateError):
    """A ``${name}`` placeholder names an unknown variable."""

    def __init__(self, name: str, **kwargs: Any):
        super().__init__(f"input variable ({name}) not found", **kwargs)
        self.name = name


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(RecordKitError):
    """Invalid recordkit settings."""

    default_category = ErrorCategory.CONFIG


# =============================================================================
# HELPERS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, RecordKitError):
        return error.retryable
    # Connection-level failures are usually worth another attempt
    return isinstance(error, (ConnectionError, TimeoutError))


def categorize_error(error: Exception) -> ErrorCategory:
    """Map any exception to an ErrorCategory."""
    if isinstance(error, RecordKitError):
        return error.category
    if isinstance(error, (ConnectionError, TimeoutError)):
        return ErrorCategory.NETWORK
    if isinstance(error, (ValueError, TypeError)):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "RecordKitError",
    "RecordError",
    "InvalidRecordKindError",
    "PointerRequiredError",
    "FieldResolutionError",
    "DecodeError",
    "ValueDecodeError",
    "TemplateError",
    "VariableNotFoundError",
    "ConfigError",
    "is_retryable",
    "categorize_error",
]
