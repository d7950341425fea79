"""
Structured error types for ceremony-spine.

Every failure the aggregation layer can produce is a typed error carrying a
category, a retry hint and structured context (collection path, ceremony,
batch index, HTTP status).  Callers route on the type, log with
``to_dict()``, and reach the original exception through ``cause``.

Manifesto:
    - **Typed Error Hierarchy:** Store, parse, config and fan-out failures
      are distinct types
    - **Explicit Retry Semantics:** Each error knows if it's retryable, even
      though this package never retries on its own
    - **Rich Context:** Errors carry the collection path and ids involved
    - **Error Chaining:** The underlying transport/validation error is kept

Architecture:
    ::

        ┌───────────────────────────────────────────────────────────────┐
        │                    CeremonySpineError                         │
        │  (category, retryable, context, cause)                        │
        ├───────────────────────────────────────────────────────────────┤
        │  StoreError            ValidationError        ConfigError     │
        │  (STORE)               (VALIDATION)           (CONFIG)        │
        │     │                       │                     │           │
        │  StoreUnavailableError  DocumentParseError   MissingConfig    │
        │  StoreQueryError        MembershipLimitError InvalidConfig    │
        │  StorePermissionError                                         │
        │  DocumentNotFoundError                                        │
        │                                                               │
        │  FanoutError (EXECUTION)                                      │
        │     │                                                         │
        │  BatchOperationFailure   (recorded, never raised)             │
        │  AggregateAbortError     (fail-fast abort, raised)            │
        └───────────────────────────────────────────────────────────────┘

Examples:
    >>> error = StoreUnavailableError("connection refused")
    >>> error.retryable
    True
    >>> error.with_context(collection_path="ceremonies").context.collection_path
    'ceremonies'

Guardrails:
    ❌ DON'T: Raise bare ``Exception`` from adapters
    ✅ DO: Map transport failures to ``StoreUnavailableError``

    ❌ DON'T: Swallow the original exception
    ✅ DO: Pass it as ``cause=`` for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, ceremony-spine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    # Infrastructure errors (usually transient)
    NETWORK = "NETWORK"           # Connection, timeout, DNS
    STORE = "STORE"               # Document store rejected or failed a call

    # Data errors
    PARSE = "PARSE"               # Malformed store payloads
    VALIDATION = "VALIDATION"     # Schema, constraint violations

    # Configuration errors (never retryable)
    CONFIG = "CONFIG"             # Missing config, invalid settings
    AUTH = "AUTH"                 # Authentication, authorization

    # Application errors
    EXECUTION = "EXECUTION"       # Fan-out batch failures

    # Internal errors
    INTERNAL = "INTERNAL"         # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"           # Uncategorized errors


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Only fields that are set end up in :meth:`to_dict`, so the same context
    type serves a collection read (``collection_path``), a single lookup
    (``document_id``) and a fan-out batch (``batch_index``).

    Attributes:
        collection_path: Collection path being read (``ceremonies/x/circuits``)
        document_id: Document id being looked up
        ceremony_id: Ceremony the operation belongs to
        batch_index: Index of the fan-out batch that failed
        url: URL that was being accessed
        http_status: HTTP status code if applicable
        metadata: Additional key-value pairs
    """

    collection_path: str | None = None
    document_id: str | None = None
    ceremony_id: str | None = None
    batch_index: int | None = None

    # Request context
    url: str | None = None
    http_status: int | None = None

    # Additional metadata
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["collection_path", "document_id", "ceremony_id", "batch_index",
                    "url", "http_status"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class CeremonySpineError(Exception):
    """
    Base exception for all ceremony-spine errors.

    Subclasses set ``default_category`` and ``default_retryable`` so that
    call sites only pass a message and, where useful, a context and cause.

    Attributes:
        message: Human-readable error message
        category: ErrorCategory for classification
        retryable: Whether the failed operation could be retried
        context: ErrorContext with structured metadata
        cause: Original exception (also set as ``__cause__``)
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
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CeremonySpineError:
        """Add context fields, returning ``self`` for chaining.

        Known :class:`ErrorContext` fields are set directly, anything else
        lands in ``context.metadata``.
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialise for structured logging."""
        result: dict[str, Any] = {
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


# ── Store errors ─────────────────────────────────────────────────────────


class StoreError(CeremonySpineError):
    """The document store failed or rejected a call."""

    default_category = ErrorCategory.STORE
    default_retryable = False


class StoreUnavailableError(StoreError):
    """The store connection cannot be used (transport failure, outage, closed client)."""

    default_category = ErrorCategory.NETWORK
    default_retryable = True


class StoreQueryError(StoreError):
    """The store answered but refused the request (bad path, bad query)."""


class StorePermissionError(StoreError):
    """Security rules or credentials denied the read."""

    default_category = ErrorCategory.AUTH


class DocumentNotFoundError(StoreError):
    """A single-document lookup found nothing."""

    def __init__(self, collection_path: str, document_id: str, message: str | None = None):
        super().__init__(
            message or f"Document not found: {collection_path}/{document_id}",
            context=ErrorContext(collection_path=collection_path, document_id=document_id),
        )


# ── Validation errors ────────────────────────────────────────────────────


class ValidationError(CeremonySpineError):
    """Data or arguments failed validation."""

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


class DocumentParseError(ValidationError):
    """A store document does not match the expected record shape."""

    default_category = ErrorCategory.PARSE


class MembershipLimitError(ValidationError):
    """A membership filter was given more values than the store accepts."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Membership filter accepts at most {limit} values, got {size}",
            field="values",
            value=size,
        )
        self.size = size
        self.limit = limit


# ── Configuration errors ─────────────────────────────────────────────────


class ConfigError(CeremonySpineError):
    """Configuration is missing or invalid."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class MissingConfigError(ConfigError):
    """Required configuration key is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


# ── Fan-out errors ───────────────────────────────────────────────────────


class FanoutError(CeremonySpineError):
    """Base for failures of the chunked fan-out executor."""

    default_category = ErrorCategory.EXECUTION
    default_retryable = False


class BatchOperationFailure(FanoutError):
    """One batch of a collect-all fan-out failed.

    Instances are recorded in ``FanoutResult.errors`` and never raised.
    """

    def __init__(self, batch_index: int, batch: Sequence[Any], cause: BaseException):
        super().__init__(
            f"Batch {batch_index} failed: {cause}",
            context=ErrorContext(batch_index=batch_index, metadata={"batch_size": len(batch)}),
            cause=cause,
        )
        self.batch_index = batch_index
        self.batch = list(batch)


class AggregateAbortError(FanoutError):
    """A fail-fast fan-out stopped at its first batch failure."""

    def __init__(self, batch_index: int, cause: BaseException):
        super().__init__(
            f"Fan-out aborted at batch {batch_index}: {cause}",
            context=ErrorContext(batch_index=batch_index),
            cause=cause,
        )
        self.batch_index = batch_index


def is_retryable(error: BaseException) -> bool:
    """Whether an error is worth retrying.

    Non-ceremony errors are treated as not retryable.
    """
    if isinstance(error, CeremonySpineError):
        return error.retryable
    return False


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "CeremonySpineError",
    "StoreError",
    "StoreUnavailableError",
    "StoreQueryError",
    "StorePermissionError",
    "DocumentNotFoundError",
    "ValidationError",
    "DocumentParseError",
    "MembershipLimitError",
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
    "FanoutError",
    "BatchOperationFailure",
    "AggregateAbortError",
    "is_retryable",
]
