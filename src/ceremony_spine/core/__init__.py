"""Ceremony Spine Core -- errors, logging, settings and shared enums.

Layer 1 -- Type System & Errors
    errors.py          Structured error hierarchy (CeremonySpineError, StoreError)
    enums.py           StoreBackend, LogFormat, AvatarErrorPolicy

Layer 2 -- Cross-Cutting Concerns
    logging.py         Structured logging (structlog)
    settings.py        CeremonySettings + cached get_settings()
"""

from ceremony_spine.core.enums import AvatarErrorPolicy, LogFormat, StoreBackend
from ceremony_spine.core.errors import (
    AggregateAbortError,
    BatchOperationFailure,
    CeremonySpineError,
    ConfigError,
    DocumentNotFoundError,
    DocumentParseError,
    ErrorCategory,
    ErrorContext,
    FanoutError,
    InvalidConfigError,
    MembershipLimitError,
    MissingConfigError,
    StoreError,
    StorePermissionError,
    StoreQueryError,
    StoreUnavailableError,
    ValidationError,
    is_retryable,
)
from ceremony_spine.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)
from ceremony_spine.core.settings import (
    MEMBERSHIP_FILTER_LIMIT,
    CeremonySettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # enums
    "AvatarErrorPolicy",
    "LogFormat",
    "StoreBackend",
    # errors
    "AggregateAbortError",
    "BatchOperationFailure",
    "CeremonySpineError",
    "ConfigError",
    "DocumentNotFoundError",
    "DocumentParseError",
    "ErrorCategory",
    "ErrorContext",
    "FanoutError",
    "InvalidConfigError",
    "MembershipLimitError",
    "MissingConfigError",
    "StoreError",
    "StorePermissionError",
    "StoreQueryError",
    "StoreUnavailableError",
    "ValidationError",
    "is_retryable",
    # logging
    "LogContext",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
    # settings
    "MEMBERSHIP_FILTER_LIMIT",
    "CeremonySettings",
    "clear_settings_cache",
    "get_settings",
]
