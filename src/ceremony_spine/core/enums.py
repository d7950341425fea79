"""
Shared enums for ceremony-spine configuration and policies.

STDLIB ONLY - NO PYDANTIC.
"""

from enum import Enum


class StoreBackend(str, Enum):
    """Which document store adapter :func:`create_store` builds."""

    MEMORY = "memory"
    FIRESTORE = "firestore"


class LogFormat(str, Enum):
    """Log renderer selection."""

    JSON = "json"
    CONSOLE = "console"
    AUTO = "auto"


class AvatarErrorPolicy(str, Enum):
    """
    What the avatar aggregator does with failed membership batches.

    Neither policy aborts the aggregation; the URLs from healthy batches
    are always returned.
    """

    # Warn about every failed batch, then once more with a summary of the call
    LOG = "log"

    # Drop failed batches without logging them
    DISCARD = "discard"
