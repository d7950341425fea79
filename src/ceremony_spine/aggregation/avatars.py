"""
Avatar Aggregator: participants' avatar URLs for one ceremony.

Manifesto:
    Avatars live in a top-level ``avatars`` collection keyed by participant
    id, and the store only filters by up to 10 ids per query.  A ceremony
    with hundreds of participants therefore needs many small queries.  One
    failing query must not blank out everybody else's avatar, so the
    queries run through the fan-out executor in collect-all mode.

Flow::

    ceremonies/{id}/participants ──► ids ──► chunk(≤10)
        ──► run_fanout(COLLECT_ALL): query_membership("avatars", "__name__", batch)
        ──► existing docs ──► data["avatarUrl"] ──► flat list

Participants without an avatar document are omitted, not errored.  URLs
are an unordered set as far as callers are concerned.

Tags:
    ceremony-spine, avatars, fan-out, membership-filter, partial-failure

Doc-Types:
    api-reference
"""

from __future__ import annotations

from ceremony_spine.aggregation.collections import read_collection
from ceremony_spine.core.enums import AvatarErrorPolicy
from ceremony_spine.core.logging import get_logger
from ceremony_spine.execution.fanout import FanoutMode, FanoutResult, run_fanout
from ceremony_spine.store.base import (
    AVATARS_COLLECTION,
    DOCUMENT_ID_FIELD,
    MEMBERSHIP_FILTER_LIMIT,
    DocumentStore,
    participants_path,
)

logger = get_logger(__name__)


async def fetch_participants_avatars(
    store: DocumentStore,
    ceremony_id: str,
    *,
    batch_size: int = MEMBERSHIP_FILTER_LIMIT,
    log_failures: bool = True,
) -> FanoutResult[str]:
    """Avatar URLs plus the per-batch failures, for callers that want both.

    ``log_failures=False`` keeps failed batches off the log; they are still
    on the returned result.
    """
    participants = await read_collection(store, participants_path(ceremony_id))
    participant_ids = [p.id for p in participants]

    async def _avatars_for_batch(batch: list[str]) -> list[str]:
        docs = await store.query_membership(AVATARS_COLLECTION, DOCUMENT_ID_FIELD, batch)
        return [
            doc.data["avatarUrl"]
            for doc in docs
            if doc.exists and doc.data.get("avatarUrl")
        ]

    return await run_fanout(
        participant_ids,
        _avatars_for_batch,
        mode=FanoutMode.COLLECT_ALL,
        batch_size=batch_size,
        name="avatars",
        log_failures=log_failures,
    )


async def get_participants_avatars(
    store: DocumentStore,
    ceremony_id: str,
    *,
    error_policy: AvatarErrorPolicy = AvatarErrorPolicy.LOG,
    batch_size: int = MEMBERSHIP_FILTER_LIMIT,
) -> list[str]:
    """Flat list of avatar URLs of the ceremony's participants.

    Failed batches never abort the call; ``error_policy`` decides whether
    they are logged or dropped.
    """
    log_failures = error_policy == AvatarErrorPolicy.LOG
    result = await fetch_participants_avatars(
        store, ceremony_id, batch_size=batch_size, log_failures=log_failures,
    )

    if result.errors and log_failures:
        logger.warning(
            "avatars.partial_failure",
            ceremony_id=ceremony_id,
            failed_batches=result.failed_batches,
            batch_count=result.batch_count,
            avatars=len(result.results),
            errors=[e.to_dict() for e in result.errors],
        )

    return result.results
