"""
Project assembly: the aggregates the dashboard renders.

``list_projects`` is the dashboard's initial load: one bare ``Project`` per
ceremony document.  ``load_project`` fills a single project in: ordered
circuits, participants, every circuit's contributions (read concurrently)
and, on request, the participants' avatars.

Store errors propagate from both functions; only the avatar fan-out absorbs
failures, as configured by ``avatar_error_policy``.
"""

from __future__ import annotations

import asyncio

from ceremony_spine.aggregation.avatars import get_participants_avatars
from ceremony_spine.aggregation.ceremonies import (
    get_ceremonies,
    get_ceremony,
    get_ceremony_participants,
)
from ceremony_spine.aggregation.circuits import get_ceremony_circuits
from ceremony_spine.aggregation.contributions import get_contributions
from ceremony_spine.core.enums import AvatarErrorPolicy
from ceremony_spine.core.logging import LogContext, get_logger
from ceremony_spine.models.documents import DocumentData
from ceremony_spine.models.project import Project
from ceremony_spine.store.base import MEMBERSHIP_FILTER_LIMIT, DocumentStore

logger = get_logger(__name__)


async def list_projects(store: DocumentStore) -> list[Project]:
    """One ``Project`` per ceremony, ceremony document only."""
    ceremonies = await get_ceremonies(store)
    logger.info("projects.listed", projects=len(ceremonies))
    return [Project(ceremony=ceremony) for ceremony in ceremonies]


async def load_project(
    store: DocumentStore,
    ceremony_id: str,
    *,
    include_contributions: bool = True,
    include_avatars: bool = False,
    avatar_error_policy: AvatarErrorPolicy = AvatarErrorPolicy.LOG,
    batch_size: int = MEMBERSHIP_FILTER_LIMIT,
) -> Project:
    """Ceremony with its ordered circuits, participants and contributions.

    Raises:
        DocumentNotFoundError: the ceremony does not exist.
        StoreError: any store failure outside the avatar fan-out.
    """
    async with LogContext(ceremony_id=ceremony_id):
        ceremony, circuits, participants = await asyncio.gather(
            get_ceremony(store, ceremony_id),
            get_ceremony_circuits(store, ceremony_id),
            get_ceremony_participants(store, ceremony_id),
        )

        contributions: list[DocumentData] | None = None
        if include_contributions:
            per_circuit = await asyncio.gather(
                *(get_contributions(store, ceremony_id, circuit.id) for circuit in circuits)
            )
            contributions = [doc for docs in per_circuit for doc in docs]

        avatars: list[str] | None = None
        if include_avatars:
            avatars = await get_participants_avatars(
                store,
                ceremony_id,
                error_policy=avatar_error_policy,
                batch_size=batch_size,
            )

        project = Project(
            ceremony=ceremony,
            circuits=[DocumentData(id=c.id, data=c.data) for c in circuits],
            participants=participants,
            contributions=contributions,
            avatars=avatars,
        )
        logger.info(
            "project.loaded",
            circuits=len(circuits),
            participants=len(participants),
            contributions=None if contributions is None else len(contributions),
            avatars=None if avatars is None else len(avatars),
        )
        return project
