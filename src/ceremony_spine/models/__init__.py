"""Document shapes, typed ceremony records and the Project aggregate.

Modules
-------
documents
    ``DocumentReference``, ``DocumentInfo`` ({id, reference, data}),
    ``DocumentData`` ({id, data}).
ceremony
    pydantic records (Ceremony, Circuit, Participant, Contribution, Avatar),
    their enums, and the fallible ``parse_document``.
project
    ``Project`` -- what the dashboard view renders.
"""

from ceremony_spine.models.ceremony import (
    Avatar,
    Ceremony,
    CeremonyRecord,
    CeremonyState,
    CeremonyTimeoutType,
    CeremonyType,
    Circuit,
    Contribution,
    Participant,
    ParticipantContributionStep,
    ParticipantStatus,
    parse_document,
    parse_documents,
)
from ceremony_spine.models.documents import DocumentData, DocumentInfo, DocumentReference
from ceremony_spine.models.project import Project

__all__ = [
    "Avatar",
    "Ceremony",
    "CeremonyRecord",
    "CeremonyState",
    "CeremonyTimeoutType",
    "CeremonyType",
    "Circuit",
    "Contribution",
    "DocumentData",
    "DocumentInfo",
    "DocumentReference",
    "Participant",
    "ParticipantContributionStep",
    "ParticipantStatus",
    "Project",
    "parse_document",
    "parse_documents",
]
