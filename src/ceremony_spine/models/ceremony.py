"""
Typed ceremony records parsed from store documents.

Store payloads are untyped mappings with camelCase keys.  The readers hand
them on untouched (``DocumentInfo`` / ``DocumentData``); whoever needs typed
access parses them here, at the boundary, with :func:`parse_document`.
Parsing is fallible: a payload that does not fit raises
:class:`~ceremony_spine.core.errors.DocumentParseError`.

Every field is optional because the dashboard must render partially filled
documents, and unknown fields are kept (``extra="allow"``).

Doc-Types: API_REFERENCE
"""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ceremony_spine.core.errors import DocumentParseError, ErrorContext
from ceremony_spine.models.documents import DocumentData, DocumentInfo

# ── Enums ────────────────────────────────────────────────────────────────


class CeremonyState(str, Enum):
    SCHEDULED = "SCHEDULED"
    OPENED = "OPENED"
    PAUSED = "PAUSED"
    CLOSED = "CLOSED"
    CANCELED = "CANCELED"
    FINALIZED = "FINALIZED"


class CeremonyType(str, Enum):
    PHASE1 = "PHASE1"
    PHASE2 = "PHASE2"


class CeremonyTimeoutType(str, Enum):
    """How contributor timeouts are computed."""

    DYNAMIC = "DYNAMIC"
    FIXED = "FIXED"


class ParticipantStatus(str, Enum):
    CREATED = "CREATED"
    WAITING = "WAITING"
    READY = "READY"
    CONTRIBUTING = "CONTRIBUTING"
    CONTRIBUTED = "CONTRIBUTED"
    DONE = "DONE"
    FINALIZING = "FINALIZING"
    FINALIZED = "FINALIZED"
    TIMEDOUT = "TIMEDOUT"
    EXHUMED = "EXHUMED"


class ParticipantContributionStep(str, Enum):
    DOWNLOADING = "DOWNLOADING"
    COMPUTING = "COMPUTING"
    UPLOADING = "UPLOADING"
    VERIFYING = "VERIFYING"
    COMPLETED = "COMPLETED"


# ── Records ──────────────────────────────────────────────────────────────


class CeremonyRecord(BaseModel):
    """Common base: document id plus camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: str = Field(description="Store document id")
    last_updated: int | None = Field(default=None, alias="lastUpdated")


class Ceremony(CeremonyRecord):
    title: str | None = None
    prefix: str | None = None
    description: str | None = None
    start_date: int | None = Field(default=None, alias="startDate", description="Epoch millis")
    end_date: int | None = Field(default=None, alias="endDate", description="Epoch millis")
    timeout_mechanism_type: CeremonyTimeoutType | None = Field(default=None, alias="timeoutMechanismType")
    penalty: int | None = Field(default=None, description="Penalty in seconds for timed-out contributors")
    state: CeremonyState | None = None
    type: CeremonyType | None = None
    coordinator_id: str | None = Field(default=None, alias="coordinatorId")


class CircuitTimings(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    contribution_computation: float | None = Field(default=None, alias="contributionComputation")
    full_contribution: float | None = Field(default=None, alias="fullContribution")
    verify_cloud_function: float | None = Field(default=None, alias="verifyCloudFunction")


class CircuitWaitingQueue(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    completed_contributions: int = Field(default=0, alias="completedContributions")
    contributors: list[str] = Field(default_factory=list)
    current_contributor: str | None = Field(default=None, alias="currentContributor")
    failed_contributions: int = Field(default=0, alias="failedContributions")


class Circuit(CeremonyRecord):
    name: str | None = None
    description: str | None = None
    prefix: str | None = None
    sequence_position: int | None = Field(default=None, alias="sequencePosition", ge=0)
    zkey_size_in_bytes: int | None = Field(default=None, alias="zKeySizeInBytes")
    constraints: int | None = None
    pot: int | None = Field(default=None, description="Powers of tau needed by the circuit")
    avg_timings: CircuitTimings | None = Field(default=None, alias="avgTimings")
    waiting_queue: CircuitWaitingQueue | None = Field(default=None, alias="waitingQueue")


class Participant(CeremonyRecord):
    user_id: str | None = Field(default=None, alias="userId")
    contribution_progress: int | None = Field(default=None, alias="contributionProgress")
    status: ParticipantStatus | None = None
    contribution_step: ParticipantContributionStep | None = Field(default=None, alias="contributionStep")
    contribution_started_at: int | None = Field(default=None, alias="contributionStartedAt")


class Contribution(CeremonyRecord):
    participant_id: str | None = Field(default=None, alias="participantId")
    contribution_computation_time: float | None = Field(default=None, alias="contributionComputationTime")
    verification_computation_time: float | None = Field(default=None, alias="verificationComputationTime")
    zkey_index: str | None = Field(default=None, alias="zkeyIndex")
    valid: bool | None = None


class Avatar(CeremonyRecord):
    avatar_url: str | None = Field(default=None, alias="avatarUrl")


RecordT = TypeVar("RecordT", bound=CeremonyRecord)


def parse_document(document: DocumentInfo | DocumentData, model: type[RecordT]) -> RecordT:
    """Validate a store document into a typed record.

    Raises:
        DocumentParseError: the payload does not fit ``model``.
    """
    payload: dict[str, Any] = {**(document.data or {}), "id": document.id}
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        loc = ".".join(str(part) for part in first.get("loc", ()))
        raise DocumentParseError(
            f"{model.__name__} document {document.id!r} is invalid: {first.get('msg', exc)}",
            field=loc or None,
            value=first.get("input"),
            context=ErrorContext(document_id=document.id),
            cause=exc,
        ) from exc


def parse_documents(documents: list[DocumentInfo] | list[DocumentData], model: type[RecordT]) -> list[RecordT]:
    """Parse every document, failing on the first invalid one."""
    return [parse_document(d, model) for d in documents]


__all__ = [
    "Avatar",
    "Ceremony",
    "CeremonyRecord",
    "CeremonyState",
    "CeremonyTimeoutType",
    "CeremonyType",
    "Circuit",
    "CircuitTimings",
    "CircuitWaitingQueue",
    "Contribution",
    "Participant",
    "ParticipantContributionStep",
    "ParticipantStatus",
    "parse_document",
    "parse_documents",
]
