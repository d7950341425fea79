"""
Document store contract.

Manifesto:
    The aggregation layer only needs three reads: a full collection scan,
    a single-document lookup and a membership (``in``) query.  Declaring
    them as a protocol lets the Firestore REST adapter and the in-memory
    store be swapped freely, and lets tests count every query issued.

Architecture:
    ::

        base.py (YOU ARE HERE)
        ├── DocumentSnapshot  : id + reference + payload (None = missing)
        ├── DocumentStore     : async read protocol
        └── collection paths  : ceremonies/{id}/circuits, ... helpers

        memory.py     InMemoryDocumentStore  (tests, fixtures)
        firestore.py  FirestoreDocumentStore (httpx, REST v1)

Guardrails:
    ❌ DON'T: Pass more than ``MEMBERSHIP_FILTER_LIMIT`` values to
       ``query_membership``
    ✅ DO: Chunk identifiers first (``ceremony_spine.execution.chunking``)

Tags:
    ceremony-spine, store, protocol, firestore, dependency-injection

Doc-Types:
    api-reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from ceremony_spine.core.settings import MEMBERSHIP_FILTER_LIMIT
from ceremony_spine.models.documents import DocumentReference

# Field path that addresses the document id itself in membership filters.
DOCUMENT_ID_FIELD = "__name__"

CEREMONIES_COLLECTION = "ceremonies"
AVATARS_COLLECTION = "avatars"


def circuits_path(ceremony_id: str) -> str:
    """All circuits of a ceremony live under ``ceremonies/<id>/circuits``."""
    return f"{CEREMONIES_COLLECTION}/{ceremony_id}/circuits"


def participants_path(ceremony_id: str) -> str:
    return f"{CEREMONIES_COLLECTION}/{ceremony_id}/participants"


def contributions_path(ceremony_id: str, circuit_id: str) -> str:
    return f"{circuits_path(ceremony_id)}/{circuit_id}/contributions"


@dataclass(frozen=True, slots=True)
class DocumentSnapshot:
    """A document as read from the store.

    ``data`` is ``None`` when the referenced document does not exist.
    """

    id: str
    reference: DocumentReference
    data: dict[str, Any] | None = None

    @property
    def exists(self) -> bool:
        return self.data is not None

    def to_dict(self) -> dict[str, Any]:
        """Payload as a plain dict (empty for missing documents)."""
        return dict(self.data) if self.data is not None else {}


@runtime_checkable
class DocumentStore(Protocol):
    """Async read-only document store."""

    async def list_collection(self, path: str) -> list[DocumentSnapshot]:
        """Every document currently stored at ``path``."""
        ...

    async def get_document(self, path: str, document_id: str) -> DocumentSnapshot | None:
        """One document, or ``None`` when it does not exist."""
        ...

    async def query_membership(
        self,
        collection: str,
        field: str,
        values: list[str],
    ) -> list[DocumentSnapshot]:
        """Documents of ``collection`` whose ``field`` is one of ``values``.

        Raises ``MembershipLimitError`` for more than
        ``MEMBERSHIP_FILTER_LIMIT`` values.
        """
        ...

    async def close(self) -> None:
        ...


__all__ = [
    "AVATARS_COLLECTION",
    "CEREMONIES_COLLECTION",
    "DOCUMENT_ID_FIELD",
    "MEMBERSHIP_FILTER_LIMIT",
    "DocumentSnapshot",
    "DocumentStore",
    "circuits_path",
    "contributions_path",
    "participants_path",
]
