"""Document store protocol and adapters (memory, Firestore REST)."""

from ceremony_spine.store.base import (
    AVATARS_COLLECTION,
    CEREMONIES_COLLECTION,
    DOCUMENT_ID_FIELD,
    MEMBERSHIP_FILTER_LIMIT,
    DocumentSnapshot,
    DocumentStore,
    circuits_path,
    contributions_path,
    participants_path,
)
from ceremony_spine.store.factory import create_store
from ceremony_spine.store.firestore import FirestoreDocumentStore
from ceremony_spine.store.memory import InMemoryDocumentStore, MembershipQuery

__all__ = [
    "AVATARS_COLLECTION",
    "CEREMONIES_COLLECTION",
    "DOCUMENT_ID_FIELD",
    "MEMBERSHIP_FILTER_LIMIT",
    "DocumentSnapshot",
    "DocumentStore",
    "FirestoreDocumentStore",
    "InMemoryDocumentStore",
    "MembershipQuery",
    "circuits_path",
    "contributions_path",
    "create_store",
    "participants_path",
]
