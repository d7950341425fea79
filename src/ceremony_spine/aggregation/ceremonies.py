"""Ceremony and participant readers."""

from __future__ import annotations

from ceremony_spine.aggregation.collections import read_document_data, to_document_data
from ceremony_spine.core.errors import DocumentNotFoundError
from ceremony_spine.models.documents import DocumentData
from ceremony_spine.store.base import CEREMONIES_COLLECTION, DocumentStore, participants_path


async def get_ceremonies(store: DocumentStore) -> list[DocumentData]:
    """Every ceremony document as ``{id, data}``."""
    return await read_document_data(store, CEREMONIES_COLLECTION)


async def get_ceremony(store: DocumentStore, ceremony_id: str) -> DocumentData:
    """One ceremony.

    Raises:
        DocumentNotFoundError: no ceremony with that id.
    """
    snapshot = await store.get_document(CEREMONIES_COLLECTION, ceremony_id)
    if snapshot is None or not snapshot.exists:
        raise DocumentNotFoundError(CEREMONIES_COLLECTION, ceremony_id)
    return to_document_data(snapshot)


async def get_ceremony_participants(store: DocumentStore, ceremony_id: str) -> list[DocumentData]:
    return await read_document_data(store, participants_path(ceremony_id))
