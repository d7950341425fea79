"""Collection Reader and Document Mapper.

``read_collection`` is the primitive every other reader builds on.  It
never recovers from store errors: ``StoreUnavailableError`` and friends
reach the caller unchanged.
"""

from __future__ import annotations

from ceremony_spine.models.documents import DocumentData, DocumentInfo
from ceremony_spine.store.base import DocumentSnapshot, DocumentStore


async def read_collection(store: DocumentStore, path: str) -> list[DocumentSnapshot]:
    """Every document currently stored at ``path``, in store order."""
    return await store.list_collection(path)


def to_document_info(snapshot: DocumentSnapshot) -> DocumentInfo:
    """``DocumentSnapshot -> {id, reference, data}``.  Total; fields are not validated."""
    return DocumentInfo(id=snapshot.id, reference=snapshot.reference, data=snapshot.to_dict())


def to_document_data(snapshot: DocumentSnapshot) -> DocumentData:
    """``DocumentSnapshot -> {id, data}``."""
    return DocumentData(id=snapshot.id, data=snapshot.to_dict())


async def read_document_infos(store: DocumentStore, path: str) -> list[DocumentInfo]:
    return [to_document_info(s) for s in await read_collection(store, path)]


async def read_document_data(store: DocumentStore, path: str) -> list[DocumentData]:
    return [to_document_data(s) for s in await read_collection(store, path)]
