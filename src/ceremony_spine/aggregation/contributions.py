"""Contribution Reader."""

from __future__ import annotations

from ceremony_spine.aggregation.collections import read_document_data
from ceremony_spine.models.documents import DocumentData
from ceremony_spine.store.base import DocumentStore, contributions_path


async def get_contributions(store: DocumentStore, ceremony_id: str, circuit_id: str) -> list[DocumentData]:
    """Contributions of one circuit as ``{id, data}``, in store order."""
    return await read_document_data(store, contributions_path(ceremony_id, circuit_id))
