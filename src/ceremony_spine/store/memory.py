"""
In-memory document store.

Manifesto:
    Tests and offline demos need a store that behaves like the remote one
    (async calls, membership-filter ceiling, missing documents) without any
    network.  Every membership query is recorded so callers can assert on
    how many sub-queries a fan-out issued and how big each one was.

Documents keep insertion order per collection, which stands in for the
store-defined iteration order of the real backend.

Tags:
    ceremony-spine, store, in-memory, asyncio, testing, fixtures

Doc-Types:
    api-reference
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ceremony_spine.core.errors import (
    ErrorContext,
    MembershipLimitError,
    StoreUnavailableError,
)
from ceremony_spine.core.logging import get_logger
from ceremony_spine.models.documents import DocumentReference
from ceremony_spine.store.base import (
    DOCUMENT_ID_FIELD,
    MEMBERSHIP_FILTER_LIMIT,
    DocumentSnapshot,
)

__all__ = ["InMemoryDocumentStore", "MembershipQuery"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class MembershipQuery:
    """Record of one ``query_membership`` call."""

    collection: str
    field: str
    values: tuple[str, ...]


def _normalize(path: str) -> str:
    return path.strip("/")


class InMemoryDocumentStore:
    """Process-local :class:`~ceremony_spine.store.base.DocumentStore`.

    Example::

        store = InMemoryDocumentStore({
            "ceremonies": {"c1": {"title": "Example"}},
            "ceremonies/c1/circuits": {"k1": {"sequencePosition": 0}},
        })
        docs = await store.list_collection("ceremonies")
    """

    def __init__(self, collections: Mapping[str, Mapping[str, dict[str, Any]]] | None = None) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._closed = False
        self.queries: list[MembershipQuery] = []
        self.reads: list[str] = []
        for path, documents in (collections or {}).items():
            for document_id, data in documents.items():
                self.add(path, document_id, data)

    @classmethod
    def from_fixture(cls, path: str | Path) -> InMemoryDocumentStore:
        """Load a JSON fixture mapping collection paths to ``{id: data}``."""
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        logger.debug("memory_store.fixture_loaded", path=str(path), collections=len(raw))
        return cls(raw)

    # ── Seeding ──────────────────────────────────────────────────────

    def add(self, collection_path: str, document_id: str, data: dict[str, Any]) -> InMemoryDocumentStore:
        """Insert or replace a document.  Returns ``self`` for chaining."""
        self._collections.setdefault(_normalize(collection_path), {})[document_id] = dict(data)
        return self

    # ── DocumentStore protocol ───────────────────────────────────────

    async def list_collection(self, path: str) -> list[DocumentSnapshot]:
        self._ensure_open(path)
        path = _normalize(path)
        self.reads.append(path)
        await asyncio.sleep(0)
        return [
            self._snapshot(path, document_id, data)
            for document_id, data in self._collections.get(path, {}).items()
        ]

    async def get_document(self, path: str, document_id: str) -> DocumentSnapshot | None:
        self._ensure_open(path)
        path = _normalize(path)
        await asyncio.sleep(0)
        data = self._collections.get(path, {}).get(document_id)
        if data is None:
            return None
        return self._snapshot(path, document_id, data)

    async def query_membership(
        self,
        collection: str,
        field: str,
        values: list[str],
    ) -> list[DocumentSnapshot]:
        if len(values) > MEMBERSHIP_FILTER_LIMIT:
            raise MembershipLimitError(len(values), MEMBERSHIP_FILTER_LIMIT)
        self._ensure_open(collection)
        collection = _normalize(collection)
        self.queries.append(MembershipQuery(collection, field, tuple(values)))
        await asyncio.sleep(0)

        wanted = set(values)
        documents = self._collections.get(collection, {})
        if field == DOCUMENT_ID_FIELD:
            matches = [(i, d) for i, d in documents.items() if i in wanted]
        else:
            matches = [(i, d) for i, d in documents.items() if d.get(field) in wanted]
        return [self._snapshot(collection, i, d) for i, d in matches]

    async def close(self) -> None:
        self._closed = True

    # ── Inspection ───────────────────────────────────────────────────

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self, path: str) -> None:
        if self._closed:
            raise StoreUnavailableError(
                "In-memory store is closed",
                context=ErrorContext(collection_path=path),
            )

    @staticmethod
    def _snapshot(path: str, document_id: str, data: dict[str, Any]) -> DocumentSnapshot:
        return DocumentSnapshot(
            id=document_id,
            reference=DocumentReference.of(path, document_id),
            data=dict(data),
        )
