"""Untyped document shapes handed between the store and the readers.

``DocumentInfo`` keeps the reference alongside the payload (circuits,
participants); ``DocumentData`` drops it (ceremonies, contributions), which
is the shape the view layer consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class DocumentReference:
    """Location of a document: ``<collection path>/<document id>``."""

    path: str

    @property
    def id(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def parent(self) -> str:
        """Collection path that holds the document."""
        return self.path.rsplit("/", 1)[0]

    @classmethod
    def of(cls, collection_path: str, document_id: str) -> DocumentReference:
        return cls(f"{collection_path.strip('/')}/{document_id}")


@dataclass(frozen=True, slots=True)
class DocumentInfo:
    """``{id, reference, data}`` triple."""

    id: str
    reference: DocumentReference
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "reference": self.reference.path, "data": self.data}


@dataclass(frozen=True, slots=True)
class DocumentData:
    """``{id, data}`` pair."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "data": self.data}
