"""The view-ready aggregate: one ceremony and whatever was loaded around it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ceremony_spine.models.ceremony import Ceremony, parse_document
from ceremony_spine.models.documents import DocumentData


@dataclass
class Project:
    """Ceremony plus optional circuits, participants, contributions and avatars.

    ``None`` means "not loaded", an empty list means "loaded, nothing there".
    """

    ceremony: DocumentData
    circuits: list[DocumentData] | None = None
    participants: list[DocumentData] | None = None
    contributions: list[DocumentData] | None = None
    avatars: list[str] | None = None

    @property
    def id(self) -> str:
        return self.ceremony.id

    def ceremony_record(self) -> Ceremony:
        """Typed view of the ceremony document (raises ``DocumentParseError``)."""
        return parse_document(self.ceremony, Ceremony)

    def matches(self, search: str) -> bool:
        """Case-insensitive match on title, prefix or description."""
        needle = search.strip().lower()
        if not needle:
            return True
        data = self.ceremony.data
        return any(
            needle in str(data.get(key) or "").lower()
            for key in ("title", "prefix", "description")
        )

    def to_dict(self) -> dict[str, Any]:
        def _docs(docs: list[DocumentData] | None) -> list[dict[str, Any]] | None:
            return None if docs is None else [d.to_dict() for d in docs]

        return {
            "ceremony": self.ceremony.to_dict(),
            "circuits": _docs(self.circuits),
            "participants": _docs(self.participants),
            "contributions": _docs(self.contributions),
            "avatars": self.avatars,
        }
