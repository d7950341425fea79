"""Ordered Circuit Fetcher.

Circuits of a ceremony are contributed to as a pipeline: a contributor
works on circuit ``n`` while the next one works on ``n - 1``.  That only
holds if every consumer sees circuits in ``sequencePosition`` order, so
the list is always fully sorted here before it leaves the package.
"""

from __future__ import annotations

from typing import Any

from ceremony_spine.aggregation.collections import read_document_infos
from ceremony_spine.core.logging import get_logger
from ceremony_spine.models.documents import DocumentInfo
from ceremony_spine.store.base import DocumentStore, circuits_path

logger = get_logger(__name__)


def sequence_position(circuit: DocumentInfo) -> int | None:
    """The circuit's ``sequencePosition`` as an int, or ``None`` if unusable.

    Integral doubles (``1.0``) count as positions; booleans, strings and
    fractional numbers do not.
    """
    position: Any = circuit.data.get("sequencePosition")
    if isinstance(position, bool):
        return None
    if isinstance(position, int):
        return position
    if isinstance(position, float) and position.is_integer():
        return int(position)
    return None


def circuit_sort_key(circuit: DocumentInfo) -> tuple[int, int, str]:
    """Ascending ``sequencePosition``; ties and unpositioned circuits by id.

    Circuits whose position is missing or not an integer go after all
    positioned ones.
    """
    position = sequence_position(circuit)
    if position is None:
        return (1, 0, circuit.id)
    return (0, position, circuit.id)


def sort_circuits(circuits: list[DocumentInfo]) -> list[DocumentInfo]:
    return sorted(circuits, key=circuit_sort_key)


async def get_ceremony_circuits(store: DocumentStore, ceremony_id: str) -> list[DocumentInfo]:
    """Circuits of ``ceremony_id`` ordered by ``sequencePosition``.

    Duplicate or unusable positions still produce a total order, but the
    result is logged as ambiguous.
    """
    circuits = await read_document_infos(store, circuits_path(ceremony_id))

    positions = [sequence_position(c) for c in circuits]
    positioned = [p for p in positions if p is not None]
    distinct = len(set(positioned))
    unpositioned = len(positions) - len(positioned)
    if unpositioned or distinct != len(positioned):
        logger.warning(
            "circuits.ambiguous_sequence",
            ceremony_id=ceremony_id,
            circuits=len(circuits),
            distinct_positions=distinct,
            unpositioned=unpositioned,
        )

    return sort_circuits(circuits)
