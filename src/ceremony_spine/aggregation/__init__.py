"""Read/aggregation path: collections → typed-free documents → projects.

collections.py     read_collection, to_document_info, to_document_data
circuits.py        get_ceremony_circuits (ordered by sequencePosition)
avatars.py         get_participants_avatars (chunked collect-all fan-out)
contributions.py   get_contributions
ceremonies.py      get_ceremonies, get_ceremony, get_ceremony_participants
projects.py        list_projects, load_project
"""

from ceremony_spine.aggregation.avatars import (
    fetch_participants_avatars,
    get_participants_avatars,
)
from ceremony_spine.aggregation.ceremonies import (
    get_ceremonies,
    get_ceremony,
    get_ceremony_participants,
)
from ceremony_spine.aggregation.circuits import (
    circuit_sort_key,
    get_ceremony_circuits,
    sequence_position,
    sort_circuits,
)
from ceremony_spine.aggregation.collections import (
    read_collection,
    read_document_data,
    read_document_infos,
    to_document_data,
    to_document_info,
)
from ceremony_spine.aggregation.contributions import get_contributions
from ceremony_spine.aggregation.projects import list_projects, load_project

__all__ = [
    "circuit_sort_key",
    "fetch_participants_avatars",
    "get_ceremonies",
    "get_ceremony",
    "get_ceremony_circuits",
    "get_ceremony_participants",
    "get_contributions",
    "get_participants_avatars",
    "list_projects",
    "load_project",
    "read_collection",
    "read_document_data",
    "read_document_infos",
    "sequence_position",
    "sort_circuits",
    "to_document_data",
    "to_document_info",
]
