"""
ceremony-spine - read/aggregation client for trusted setup ceremonies.

Fetches ceremonies, their circuits, participants, contributions and
avatars from a document store and assembles them into dashboard
``Project`` aggregates.

Example::

    import asyncio
    from ceremony_spine import create_store, load_project

    async def main():
        store = create_store()
        try:
            project = await load_project(store, "A8CVrp2MMx7KO512KFdv", include_avatars=True)
        finally:
            await store.close()
        print(len(project.circuits), len(project.avatars))

    asyncio.run(main())
"""

__version__ = "0.1.0"

from ceremony_spine.aggregation import (
    fetch_participants_avatars,
    get_ceremonies,
    get_ceremony,
    get_ceremony_circuits,
    get_ceremony_participants,
    get_contributions,
    get_participants_avatars,
    list_projects,
    load_project,
    read_collection,
    to_document_data,
    to_document_info,
)
from ceremony_spine.execution import FanoutMode, FanoutResult, chunk, run_fanout
from ceremony_spine.models import DocumentData, DocumentInfo, Project
from ceremony_spine.state import DashboardState
from ceremony_spine.store import (
    DocumentStore,
    FirestoreDocumentStore,
    InMemoryDocumentStore,
    create_store,
)

__all__ = [
    "DashboardState",
    "DocumentData",
    "DocumentInfo",
    "DocumentStore",
    "FanoutMode",
    "FanoutResult",
    "FirestoreDocumentStore",
    "InMemoryDocumentStore",
    "Project",
    "chunk",
    "create_store",
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
    "run_fanout",
    "to_document_data",
    "to_document_info",
    "__version__",
]
