"""Build a ``DocumentStore`` from settings."""

from __future__ import annotations

from ceremony_spine.core.enums import StoreBackend
from ceremony_spine.core.errors import InvalidConfigError, MissingConfigError
from ceremony_spine.core.logging import get_logger
from ceremony_spine.core.settings import CeremonySettings, get_settings
from ceremony_spine.store.base import DocumentStore
from ceremony_spine.store.firestore import FirestoreDocumentStore
from ceremony_spine.store.memory import InMemoryDocumentStore

logger = get_logger(__name__)


def create_store(settings: CeremonySettings | None = None) -> DocumentStore:
    """Create the store handle every reader takes as its first argument.

    The caller owns the handle and should ``await store.close()`` when done.
    """
    settings = settings or get_settings()
    backend = settings.store_backend

    if backend == StoreBackend.MEMORY:
        if settings.fixture_path is None:
            store = InMemoryDocumentStore()
        else:
            store = InMemoryDocumentStore.from_fixture(settings.fixture_path)
    elif backend == StoreBackend.FIRESTORE:
        if not settings.firestore_project_id:
            raise MissingConfigError(
                "firestore_project_id",
                "CEREMONY_FIRESTORE_PROJECT_ID is required for the firestore backend",
            )
        store = FirestoreDocumentStore(
            settings.firestore_project_id,
            api_key=_secret(settings.firestore_api_key),
            id_token=_secret(settings.firestore_id_token),
            database=settings.firestore_database,
            base_url=settings.firestore_base_url,
            timeout=settings.request_timeout,
        )
    else:  # pragma: no cover - enum is exhaustive
        raise InvalidConfigError("store_backend", backend)

    logger.info("store.created", backend=backend.value)
    return store


def _secret(value) -> str | None:
    return value.get_secret_value() if value is not None else None
