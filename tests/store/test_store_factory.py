"""Tests for create_store()."""

from __future__ import annotations

import pytest

from ceremony_spine.core.enums import StoreBackend
from ceremony_spine.core.errors import MissingConfigError
from ceremony_spine.core.settings import CeremonySettings
from ceremony_spine.store.factory import create_store
from ceremony_spine.store.firestore import FirestoreDocumentStore
from ceremony_spine.store.memory import InMemoryDocumentStore


class TestCreateStore:
    @pytest.mark.asyncio
    async def test_memory_empty(self):
        store = create_store(CeremonySettings(store_backend=StoreBackend.MEMORY))
        assert isinstance(store, InMemoryDocumentStore)
        assert await store.list_collection("ceremonies") == []

    @pytest.mark.asyncio
    async def test_memory_from_fixture(self, demo_fixture_path):
        store = create_store(
            CeremonySettings(store_backend=StoreBackend.MEMORY, fixture_path=demo_fixture_path)
        )
        docs = await store.list_collection("ceremonies")
        assert len(docs) == 2

    def test_firestore_requires_project(self):
        with pytest.raises(MissingConfigError) as exc_info:
            create_store(CeremonySettings(store_backend=StoreBackend.FIRESTORE))
        assert exc_info.value.key == "firestore_project_id"

    @pytest.mark.asyncio
    async def test_firestore(self):
        store = create_store(CeremonySettings(
            store_backend=StoreBackend.FIRESTORE,
            firestore_project_id="demo",
            firestore_api_key="secret",
        ))
        try:
            assert isinstance(store, FirestoreDocumentStore)
            assert store.root == "projects/demo/databases/(default)/documents"
        finally:
            await store.close()

    @pytest.mark.asyncio
    async def test_defaults_come_from_env(self, monkeypatch, demo_fixture_path):
        monkeypatch.setenv("CEREMONY_STORE_BACKEND", "memory")
        monkeypatch.setenv("CEREMONY_FIXTURE_PATH", str(demo_fixture_path))
        store = create_store()
        assert isinstance(store, InMemoryDocumentStore)
        assert len(await store.list_collection("ceremonies")) == 2
