"""
Shared pytest fixtures and configuration for ceremony-spine tests.

This module provides:
- Settings cache / environment isolation
- Seeded in-memory stores (demo fixture, N-participant ceremonies)
- A fault-injecting store for partial-failure tests

Usage:
    Fixtures are auto-discovered by pytest.  Use them as function arguments:

    @pytest.mark.asyncio
    async def test_something(demo_store):
        ...
"""

import asyncio
import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog

# Ensure ceremony_spine package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ceremony_spine.core.errors import StoreUnavailableError
from ceremony_spine.core.settings import clear_settings_cache
from ceremony_spine.store.base import DocumentSnapshot
from ceremony_spine.store.memory import InMemoryDocumentStore

DEMO_FIXTURE = Path(__file__).parent.parent / "examples" / "demo_ceremony.json"
DEMO_CEREMONY_ID = "A8CVrp2MMx7KO512KFdv"


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.path).relative_to(Path(__file__).parent)

        if "cli" in test_path.parts or "projects" in test_path.name:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Settings Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop cached settings and any CEREMONY_* variables from the host env."""
    import os

    for key in list(os.environ):
        if key.startswith("CEREMONY_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(Path(__file__).parent)  # keep a developer .env out of tests
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """CLI commands reconfigure structlog; start every test from defaults."""
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


# =============================================================================
# Fault Injection
# =============================================================================


class FaultyDocumentStore(InMemoryDocumentStore):
    """In-memory store whose membership queries fail for chosen ids.

    Any membership query whose values include a poisoned id raises the
    installed error instead of answering.  ``delays`` lets a query for a
    given id finish later than its siblings.
    """

    def __init__(self, collections: dict[str, dict[str, dict[str, Any]]] | None = None) -> None:
        super().__init__(collections)
        self.poisoned: dict[str, Exception] = {}
        self.delays: dict[str, float] = {}
        self.cancelled: list[tuple[str, ...]] = []

    def install_fault(self, document_id: str, error: Exception | None = None) -> None:
        self.poisoned[document_id] = error or StoreUnavailableError(f"injected fault for {document_id}")

    async def query_membership(self, collection: str, field: str, values: list[str]) -> list[DocumentSnapshot]:
        delay = max((self.delays.get(v, 0.0) for v in values), default=0.0)
        try:
            if delay:
                await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self.cancelled.append(tuple(values))
            raise
        for value in values:
            if value in self.poisoned:
                raise self.poisoned[value]
        return await super().query_membership(collection, field, values)


def build_ceremony(
    ceremony_id: str,
    *,
    participants: int = 0,
    with_avatar: Callable[[int], bool] = lambda i: True,
) -> dict[str, dict[str, dict[str, Any]]]:
    """Collections for one ceremony with ``participants`` numbered p00, p01, ..."""
    ids = [f"p{i:02d}" for i in range(participants)]
    return {
        "ceremonies": {ceremony_id: {"title": f"Ceremony {ceremony_id}", "state": "OPENED"}},
        f"ceremonies/{ceremony_id}/participants": {pid: {"status": "DONE"} for pid in ids},
        "avatars": {
            pid: {"avatarUrl": f"https://avatars.test/{pid}.png"}
            for i, pid in enumerate(ids)
            if with_avatar(i)
        },
    }


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def demo_fixture_path() -> Path:
    return DEMO_FIXTURE


@pytest.fixture
def demo_ceremony_id() -> str:
    return DEMO_CEREMONY_ID


@pytest.fixture
def demo_store() -> InMemoryDocumentStore:
    """Store seeded from ``examples/demo_ceremony.json``."""
    return InMemoryDocumentStore.from_fixture(DEMO_FIXTURE)


@pytest.fixture
def ceremony_store_factory() -> Callable[..., FaultyDocumentStore]:
    """Build a fault-injectable store holding one ceremony.

        store = ceremony_store_factory("c1", participants=25)
        store.install_fault("p12")
    """

    def _factory(ceremony_id: str = "c1", **kwargs: Any) -> FaultyDocumentStore:
        return FaultyDocumentStore(build_ceremony(ceremony_id, **kwargs))

    return _factory
