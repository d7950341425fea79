"""Tests for DashboardState: refresh, search filtering, error surfacing."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from ceremony_spine.core.errors import StorePermissionError, StoreUnavailableError
from ceremony_spine.state import DashboardState
from ceremony_spine.store.memory import InMemoryDocumentStore


class _DeniedStore(InMemoryDocumentStore):
    async def list_collection(self, path):
        raise StorePermissionError("denied by security rules")


class TestRefresh:
    @pytest.mark.asyncio
    async def test_loads_projects(self, demo_store):
        state = DashboardState()
        assert await state.refresh(demo_store)
        assert [p.id for p in state.projects] == ["A8CVrp2MMx7KO512KFdv", "rln-2023"]
        assert state.error is None
        assert not state.loading

    @pytest.mark.asyncio
    async def test_store_failure_kept_and_logged(self, demo_store):
        await demo_store.close()
        state = DashboardState()

        with capture_logs() as logs:
            ok = await state.refresh(demo_store)

        assert not ok
        assert isinstance(state.error, StoreUnavailableError)
        assert state.projects == []
        assert not state.loading
        failed = [e for e in logs if e["event"] == "dashboard.refresh_failed"]
        assert failed[0]["error_type"] == "StoreUnavailableError"
        assert failed[0]["log_level"] == "error"

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_projects(self, demo_store):
        state = DashboardState()
        await state.refresh(demo_store)
        await demo_store.close()

        assert not await state.refresh(demo_store)
        assert len(state.projects) == 2

    @pytest.mark.asyncio
    async def test_success_clears_error(self, demo_store):
        state = DashboardState()
        assert not await state.refresh(_DeniedStore())
        assert isinstance(state.error, StorePermissionError)

        assert await state.refresh(demo_store)
        assert state.error is None


class TestSearch:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "search,expected",
        [
            ("", ["A8CVrp2MMx7KO512KFdv", "rln-2023"]),
            ("RLN", ["rln-2023"]),
            ("example ceremony", ["A8CVrp2MMx7KO512KFdv"]),
            ("nothing-matches", []),
        ],
    )
    async def test_visible_projects(self, demo_store, search, expected):
        state = DashboardState(search=search)
        await state.refresh(demo_store)
        assert [p.id for p in state.visible_projects] == expected
