"""View state for the ceremonies dashboard.

Holds the loaded projects, the search box text and a loading flag.  A store
failure during ``refresh`` is logged here, at the boundary, and kept on
``error`` so the view can show an empty list with a message instead of
crashing.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ceremony_spine.aggregation.projects import list_projects
from ceremony_spine.core.errors import StoreError
from ceremony_spine.core.logging import get_logger
from ceremony_spine.models.project import Project
from ceremony_spine.store.base import DocumentStore

logger = get_logger(__name__)


@dataclass
class DashboardState:
    projects: list[Project] = field(default_factory=list)
    search: str = ""
    loading: bool = False
    error: StoreError | None = None

    @property
    def visible_projects(self) -> list[Project]:
        """Projects matching ``search`` (all of them when it is blank)."""
        return [p for p in self.projects if p.matches(self.search)]

    async def refresh(self, store: DocumentStore) -> bool:
        """Reload projects.  Returns False when the store failed."""
        self.loading = True
        try:
            self.projects = await list_projects(store)
            self.error = None
            return True
        except StoreError as exc:
            logger.error("dashboard.refresh_failed", **exc.to_dict())
            self.error = exc
            return False
        finally:
            self.loading = False
