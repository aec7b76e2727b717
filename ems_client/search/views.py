"""Global search box: one query, results grouped into tabs."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ems_client.common.exceptions import AppException
from ems_client.common.views import ViewModel
from ems_client.navigation.routes import Route
from ems_client.search.schemas import SearchResults
from ems_client.search.service import SearchService

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2

TABS = ("all", "employees", "documents", "leaves", "rotas")

# Where a clicked result opens, and the query parameter that selects it
RESULT_TARGETS: dict[str, tuple[Route, str]] = {
    "employees": (Route.employees, "employeeId"),
    "documents": (Route.document_detail, "id"),
    "leaves": (Route.leaves, "leaveId"),
    "rotas": (Route.rota, "rotaId"),
}


class GlobalSearchView(ViewModel):
    """Search failures are logged and shown as an empty result list."""

    def __init__(self, service: SearchService) -> None:
        super().__init__()
        self._service = service
        self.query = ""
        self.results = SearchResults()
        self.active_tab = "all"
        self.is_open = False

    async def search(self, query: Optional[str]) -> SearchResults:
        self.query = query or ""
        term = self.query.strip()
        if len(term) < MIN_QUERY_LENGTH:
            self.results = SearchResults()
            self.is_open = False
            return self.results

        self.loading = True
        try:
            self.results = await self._service.search(term)
        except AppException as exc:
            logger.warning("search %r failed: %s", term, exc.detail)
            self.results = SearchResults()
        finally:
            self.loading = False
        self.is_open = True
        return self.results

    def set_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown search tab '{tab}'")
        self.active_tab = tab

    def count(self, tab: str) -> int:
        if tab == "all":
            return self.results.total
        return len(getattr(self.results, tab))

    @property
    def visible(self) -> dict[str, list[Any]]:
        """Result sections for the active tab; the others are empty."""
        return {
            section: list(getattr(self.results, section))
            if self.active_tab in ("all", section) else []
            for section in TABS[1:]
        }

    @property
    def has_results(self) -> bool:
        return self.results.total > 0

    def close(self) -> None:
        self.is_open = False
        self.query = ""
        self.results = SearchResults()
        self.active_tab = "all"

    def open_result(self, section: str, result_id: int) -> tuple[Route, dict[str, Any]]:
        """Target screen for a clicked result; closes the search box."""
        route, key = RESULT_TARGETS[section]
        self.close()
        return route, {key: result_id}
