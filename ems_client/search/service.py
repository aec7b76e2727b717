"""Search service: one query across employees, documents, leaves and rotas."""

from __future__ import annotations

from ems_client.api import ApiClient
from ems_client.search.schemas import SearchResults


class SearchService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def search(self, query: str) -> SearchResults:
        """Blank queries short-circuit to an empty result without a request."""
        query = (query or "").strip()
        if not query:
            return SearchResults()
        data = await self._api.get(self._api.url("search"), params={"q": query})
        return SearchResults.from_response(data or {})
