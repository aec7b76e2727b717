"""Dashboard service.

Tenant users read ``/dashboard/stats``; ROOT reads the cross-organization
summary at ``/root/dashboard/stats``.
"""

from __future__ import annotations

from ems_client.api import ApiClient
from ems_client.dashboard.schemas import RootDashboardStats, TenantDashboardStats


class DashboardService:
    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get_stats(self) -> TenantDashboardStats:
        data = await self._api.get(self._api.url("dashboard", "stats"))
        return TenantDashboardStats.from_response(data or {})

    async def get_root_stats(self) -> RootDashboardStats:
        data = await self._api.get(self._api.url("root_dashboard", "stats"))
        return RootDashboardStats.from_response(data or {})
