"""Attendance service: check-in/out and work summaries."""

from __future__ import annotations

from typing import Any, Optional

from ems_client.api import ApiClient
from ems_client.attendance.schemas import (
    Attendance,
    AttendanceStatus,
    CheckInRequest,
    CheckOutRequest,
    DashboardStats,
    EmployeeWorkSummary,
    WorkLocationOption,
)
from ems_client.common.constants import WorkLocation


class AttendanceService:
    """Wraps ``/attendance``."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def _url(self, *parts: Any) -> str:
        return self._api.url("attendance", *parts)

    async def check_in(
        self, employee_id: int, work_location: WorkLocation, notes: Optional[str] = None,
    ) -> Attendance:
        body = CheckInRequest(employee_id=employee_id, work_location=work_location, notes=notes)
        return Attendance.from_response(await self._api.post(self._url("check-in"), body.to_payload()))

    async def check_out(self, employee_id: int, notes: Optional[str] = None) -> Attendance:
        body = CheckOutRequest(employee_id=employee_id, notes=notes)
        return Attendance.from_response(await self._api.post(self._url("check-out"), body.to_payload()))

    async def get_current_status(self, employee_id: int) -> AttendanceStatus:
        return AttendanceStatus.from_response(await self._api.get(self._url("status", employee_id)))

    async def get_attendance_by_date_range(
        self, employee_id: int, start_date: str, end_date: str,
    ) -> list[Attendance]:
        data = await self._api.get(
            self._url("employee", employee_id),
            params={"startDate": start_date, "endDate": end_date},
        )
        return Attendance.list_from_response(data)

    async def get_employee_work_summary(self, employee_id: int) -> EmployeeWorkSummary:
        return EmployeeWorkSummary.from_response(await self._api.get(self._url("summary", employee_id)))

    async def get_dashboard_stats(self) -> DashboardStats:
        return DashboardStats.from_response(await self._api.get(self._url("dashboard", "stats")))

    async def get_today_active_check_ins(self) -> list[Attendance]:
        data = await self._api.get(self._url("active-today"))
        return Attendance.list_from_response(data)

    async def get_work_locations(self) -> list[WorkLocationOption]:
        data = await self._api.get(self._url("work-locations"))
        return WorkLocationOption.list_from_response(data)
