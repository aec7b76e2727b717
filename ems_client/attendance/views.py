"""Attendance screen: check in / check out for the signed-in employee."""

from __future__ import annotations

from typing import Optional

from ems_client.attendance.schemas import Attendance, AttendanceStatus
from ems_client.attendance.service import AttendanceService
from ems_client.common.constants import WorkLocation
from ems_client.common.exceptions import ValidationException
from ems_client.common.views import ViewModel


class AttendanceView(ViewModel):
    def __init__(self, service: AttendanceService, employee_id: Optional[int]) -> None:
        super().__init__()
        self._service = service
        self.employee_id = employee_id
        self.status: Optional[AttendanceStatus] = None

    @property
    def is_checked_in(self) -> bool:
        return bool(self.status and self.status.is_checked_in)

    def _require_employee(self) -> int:
        if self.employee_id is None:
            raise ValidationException(
                {"employee_id": ["No employee profile is linked to this account."]},
            )
        return self.employee_id

    async def _load_status(self) -> AttendanceStatus:
        return await self._service.get_current_status(self._require_employee())

    async def refresh(self) -> None:
        status = await self._run(self._load_status(), context="attendance status")
        if status is not None:
            self.status = status

    async def _check_in(self, work_location: Optional[str], notes: Optional[str]) -> Attendance:
        employee_id = self._require_employee()
        if not work_location:
            raise ValidationException({"work_location": ["Please select a work location"]})
        try:
            location = WorkLocation(work_location)
        except ValueError:
            raise ValidationException({"work_location": [f"Unknown work location '{work_location}'"]})
        return await self._service.check_in(employee_id, location, notes)

    async def check_in(self, work_location: Optional[str], notes: Optional[str] = None) -> Optional[Attendance]:
        self.reset_messages()
        record = await self._run(self._check_in(work_location, notes), context="check in")
        if record is not None:
            self.status = AttendanceStatus(is_checked_in=True, attendance=record)
            self.success = "Checked in successfully."
        return record

    async def _check_out(self, notes: Optional[str]) -> Attendance:
        return await self._service.check_out(self._require_employee(), notes)

    async def check_out(self, notes: Optional[str] = None) -> Optional[Attendance]:
        self.reset_messages()
        record = await self._run(self._check_out(notes), context="check out")
        if record is not None:
            self.status = AttendanceStatus(is_checked_in=False, attendance=record)
            self.success = "Checked out successfully."
        return record
