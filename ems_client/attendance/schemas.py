"""Attendance Pydantic schemas."""

from __future__ import annotations

from typing import Dict, List, Optional

from ems_client.common.constants import AttendanceState, WorkLocation
from ems_client.common.models import ApiModel


class Attendance(ApiModel):
    id: Optional[int] = None
    employee_id: int
    employee_name: Optional[str] = None
    check_in_time: str
    check_out_time: Optional[str] = None
    work_date: str
    work_location: WorkLocation
    work_location_display: Optional[str] = None
    hours_worked: Optional[float] = None
    notes: Optional[str] = None
    is_active: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CheckInRequest(ApiModel):
    employee_id: int
    work_location: WorkLocation
    notes: Optional[str] = None


class CheckOutRequest(ApiModel):
    employee_id: int
    notes: Optional[str] = None


class WorkLocationOption(ApiModel):
    value: str
    label: str
    icon: Optional[str] = None


class AttendanceStatus(ApiModel):
    """``/attendance/status/{id}``: whether the employee is checked in now."""

    is_checked_in: bool = False
    attendance: Optional[Attendance] = None


class DashboardStats(ApiModel):
    total_employees: int = 0
    employees_on_leave: int = 0
    employees_checked_in: int = 0
    employees_by_location: Dict[str, int] = {}
    average_hours_today: float = 0.0


class EmployeeWorkSummary(ApiModel):
    employee_id: int
    employee_name: str
    email: Optional[str] = None
    job_title: Optional[str] = None
    total_hours_this_week: float = 0.0
    total_hours_this_month: float = 0.0
    weekly_attendance: List[Attendance] = []
    days_worked_this_week: int = 0
    days_worked_this_month: int = 0
    current_status: Optional[AttendanceState] = None
