"""Rota (shift schedule) Pydantic schemas."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import Field

from ems_client.common.models import ApiModel


class Rota(ApiModel):
    id: int
    hotel_name: Optional[str] = None
    department: Optional[str] = None
    file_name: Optional[str] = None
    start_date: str
    end_date: str
    uploaded_date: Optional[str] = None
    uploaded_by_name: Optional[str] = None
    total_employees: int = 0


class RotaScheduleEntry(ApiModel):
    """One flat row of ``/rotas/{id}/schedules``."""

    id: Optional[int] = None
    rota_id: Optional[int] = None
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    schedule_date: Optional[str] = None
    day_of_week: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duty: Optional[str] = None
    is_off_day: Optional[bool] = None


class DaySchedule(ApiModel):
    day_of_week: str = ""
    duty: str = "OFF"
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_off_day: bool = False


class EmployeeRotaRow(ApiModel):
    """Grouped view: one employee, schedules keyed by ``YYYY-MM-DD``."""

    employee_id: int
    employee_name: str = "Unknown"
    schedules: Dict[str, DaySchedule] = Field(default_factory=dict)


class DaySchedulePreview(ApiModel):
    date: str
    day_of_week: str
    duty: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_off_day: bool = False


class EmployeeSchedulePreview(ApiModel):
    employee_id: int
    employee_name: str
    total_days: int = 0
    work_days: int = 0
    off_days: int = 0
    schedules: List[DaySchedulePreview] = []


class RotaUploadPreview(ApiModel):
    rota_id: int
    hotel_name: Optional[str] = None
    department: Optional[str] = None
    file_name: Optional[str] = None
    start_date: str
    end_date: str
    uploaded_date: Optional[str] = None
    uploaded_by_name: Optional[str] = None
    total_schedules: int = 0
    total_employees: int = 0
    employee_schedules: List[EmployeeSchedulePreview] = []
