"""Rota service: uploads, listings, and schedule grouping."""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from ems_client.api import ApiClient, FilePart
from ems_client.common.exceptions import ResponseDecodeError
from ems_client.common.pagination import PageResponse, PaginationParams
from ems_client.rota.schemas import (
    DaySchedule,
    EmployeeRotaRow,
    Rota,
    RotaScheduleEntry,
    RotaUploadPreview,
)

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _hhmm(value: Optional[str]) -> Optional[str]:
    """``"09:30:00.000"`` → ``"09:30"``."""
    return str(value)[:5] if value else None


def group_schedules(entries: Iterable[Any]) -> tuple[list[EmployeeRotaRow], list[str]]:
    """Flat schedule entries → per-employee rows plus the sorted date axis.

    Entries without a valid ``YYYY-MM-DD`` date or an employee id are
    skipped. Employees keep first-seen order.
    """
    rows: dict[int, EmployeeRotaRow] = {}
    dates: set[str] = set()

    for raw in entries:
        try:
            entry = raw if isinstance(raw, RotaScheduleEntry) else RotaScheduleEntry.model_validate(raw)
        except ValidationError:
            logger.warning("Skipping malformed schedule entry: %r", raw)
            continue

        date_str = str(entry.schedule_date).split("T")[0] if entry.schedule_date else None
        if not date_str or not _DATE_RE.match(date_str):
            logger.warning("Skipping schedule entry with bad date: %r", entry.schedule_date)
            continue
        if entry.employee_id is None:
            logger.warning("Skipping schedule entry without employee id")
            continue

        dates.add(date_str)
        row = rows.get(entry.employee_id)
        if row is None:
            row = EmployeeRotaRow(
                employee_id=entry.employee_id,
                employee_name=entry.employee_name or "Unknown",
            )
            rows[entry.employee_id] = row

        row.schedules[date_str] = DaySchedule(
            day_of_week=entry.day_of_week or "",
            duty=entry.duty or "OFF",
            start_time=_hhmm(entry.start_time),
            end_time=_hhmm(entry.end_time),
            is_off_day=bool(entry.is_off_day),
        )

    return list(rows.values()), sorted(dates)


class RotaService:
    """Wraps ``/rotas``. OCR and Excel parsing happen server-side."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def _url(self, *parts: Any) -> str:
        return self._api.url("rotas", *parts)

    async def upload_rota(self, file: FilePart) -> Rota:
        data = await self._api.post_multipart(self._url("upload"), files={"file": file})
        return Rota.from_response(data)

    async def upload_excel_rota(self, file: FilePart) -> RotaUploadPreview:
        data = await self._api.post_multipart(self._url("upload-excel"), files={"file": file})
        return RotaUploadPreview.from_response(data)

    async def create_manual_rota(self, rota_data: dict[str, Any]) -> Any:
        return await self._api.post(self._url("manual"), rota_data)

    async def get_all_rotas(self) -> list[Rota]:
        return Rota.list_from_response(await self._api.get(self._url()))

    async def get_all_rotas_paginated(
        self, pagination: Optional[PaginationParams] = None,
    ) -> PageResponse[Rota]:
        pagination = pagination or PaginationParams()
        data = await self._api.get(self._url("paginated"), params=pagination.as_query())
        return PageResponse[Rota].from_response(data)

    async def get_rota_schedules(self, rota_id: int) -> list[RotaScheduleEntry]:
        data = await self._api.get(self._url(rota_id, "schedules"))
        return RotaScheduleEntry.list_from_response(data)

    async def get_grouped_schedules(self, rota_id: int) -> tuple[list[EmployeeRotaRow], list[str]]:
        """Malformed entries are skipped; a body that is not a list is an error."""
        data = await self._api.get(self._url(rota_id, "schedules"))
        if data is None:
            return [], []
        if not isinstance(data, list):
            raise ResponseDecodeError("list[RotaScheduleEntry]")
        return group_schedules(data)

    async def get_employee_current_week_schedule(self, employee_id: int) -> list[dict[str, Any]]:
        return await self._api.get(self._url("employee", employee_id, "current-week")) or []

    async def get_rota_preview(self, rota_id: int) -> RotaUploadPreview:
        return RotaUploadPreview.from_response(await self._api.get(self._url(rota_id, "preview")))

    async def delete_rota(self, rota_id: int) -> None:
        await self._api.delete(self._url(rota_id))
