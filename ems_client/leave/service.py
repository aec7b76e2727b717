"""Leave service: apply, balances, approval workflow."""

from __future__ import annotations

from typing import Any, Optional

from ems_client.api import ApiClient, FilePart
from ems_client.common.constants import LeaveStatus
from ems_client.leave.schemas import (
    BlockedDate,
    Leave,
    LeaveApprovalRequest,
    LeaveBalance,
    LeaveRequest,
)


class LeaveService:
    """Wraps ``/leaves``. Status changes only happen server-side via
    approve / reject."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def _url(self, *parts: Any) -> str:
        return self._api.url("leaves", *parts)

    @staticmethod
    def _many(data: Any) -> list[Leave]:
        return Leave.list_from_response(data)

    async def apply_leave(
        self,
        request: LeaveRequest,
        medical_certificate: Optional[FilePart] = None,
    ) -> Leave:
        """Multipart apply; the certificate part is only sent when given."""
        form = {k: str(v) for k, v in request.to_payload().items()}
        files = {"medicalCertificate": medical_certificate} if medical_certificate else None
        data = await self._api.post_multipart(self._url(), data=form, files=files)
        return Leave.from_response(data)

    async def get_leave_balances(self, employee_id: int) -> list[LeaveBalance]:
        data = await self._api.get(self._url("balances", "employee", employee_id))
        return LeaveBalance.list_from_response(data)

    async def get_blocked_dates(self, employee_id: int) -> list[BlockedDate]:
        data = await self._api.get(self._url("blocked-dates", "employee", employee_id))
        return BlockedDate.list_from_response(data)

    async def get_medical_certificate(self, leave_id: int) -> tuple[bytes, str]:
        return await self._api.get_bytes(self._url(leave_id, "certificate"))

    async def get_all_leaves(self) -> list[Leave]:
        return self._many(await self._api.get(self._url()))

    async def get_leave_by_id(self, leave_id: int) -> Leave:
        return Leave.from_response(await self._api.get(self._url(leave_id)))

    async def get_leaves_by_employee_id(self, employee_id: int) -> list[Leave]:
        return self._many(await self._api.get(self._url("employee", employee_id)))

    async def get_leaves_by_status(self, status: LeaveStatus) -> list[Leave]:
        return self._many(await self._api.get(self._url("status", status.value)))

    async def update_leave(self, leave_id: int, request: LeaveRequest) -> Leave:
        return Leave.from_response(await self._api.put(self._url(leave_id), request.to_payload()))

    async def approve_leave(self, leave_id: int, request: LeaveApprovalRequest) -> Leave:
        data = await self._api.put(self._url(leave_id, "approve"), request.to_payload())
        return Leave.from_response(data)

    async def reject_leave(self, leave_id: int, request: LeaveApprovalRequest) -> Leave:
        data = await self._api.put(self._url(leave_id, "reject"), request.to_payload())
        return Leave.from_response(data)

    async def delete_leave(self, leave_id: int) -> None:
        await self._api.delete(self._url(leave_id))
