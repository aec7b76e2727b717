"""Leave screens: list with approval actions, apply/edit form."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ems_client.api import FilePart
from ems_client.auth.session import SessionStore
from ems_client.common.constants import ADMIN_ROLES
from ems_client.common.views import FormErrors, ViewModel
from ems_client.leave.schemas import Leave, LeaveApprovalRequest, LeaveRequest
from ems_client.leave.service import LeaveService


class LeaveListView(ViewModel):
    def __init__(self, service: LeaveService, session: SessionStore) -> None:
        super().__init__()
        self._service = service
        self._session = session
        self.leaves: list[Leave] = []

    @property
    def is_admin(self) -> bool:
        user = self._session.user
        return user is not None and user.has_any_role(*ADMIN_ROLES)

    async def load(self) -> None:
        user = self._session.user
        if self.is_admin or user is None or user.employee_id is None:
            action = self._service.get_all_leaves()
        else:
            action = self._service.get_leaves_by_employee_id(user.employee_id)
        leaves = await self._run(action, context="load leaves")
        if leaves is not None:
            self.leaves = leaves

    @staticmethod
    def can_modify(leave: Leave) -> bool:
        """Edit and delete are disabled once a leave is approved."""
        return not leave.is_approved

    def _replace(self, updated: Leave) -> None:
        self.leaves = [updated if item.id == updated.id else item for item in self.leaves]

    async def approve(self, leave: Leave, remarks: str = "") -> Optional[Leave]:
        self.reset_messages()
        user = self._session.user
        request = LeaveApprovalRequest(
            approved_by=user.username if user else None, remarks=remarks,
        )
        updated = await self._run(self._service.approve_leave(leave.id, request), context="approve leave")
        if updated is not None:
            self._replace(updated)
            self.success = "Leave approved successfully."
        return updated

    async def reject(self, leave: Leave, remarks: str) -> Optional[Leave]:
        self.reset_messages()
        if not remarks.strip():
            self.field_errors = {"remarks": ["Please provide a reason for rejection."]}
            self.error = self.field_errors["remarks"][0]
            return None
        user = self._session.user
        request = LeaveApprovalRequest(
            rejected_by=user.username if user else None, remarks=remarks,
        )
        updated = await self._run(self._service.reject_leave(leave.id, request), context="reject leave")
        if updated is not None:
            self._replace(updated)
            self.success = "Leave rejected."
        return updated

    async def delete(self, leave: Leave) -> bool:
        self.reset_messages()
        if not self.can_modify(leave):
            self.error = "Approved leave requests cannot be deleted."
            return False

        async def _delete() -> bool:
            await self._service.delete_leave(leave.id)
            return True

        if await self._run(_delete(), context="delete leave"):
            self.leaves = [item for item in self.leaves if item.id != leave.id]
            self.success = "Leave request deleted."
            return True
        return False


class LeaveFormView(ViewModel):
    def __init__(self, service: LeaveService) -> None:
        super().__init__()
        self._service = service

    @staticmethod
    def validate(
        employee_id: Optional[int],
        leave_type: Optional[str],
        start_date: Optional[str],
        end_date: Optional[str],
        reason: Optional[str],
    ) -> LeaveRequest:
        form = FormErrors()
        form.require("employee_id", employee_id, "Please select an employee")
        form.require("leave_type", leave_type, "Please select a leave type")
        if not start_date or not end_date:
            form.add("dates", "Please select start and end dates")
        else:
            try:
                if date.fromisoformat(end_date) < date.fromisoformat(start_date):
                    form.add("dates", "End date must be after start date")
            except ValueError:
                form.add("dates", "Dates must be in YYYY-MM-DD format")
        form.require("reason", reason, "Please provide a reason for leave")
        form.raise_if_any()
        return LeaveRequest(
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason.strip(),
        )

    async def _apply(self, fields: dict, certificate: Optional[FilePart]) -> Leave:
        request = self.validate(**fields)
        return await self._service.apply_leave(request, certificate)

    async def _update(self, leave_id: int, fields: dict) -> Leave:
        request = self.validate(**fields)
        return await self._service.update_leave(leave_id, request)

    async def submit(
        self,
        *,
        employee_id: Optional[int],
        leave_type: Optional[str],
        start_date: Optional[str],
        end_date: Optional[str],
        reason: Optional[str],
        medical_certificate: Optional[FilePart] = None,
        leave_id: Optional[int] = None,
    ) -> Optional[Leave]:
        self.reset_messages()
        fields = dict(
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )
        if leave_id is None:
            leave = await self._run(self._apply(fields, medical_certificate), context="apply leave")
        else:
            leave = await self._run(self._update(leave_id, fields), context="update leave")
        if leave is not None:
            self.success = "Leave request submitted successfully."
        return leave
