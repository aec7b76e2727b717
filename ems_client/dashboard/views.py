"""Tenant dashboard: statistics for SUPER_ADMIN, a personal summary for users."""

from __future__ import annotations

import logging
from typing import Optional

from ems_client.attendance.service import AttendanceService
from ems_client.auth.session import SessionStore
from ems_client.common.constants import ExpiryFilter, UserRole
from ems_client.common.exceptions import AppException
from ems_client.common.views import ViewModel
from ems_client.core_hr.schemas import Employee
from ems_client.core_hr.service import EmployeeService
from ems_client.dashboard.schemas import TenantDashboardStats
from ems_client.dashboard.service import DashboardService
from ems_client.documents.schemas import Document
from ems_client.documents.service import DocumentService
from ems_client.navigation.routes import Route
from ems_client.navigation.service import resolve_dashboard

logger = logging.getLogger(__name__)

RECENT_DOCUMENTS = 3

# Segments of the document expiry chart, in display order
EXPIRY_SEGMENTS = (ExpiryFilter.expired, ExpiryFilter.expiring30, ExpiryFilter.expiring60)


def expiry_filter_for_segment(index: int) -> ExpiryFilter:
    """Document list filter opened by a click on the expiry chart."""
    if 0 <= index < len(EXPIRY_SEGMENTS):
        return EXPIRY_SEGMENTS[index]
    return ExpiryFilter.all


class DashboardView(ViewModel):
    """Call :meth:`load` first; it returns the screen the user really belongs on.

    ROOT and ADMIN are redirected without any request. A plain user without
    an employee record matching their email gets ``has_profile = False``.
    """

    def __init__(
        self,
        session: SessionStore,
        dashboard: DashboardService,
        employees: EmployeeService,
        documents: DocumentService,
        attendance: AttendanceService,
    ) -> None:
        super().__init__()
        self._session = session
        self._dashboard = dashboard
        self._employees = employees
        self._documents = documents
        self._attendance = attendance

        self.stats: Optional[TenantDashboardStats] = None
        self.profile: Optional[Employee] = None
        self.has_profile = False
        self.document_count = 0
        self.recent_documents: list[Document] = []
        self.is_checked_in = False

    @property
    def is_super_admin(self) -> bool:
        user = self._session.user
        return bool(user and user.has_any_role(UserRole.super_admin.value))

    async def load(self) -> Route:
        user = self._session.user
        target = resolve_dashboard(user.roles if user else [])
        if target is not Route.dashboard:
            return target

        if self.is_super_admin:
            stats = await self._run(
                self._dashboard.get_stats(), context="dashboard stats", failure="Failed to load dashboard data",
            )
            if stats is not None:
                self.stats = stats
        else:
            await self.load_personal()
        return Route.dashboard

    async def load_personal(self) -> None:
        """Profile, recent documents and attendance of a plain user.

        Failures only leave the summary empty.
        """
        user = self._session.user
        self.has_profile = False
        if user is None or not user.email:
            return
        self.loading = True
        try:
            employees = await self._employees.get_all_employees()
            self.profile = next((e for e in employees if e.work_email == user.email), None)
            self.has_profile = self.profile is not None
            if self.profile is None or self.profile.id is None:
                return
            documents = await self._documents.get_documents_by_employee_id(self.profile.id)
            self.document_count = len(documents)
            self.recent_documents = documents[:RECENT_DOCUMENTS]
            status = await self._attendance.get_current_status(self.profile.id)
            self.is_checked_in = status.is_checked_in
        except AppException as exc:
            logger.warning("personal dashboard failed: %s", exc.detail)
        finally:
            self.loading = False

    @property
    def has_documents(self) -> bool:
        return self.document_count > 0

    @staticmethod
    def department_link(department: str) -> tuple[Route, dict[str, str]]:
        return Route.employees, {"department": department}

    @staticmethod
    def expiry_link(index: int) -> tuple[Route, dict[str, str]]:
        return Route.documents, {"expiryFilter": expiry_filter_for_segment(index).value}
