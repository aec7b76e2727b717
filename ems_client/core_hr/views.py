"""Employee screens: paged list with client-side filters, add/edit form."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import EmailStr, TypeAdapter, ValidationError

from ems_client.auth.session import SessionStore
from ems_client.common.pagination import PaginationParams, page_numbers
from ems_client.common.views import FormErrors, ViewModel
from ems_client.core_hr.schemas import Employee
from ems_client.core_hr.service import EmployeeService

_email = TypeAdapter(EmailStr)

# Sort keys exposed to the table header
SORT_FIELDS = {
    "fullName": "full_name",
    "username": "username",
    "position": "job_title",
    "department": "department_name",
    "allottedOrganization": "allotted_organization",
}

_SEARCH_FIELDS = (
    "full_name",
    "work_email",
    "job_title",
    "username",
    "phone_number",
    "department_name",
    "allotted_organization",
)


def _text(employee: Employee, field: str) -> str:
    return (getattr(employee, field) or "").lower()


class EmployeeListView(ViewModel):
    """One page of employees; search, filters and sorting apply to that page.

    The signed-in user is never listed.
    """

    def __init__(self, service: EmployeeService, session: SessionStore, page_size: int = 10) -> None:
        super().__init__()
        self._service = service
        self._session = session
        self.employees: list[Employee] = []
        self.current_page = 0
        self.page_size = page_size
        self.total_elements = 0
        self.total_pages = 0

        self.search_query = ""
        self.department = ""
        self.job_title = ""
        self.allotted_organization = ""
        self.sort_column = ""
        self.sort_direction = "asc"

    async def load(self) -> None:
        page = await self._run(
            self._service.get_all_employees_paginated(
                PaginationParams(page=self.current_page, size=self.page_size),
            ),
            context="load employees",
            failure="Failed to load employees. Please try again.",
        )
        if page is None:
            return
        user = self._session.user
        own_email = user.email if user else None
        self.employees = [e for e in page.content if e.work_email != own_email]
        self.total_elements = page.total_elements
        self.total_pages = page.total_pages

    async def change_page(self, page: int) -> None:
        self.current_page = page
        await self.load()

    async def change_page_size(self, size: int) -> None:
        self.page_size = size
        self.current_page = 0
        await self.load()

    @property
    def page_numbers(self) -> list[int]:
        return page_numbers(self.current_page, self.total_pages)

    # ── Filter options ──────────────────────────────────────────────

    def _options(self, field: str) -> list[str]:
        return sorted({getattr(e, field) for e in self.employees if getattr(e, field)})

    @property
    def departments(self) -> list[str]:
        return self._options("department_name")

    @property
    def job_titles(self) -> list[str]:
        return self._options("job_title")

    @property
    def allotted_organizations(self) -> list[str]:
        return self._options("allotted_organization")

    # ── Filtering / sorting ─────────────────────────────────────────

    @property
    def filtered_employees(self) -> list[Employee]:
        filtered = self.employees
        query = self.search_query.strip().lower()
        if query:
            filtered = [e for e in filtered if any(query in _text(e, f) for f in _SEARCH_FIELDS)]
        if self.department:
            filtered = [e for e in filtered if e.department_name == self.department]
        if self.job_title:
            filtered = [e for e in filtered if e.job_title == self.job_title]
        if self.allotted_organization:
            filtered = [e for e in filtered if e.allotted_organization == self.allotted_organization]

        field = SORT_FIELDS.get(self.sort_column)
        if field is None:
            return list(filtered)
        return sorted(filtered, key=lambda e: _text(e, field), reverse=self.sort_direction == "desc")

    def sort_by(self, column: str) -> None:
        """Same column toggles the direction; a new column starts ascending."""
        if self.sort_column == column:
            self.sort_direction = "desc" if self.sort_direction == "asc" else "asc"
        else:
            self.sort_column = column
            self.sort_direction = "asc"

    def sort_icon(self, column: str) -> str:
        if self.sort_column != column:
            return "⇅"
        return "↑" if self.sort_direction == "asc" else "↓"

    @property
    def has_active_filters(self) -> bool:
        return bool(
            self.search_query.strip()
            or self.department
            or self.job_title
            or self.allotted_organization
            or self.sort_column
        )

    def clear_filters(self) -> None:
        self.search_query = ""
        self.department = ""
        self.job_title = ""
        self.allotted_organization = ""
        self.sort_column = ""
        self.sort_direction = "asc"

    # ── Actions ─────────────────────────────────────────────────────

    async def delete(self, employee_id: Optional[int]) -> bool:
        self.reset_messages()
        if employee_id is None:
            return False

        async def _delete() -> bool:
            await self._service.delete_employee(employee_id)
            return True

        if await self._run(_delete(), context="delete employee", failure="Failed to delete employee"):
            self.success = "Employee deleted successfully"
            await self.load()
            return True
        return False


class EmployeeFormView(ViewModel):
    """Add or edit an employee record."""

    REQUIRED = {
        "full_name": "Full name is required",
        "person_type": "Person type is required",
        "work_email": "Work email is required",
        "job_title": "Job title is required",
        "date_of_joining": "Date of joining is required",
    }

    def __init__(self, service: EmployeeService, employee_id: Optional[int] = None) -> None:
        super().__init__()
        self._service = service
        self.employee_id = employee_id
        self.employee: Optional[Employee] = None

    @property
    def is_edit_mode(self) -> bool:
        return self.employee_id is not None

    async def load(self) -> None:
        if self.employee_id is None:
            return
        employee = await self._run(
            self._service.get_employee_by_id(self.employee_id),
            context="load employee",
            failure="Failed to load employee data.",
        )
        if employee is not None:
            self.employee = employee

    @classmethod
    def validate(cls, form: dict[str, Any]) -> Employee:
        errors = FormErrors()
        for field, message in cls.REQUIRED.items():
            errors.require(field, form.get(field), message)
        for field in ("work_email", "personal_email"):
            value = form.get(field)
            if value and str(value).strip():
                try:
                    _email.validate_python(value)
                except ValidationError:
                    errors.add(field, "Please enter a valid email address")
        if form.get("has_medical_condition"):
            details = (form.get("medical_condition_details") or "").strip()
            if len(details) < 5:
                errors.add("medical_condition_details", "Please describe the medical condition")
        errors.raise_if_any()

        data = dict(form)
        data["has_medical_condition"] = bool(form.get("has_medical_condition"))
        if not data["has_medical_condition"]:
            data["medical_condition_details"] = ""
        return Employee.model_validate(data)

    async def _save(self, form: dict[str, Any]) -> Employee:
        employee = self.validate(form)
        if self.employee_id is not None:
            return await self._service.update_employee(self.employee_id, employee)
        return await self._service.create_employee(employee)

    async def submit(self, form: dict[str, Any]) -> Optional[Employee]:
        self.reset_messages()
        failure = (
            "Failed to update employee. Please try again."
            if self.is_edit_mode
            else "Failed to create employee. Please try again."
        )
        saved = await self._run(self._save(form), context="save employee", failure=failure)
        if saved is not None:
            self.employee = saved
            self.success = "Employee updated successfully." if self.is_edit_mode else "Employee created successfully."
        return saved

