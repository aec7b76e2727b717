"""Core HR services: employees, departments, positions, user accounts."""

from __future__ import annotations

from typing import Any, Optional

from ems_client.api import ApiClient
from ems_client.common.pagination import PageResponse, PaginationParams
from ems_client.core_hr.schemas import (
    CreateUserResponse,
    Department,
    Employee,
    Position,
    UserCreateRequest,
)


class EmployeeService:
    """Wraps ``/employees``."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def _url(self, *parts: Any) -> str:
        return self._api.url("employees", *parts)

    async def get_all_employees(self) -> list[Employee]:
        return Employee.list_from_response(await self._api.get(self._url()))

    async def get_all_employees_paginated(
        self, pagination: Optional[PaginationParams] = None,
    ) -> PageResponse[Employee]:
        pagination = pagination or PaginationParams()
        data = await self._api.get(self._url("paginated"), params=pagination.as_query())
        return PageResponse[Employee].from_response(data)

    async def get_employee_by_id(self, employee_id: int) -> Employee:
        return Employee.from_response(await self._api.get(self._url(employee_id)))

    async def create_employee(self, employee: Employee) -> Employee:
        return Employee.from_response(await self._api.post(self._url(), employee.to_payload()))

    async def create_self_profile(self, employee: Employee) -> Employee:
        return Employee.from_response(await self._api.post(self._url("profile"), employee.to_payload()))

    async def update_employee(self, employee_id: int, employee: Employee) -> Employee:
        return Employee.from_response(await self._api.put(self._url(employee_id), employee.to_payload()))

    async def delete_employee(self, employee_id: int) -> None:
        await self._api.delete(self._url(employee_id))


class DepartmentService:
    """Wraps ``/departments``."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get_departments(self, *, with_admin_status: bool = False) -> list[Department]:
        url = self._api.url("departments", "with-admin-status" if with_admin_status else "")
        return Department.list_from_response(await self._api.get(url))

    async def create_department(self, department: Department) -> Department:
        data = await self._api.post(self._api.url("departments"), department.to_payload())
        return Department.from_response(data)


class PositionService:
    """Wraps ``/positions``."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get_all_positions(self) -> list[Position]:
        return Position.list_from_response(await self._api.get(self._api.url("positions")))

    async def search_positions(self, query: str) -> list[Position]:
        data = await self._api.get(self._api.url("positions", "search"), params={"q": query or ""})
        return Position.list_from_response(data)


class UserService:
    """Wraps ``/users``: admin-created accounts with a temporary password."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def create_user(self, request: UserCreateRequest) -> CreateUserResponse:
        data = await self._api.post(self._api.url("users", "create"), request.to_payload())
        return CreateUserResponse.from_response(data)
