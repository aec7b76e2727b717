"""Route table: every screen, and which ones need a session."""

from __future__ import annotations

import enum


class Route(str, enum.Enum):
    login = "/login"
    forgot_password = "/forgot-password"
    forgot_username = "/forgot-username"
    reset_password = "/reset-password"
    verify_email = "/verify-email"
    change_password = "/change-password"

    root_dashboard = "/root/dashboard"
    root_organization_create = "/root/organizations/create"
    root_organization_detail = "/root/organizations/{id}"

    dashboard = "/dashboard"
    profile_create = "/profile/create"
    user_create = "/users/create"
    employees = "/employees"
    employee_add = "/employees/add"
    employee_edit = "/employees/edit/{id}"
    attendance = "/attendance"
    leaves = "/leaves"
    leave_apply = "/leaves/apply"
    leave_edit = "/leaves/edit/{id}"
    documents = "/documents"
    document_upload = "/documents/upload"
    document_detail = "/documents/{id}"
    rota = "/rota"
    rota_upload = "/rota/upload"
    alert_configuration = "/alert-configuration"
    smtp_configuration = "/smtp-configuration"

    def path(self, **params: object) -> str:
        return self.value.format(**params) if params else self.value


PUBLIC_ROUTES: frozenset[Route] = frozenset({
    Route.login,
    Route.forgot_password,
    Route.forgot_username,
    Route.reset_password,
    Route.verify_email,
})

DEFAULT_ROUTE = Route.dashboard


def is_protected(route: Route) -> bool:
    return route not in PUBLIC_ROUTES
