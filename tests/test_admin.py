"""Administration, dashboards, search and core HR services."""

from __future__ import annotations

import pytest

from ems_client.admin.schemas import AlertConfiguration
from ems_client.admin.service import AlertConfigurationService, OrganizationService, SmtpConfigService
from ems_client.admin.views import (
    AlertConfigurationView,
    OrganizationCreateView,
    OrganizationDetailView,
    RootDashboardView,
    SmtpConfigurationView,
    alert_status,
)
from ems_client.common.constants import AlertChannel
from ems_client.common.exceptions import ValidationException
from ems_client.core_hr.service import EmployeeService
from ems_client.dashboard.service import DashboardService
from ems_client.navigation.routes import Route
from ems_client.search.service import SearchService


def _org_form(**overrides):
    form = {
        "organization_name": "Grand Hotel",
        "super_admin_username": "grandadmin",
        "super_admin_email": "admin@grandhotel.com",
        "super_admin_full_name": "Grace Admin",
        "password": "s3cure-pass",
        "confirm_password": "s3cure-pass",
    }
    form.update(overrides)
    return form


# ── Organization create ─────────────────────────────────────────────

def test_organization_form_validation():
    with pytest.raises(ValidationException) as info:
        OrganizationCreateView.validate(
            _org_form(
                organization_name="G",
                super_admin_username="ga",
                super_admin_email="not-an-email",
                super_admin_full_name="",
                password="short",
                confirm_password="different",
            ),
        )
    errors = info.value.errors
    assert errors["organization_name"] == ["Minimum 2 characters required"]
    assert errors["super_admin_username"] == ["Minimum 3 characters required"]
    assert errors["super_admin_email"] == ["Invalid email format"]
    assert errors["super_admin_full_name"] == ["Full Name is required"]
    assert errors["password"] == ["Minimum 8 characters required"]
    assert errors["confirm_password"] == ["Passwords do not match"]


async def test_root_creates_organization(api, backend, sign_in):
    sign_in("root", roles=["ROOT"], organization_uuid=None)
    view = OrganizationCreateView(OrganizationService(api))

    created = await view.submit(_org_form())

    assert created.organization.name == "Grand Hotel"
    assert created.credentials.username == "grandadmin"
    assert view.success == "Organization 'Grand Hotel' created successfully."
    assert "x-organization-uuid" not in backend.headers_for("/api/organizations")


async def test_duplicate_organization_shows_backend_error(api, backend, sign_in):
    sign_in("root", roles=["ROOT"], organization_uuid=None)
    view = OrganizationCreateView(OrganizationService(api))
    await view.submit(_org_form())

    assert await view.submit(_org_form()) is None
    assert view.error == "Organization name already exists"


async def test_organization_detail_and_deactivate(api, backend, sign_in):
    sign_in("root", roles=["ROOT"], organization_uuid=None)
    service = OrganizationService(api)
    created = await service.create_organization(OrganizationCreateView.validate(_org_form()))
    org_id = created.organization.id

    org = await service.get_organization(org_id)
    assert org.logo_url == f"http://test/api/organizations/{org_id}/logo"

    await service.deactivate_organization(org_id)
    assert (await service.get_organization(org_id)).is_active is False

    stats = await DashboardService(api).get_root_stats()
    assert stats.total_organizations == 1
    assert stats.inactive_organizations == 1


# ── Tenant settings ─────────────────────────────────────────────────

async def test_smtp_and_alert_configuration(api, sign_in):
    sign_in(roles=["SUPER_ADMIN"])

    assert await SmtpConfigService(api).is_smtp_configured() is True

    configs = await AlertConfigurationService(api).get_all_configurations()
    assert configs[0].document_type == "PASSPORT"
    assert configs[0].alert_days_before == 90
    assert configs[0].notification_type is AlertChannel.both


async def test_tenant_dashboard_stats(api, backend, sign_in):
    sign_in(roles=["SUPER_ADMIN"])
    backend.employees = [{"id": 1, "fullName": "Alice Smith", "workEmail": "alice@example.com"}]

    stats = await DashboardService(api).get_stats()

    assert stats.total_employees == 1
    assert stats.documents_expiring_in_30_days == 3
    assert stats.employees_by_department == {"Front Office": 2}


# ── Search / employees ──────────────────────────────────────────────

async def test_search_and_employee_list(api, backend, sign_in):
    sign_in(roles=["ADMIN"])
    backend.employees = [
        {"id": 1, "fullName": "Alice Smith", "workEmail": "alice@example.com"},
        {"id": 2, "fullName": "Bob Jones", "workEmail": "bob@example.com"},
    ]

    results = await SearchService(api).search("alice")
    assert [e.full_name for e in results.employees] == ["Alice Smith"]
    assert results.total == 1

    employees = await EmployeeService(api).get_all_employees()
    assert len(employees) == 2


async def test_blank_search_skips_request(api, backend, sign_in):
    sign_in()
    before = len(backend.requests)
    results = await SearchService(api).search("   ")
    assert results.total == 0
    assert len(backend.requests) == before


# ── ROOT screens ────────────────────────────────────────────────────

async def _root_with_org(api, sign_in):
    sign_in("root", roles=["ROOT"], organization_uuid=None)
    service = OrganizationService(api)
    created = await service.create_organization(OrganizationCreateView.validate(_org_form()))
    return service, created.organization.id


async def test_root_dashboard_toggles_organization(api, sign_in):
    service, org_id = await _root_with_org(api, sign_in)
    view = RootDashboardView(DashboardService(api), service)

    await view.load()
    assert view.stats.active_organizations == 1

    assert await view.deactivate(org_id) is True
    assert view.stats.inactive_organizations == 1

    assert await view.activate(org_id) is True
    assert view.stats.active_organizations == 1


async def test_root_dashboard_errors(api, backend, sign_in):
    service, org_id = await _root_with_org(api, sign_in)
    view = RootDashboardView(DashboardService(api), service)

    backend.fail_once("GET", "/api/root/dashboard/stats", 500, None)
    await view.load()
    assert view.error == "Failed to load dashboard data"

    backend.fail_once("POST", f"/api/organizations/{org_id}/deactivate", 400, {"message": "Cannot deactivate"})
    assert await view.deactivate(org_id) is False
    assert view.error == "Cannot deactivate"

    backend.fail_once("POST", f"/api/organizations/{org_id}/activate", 500, None)
    assert await view.activate(org_id) is False
    assert view.error == "Failed to activate organization"


def test_deactivate_prompt_names_organization():
    assert '"Grand Hotel"' in RootDashboardView.deactivate_prompt("Grand Hotel")


async def test_organization_detail_view(api, backend, sign_in):
    service, org_id = await _root_with_org(api, sign_in)
    view = OrganizationDetailView(service, org_id)

    await view.load()
    assert view.organization.name == "Grand Hotel"

    assert await view.deactivate() is True
    assert view.organization.is_active is False

    backend.fail_once("POST", f"/api/organizations/{org_id}/activate", 500, None)
    assert await view.activate() is False
    assert view.error == "Failed to activate: Unknown error"


async def test_organization_detail_not_found(api, sign_in):
    sign_in("root", roles=["ROOT"], organization_uuid=None)
    view = OrganizationDetailView(OrganizationService(api), 404)

    await view.load()

    assert view.organization is None
    assert view.error == "Organization not found"
    assert await view.deactivate() is False


# ── SMTP screen ─────────────────────────────────────────────────────

def _smtp_form(**overrides):
    form = {
        "provider": "GMAIL",
        "host": "smtp.gmail.com",
        "port": 587,
        "username": "mailer@grandhotel.com",
        "password": "app-password",
        "from_email": "hr@grandhotel.com",
        "from_name": "Grand Hotel HR",
        "enabled": True,
        "use_default": False,
    }
    form.update(overrides)
    return form


def test_smtp_form_validation():
    with pytest.raises(ValidationException) as info:
        SmtpConfigurationView.validate(_smtp_form(username="", password="", from_email="hr-at-hotel"))

    assert info.value.errors == {
        "username": ["Username is required"],
        "password": ["Password is required"],
        "from_email": ["Please enter a valid email address"],
    }


def test_smtp_default_settings_need_no_password():
    config = SmtpConfigurationView.validate(_smtp_form(password="", use_default=True))
    assert config.password is None
    assert "password" not in config.to_payload()


def test_smtp_provider_presets():
    view = SmtpConfigurationView(service=None)
    view.select_provider("OUTLOOK")
    assert (view.form["host"], view.form["port"]) == ("smtp-mail.outlook.com", 587)

    view.form["host"] = "mail.grandhotel.com"
    view.select_provider("CUSTOM")
    assert view.form["host"] == "mail.grandhotel.com"


async def test_smtp_load_defaults_then_save(api, backend, sign_in):
    sign_in(roles=["SUPER_ADMIN"])
    view = SmtpConfigurationView(SmtpConfigService(api))

    await view.load()
    assert view.form["use_default"] is True
    assert view.form["host"] == "smtp.gmail.com"

    saved = await view.submit(_smtp_form())
    assert saved.is_configured
    assert view.success == "SMTP configuration saved successfully"
    assert backend.smtp_passwords == ["app-password"]

    await view.load()
    assert view.form["use_default"] is False
    assert view.form["username"] == "mailer@grandhotel.com"
    assert view.form["password"] == ""


async def test_smtp_save_default_and_failure(api, backend, sign_in):
    sign_in(roles=["SUPER_ADMIN"])
    view = SmtpConfigurationView(SmtpConfigService(api))

    await view.submit(_smtp_form(password="", use_default=True))
    assert view.success == "SMTP configuration set to use default environment settings"
    assert backend.smtp_passwords == [None]

    backend.fail_once("POST", "/api/smtp-configuration", 400, {"message": "Authentication failed"})
    assert await view.submit(_smtp_form()) is None
    assert view.error == "Failed to save SMTP configuration"


# ── Alert configuration screen ──────────────────────────────────────

def _alert_form(**overrides):
    form = {"document_type": "VISA", "alert_days_before": 60, "alert_email": "hr@grandhotel.com", "enabled": True}
    form.update(overrides)
    return form


async def test_alert_screen_is_super_admin_only(api, session, sign_in):
    sign_in(roles=["ADMIN"])
    view = AlertConfigurationView(AlertConfigurationService(api), session)

    assert view.check_access() is Route.dashboard
    assert view.error == "Access denied. Only SUPER_ADMIN can configure alerts."


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"alert_email": ""}, "Please fill all required fields"),
        ({"alert_days_before": 0}, "Alert days must be between 1 and 365"),
        ({"alert_days_before": 366}, "Alert days must be between 1 and 365"),
        ({"alert_days_before": "soon"}, "Alert days must be between 1 and 365"),
    ],
)
def test_alert_form_validation(overrides, message):
    with pytest.raises(ValidationException) as info:
        AlertConfigurationView.validate(_alert_form(**overrides))
    assert message in [m for messages in info.value.errors.values() for m in messages]


async def test_alert_create_update_toggle(api, backend, session, sign_in):
    sign_in(roles=["SUPER_ADMIN"])
    view = AlertConfigurationView(AlertConfigurationService(api), session)
    assert view.check_access() is None

    created = await view.create(_alert_form())
    assert view.success == "Alert configuration created successfully"
    assert [c.document_type for c in view.configurations] == ["PASSPORT", "VISA"]

    await view.update(created.id, _alert_form(alert_days_before=30))
    assert view.success == "Alert configuration updated successfully"
    assert backend.alert_configs[created.id]["alertDaysBefore"] == 30

    await view.toggle(view.configurations[1])
    assert view.success == "Alert disabled for VISA"
    assert view.configurations[1].enabled is False


async def test_alert_duplicate_type_shows_backend_message(api, session, sign_in):
    sign_in(roles=["SUPER_ADMIN"])
    view = AlertConfigurationView(AlertConfigurationService(api), session)

    assert await view.create(_alert_form(document_type="PASSPORT")) is None
    assert view.error == "Configuration for PASSPORT already exists"


async def test_alert_check_trigger(api, backend, session, sign_in):
    sign_in(roles=["SUPER_ADMIN"])
    view = AlertConfigurationView(AlertConfigurationService(api), session)

    assert await view.trigger_check() is True
    assert backend.alert_checks == 1
    assert view.success == "Alert check triggered successfully. Check email and logs."

    backend.fail_once("POST", "/api/alert-config/test-alerts", 500, None)
    assert await view.trigger_check() is False
    assert view.error == "Failed to trigger alert check"
    assert not view.testing


@pytest.mark.parametrize(
    "days, enabled, expected",
    [
        (7, True, ("Critical (1 week)", "status-critical")),
        (30, True, ("Warning (1 month)", "status-warning")),
        (90, True, ("Notice (3 months)", "status-notice")),
        (180, True, ("Early Warning", "status-notice")),
        (7, False, ("Disabled", "status-disabled")),
    ],
)
def test_alert_status(days, enabled, expected):
    config = AlertConfiguration(
        document_type="VISA", alert_days_before=days, alert_email="hr@grandhotel.com", enabled=enabled,
    )
    assert alert_status(config) == expected
