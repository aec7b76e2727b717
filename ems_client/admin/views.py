"""Administration screens: organizations, SMTP settings, document expiry alerts."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import EmailStr, TypeAdapter, ValidationError

from ems_client.admin.schemas import (
    AlertConfiguration,
    CreateOrganizationRequest,
    Organization,
    OrganizationCreationResponse,
    SmtpConfiguration,
)
from ems_client.admin.service import AlertConfigurationService, OrganizationService, SmtpConfigService
from ems_client.auth.session import SessionStore
from ems_client.common.constants import SmtpProvider, UserRole
from ems_client.common.exceptions import ApiError, AppException, ErrorKind, user_message
from ems_client.common.views import FormErrors, ViewModel
from ems_client.dashboard.schemas import RootDashboardStats
from ems_client.dashboard.service import DashboardService
from ems_client.navigation.routes import Route

_email = TypeAdapter(EmailStr)

FIELD_LABELS = {
    "organization_name": "Organization Name",
    "super_admin_username": "Username",
    "super_admin_email": "Email",
    "super_admin_full_name": "Full Name",
    "password": "Password",
    "confirm_password": "Confirm Password",
}

MIN_LENGTHS = {
    "organization_name": 2,
    "super_admin_username": 3,
    "password": 8,
}


class OrganizationCreateView(ViewModel):
    """Creates a tenant together with its first SUPER_ADMIN."""

    def __init__(self, service: OrganizationService) -> None:
        super().__init__()
        self._service = service
        self.created: Optional[OrganizationCreationResponse] = None

    @staticmethod
    def validate(form: dict[str, Optional[str]]) -> CreateOrganizationRequest:
        errors = FormErrors()
        for field, label in FIELD_LABELS.items():
            errors.require(field, form.get(field), f"{label} is required")

        for field, minimum in MIN_LENGTHS.items():
            value = form.get(field) or ""
            if value.strip() and len(value) < minimum:
                errors.add(field, f"Minimum {minimum} characters required")

        email = form.get("super_admin_email") or ""
        if email.strip():
            try:
                _email.validate_python(email)
            except ValidationError:
                errors.add("super_admin_email", "Invalid email format")

        if form.get("confirm_password") and form.get("password") != form.get("confirm_password"):
            errors.add("confirm_password", "Passwords do not match")

        errors.raise_if_any()
        return CreateOrganizationRequest(
            organization_name=form["organization_name"],
            super_admin_username=form["super_admin_username"],
            super_admin_email=email,
            super_admin_full_name=form["super_admin_full_name"],
            password=form["password"],
        )

    async def _create(self, form: dict[str, Optional[str]]) -> OrganizationCreationResponse:
        # the confirmation never leaves the client
        return await self._service.create_organization(self.validate(form))

    async def submit(self, form: dict[str, Optional[str]]) -> Optional[OrganizationCreationResponse]:
        self.reset_messages()
        created = await self._run(self._create(form), context="create organization")
        if created is not None:
            self.created = created
            self.success = f"Organization '{created.organization.name}' created successfully."
        return created

    def _message_for(self, exc: AppException) -> str:
        if isinstance(exc, ApiError) and exc.kind is ErrorKind.server:
            return exc.message or "Failed to create organization"
        return user_message(exc)


# ── SMTP ────────────────────────────────────────────────────────────

DEFAULT_FROM_NAME = "Employee Management System"

# Host and port filled in when a well-known provider is picked
PROVIDER_PRESETS: dict[SmtpProvider, tuple[str, int]] = {
    SmtpProvider.gmail: ("smtp.gmail.com", 587),
    SmtpProvider.outlook: ("smtp-mail.outlook.com", 587),
}


class SmtpConfigurationView(ViewModel):
    """Outbound mail settings of the organization.

    ``form`` holds snake_case field values; with ``use_default`` the server's
    own mail settings apply and no password is sent.
    """

    def __init__(self, service: SmtpConfigService) -> None:
        super().__init__()
        self._service = service
        self.config: Optional[SmtpConfiguration] = None
        self.form: dict[str, Any] = self._default_form()

    @staticmethod
    def _default_form() -> dict[str, Any]:
        host, port = PROVIDER_PRESETS[SmtpProvider.gmail]
        return {
            "provider": SmtpProvider.gmail.value,
            "host": host,
            "port": port,
            "username": "",
            "password": "",
            "from_email": "",
            "from_name": DEFAULT_FROM_NAME,
            "enabled": True,
            "use_default": True,
        }

    def select_provider(self, provider: str) -> None:
        self.form["provider"] = provider
        preset = PROVIDER_PRESETS.get(SmtpProvider(provider))
        if preset is not None:
            self.form["host"], self.form["port"] = preset

    async def load(self) -> None:
        config = await self._run(
            self._service.get_smtp_configuration(),
            context="load smtp configuration",
            failure="Failed to load SMTP configuration",
        )
        if config is None:
            return
        self.config = config
        self.form = self._default_form()
        if config.is_configured and not config.use_default:
            self.form.update(
                provider=config.provider.value,
                host=config.host or "",
                port=config.port or 587,
                username=config.username or "",
                from_email=config.from_email or "",
                from_name=config.from_name or DEFAULT_FROM_NAME,
                enabled=config.enabled is not False,
                use_default=False,
            )

    @staticmethod
    def validate(form: dict[str, Any]) -> SmtpConfiguration:
        errors = FormErrors()
        use_default = bool(form.get("use_default"))
        errors.require("provider", form.get("provider"), "Provider is required")
        errors.require("username", form.get("username"), "Username is required")
        if not use_default:
            errors.require("password", form.get("password"), "Password is required")
        from_email = form.get("from_email") or ""
        errors.require("from_email", from_email, "From email is required")
        if from_email.strip():
            try:
                _email.validate_python(from_email)
            except ValidationError:
                errors.add("from_email", "Please enter a valid email address")
        errors.raise_if_any()

        return SmtpConfiguration(
            provider=form["provider"],
            host=form.get("host") or None,
            port=form.get("port"),
            username=form["username"],
            password=None if use_default else form["password"],
            from_email=from_email,
            from_name=form.get("from_name") or None,
            enabled=bool(form.get("enabled", True)),
            use_default=use_default,
        )

    async def _save(self, form: dict[str, Any]) -> SmtpConfiguration:
        return await self._service.save_smtp_configuration(self.validate(form))

    async def submit(self, form: Optional[dict[str, Any]] = None) -> Optional[SmtpConfiguration]:
        self.reset_messages()
        saved = await self._run(
            self._save(self.form if form is None else form),
            context="save smtp configuration",
            failure="Failed to save SMTP configuration",
        )
        if saved is not None:
            self.config = saved
            self.success = (
                "SMTP configuration set to use default environment settings"
                if saved.use_default
                else "SMTP configuration saved successfully"
            )
        return saved


# ── Document expiry alerts ──────────────────────────────────────────

def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def alert_status(config: AlertConfiguration) -> tuple[str, str]:
    """Label and CSS class for a rule, by how early it fires."""
    if not config.enabled:
        return "Disabled", "status-disabled"
    days = config.alert_days_before
    if days <= 7:
        return "Critical (1 week)", "status-critical"
    if days <= 30:
        return "Warning (1 month)", "status-warning"
    if days <= 90:
        return "Notice (3 months)", "status-notice"
    return "Early Warning", "status-notice"


class AlertConfigurationView(ViewModel):
    """Expiry alert rules; SUPER_ADMIN only."""

    def __init__(self, service: AlertConfigurationService, session: SessionStore) -> None:
        super().__init__()
        self._service = service
        self._session = session
        self.configurations: list[AlertConfiguration] = []
        self.testing = False

    def check_access(self) -> Optional[Route]:
        """``None`` when allowed, otherwise where to send the user."""
        user = self._session.user
        if user is not None and user.has_any_role(UserRole.super_admin.value):
            return None
        self.error = "Access denied. Only SUPER_ADMIN can configure alerts."
        return Route.dashboard

    async def load(self) -> None:
        configs = await self._run(
            self._service.get_all_configurations(),
            context="load alert configurations",
            failure="Failed to load alert configurations",
        )
        if configs is not None:
            self.configurations = configs

    @staticmethod
    def validate(form: dict[str, Any]) -> AlertConfiguration:
        errors = FormErrors()
        if not form.get("document_type") or not form.get("alert_email"):
            errors.add("form", "Please fill all required fields")
        if not 1 <= _as_int(form.get("alert_days_before")) <= 365:
            errors.add("alert_days_before", "Alert days must be between 1 and 365")
        errors.raise_if_any()
        return AlertConfiguration.model_validate(form)

    async def _create(self, form: dict[str, Any]) -> AlertConfiguration:
        return await self._service.create_configuration(self.validate(form))

    async def _update(self, config_id: int, form: dict[str, Any]) -> AlertConfiguration:
        return await self._service.update_configuration(config_id, self.validate(form))

    async def create(self, form: dict[str, Any]) -> Optional[AlertConfiguration]:
        self.reset_messages()
        created = await self._run(
            self._create(form), context="create alert configuration", fallback="Failed to create configuration",
        )
        if created is not None:
            self.success = "Alert configuration created successfully"
            await self.load()
        return created

    async def update(self, config_id: int, form: dict[str, Any]) -> Optional[AlertConfiguration]:
        self.reset_messages()
        updated = await self._run(
            self._update(config_id, form),
            context="update alert configuration",
            fallback="Failed to update configuration",
        )
        if updated is not None:
            self.success = "Alert configuration updated successfully"
            await self.load()
        return updated

    async def toggle(self, config: AlertConfiguration) -> Optional[AlertConfiguration]:
        self.reset_messages()
        flipped = config.model_copy(update={"enabled": not config.enabled})
        updated = await self._run(
            self._service.update_configuration(config.id, flipped),
            context="toggle alert configuration",
            failure="Failed to toggle alert status",
        )
        if updated is not None:
            state = "enabled" if flipped.enabled else "disabled"
            self.success = f"Alert {state} for {config.document_type}"
            await self.load()
        return updated

    async def trigger_check(self) -> bool:
        """Ask the backend to scan documents and send due alerts now."""
        self.reset_messages()
        self.testing = True
        try:
            await self._run(
                self._service.test_alerts(), context="test alerts", failure="Failed to trigger alert check",
            )
        finally:
            self.testing = False
        if self.error:
            return False
        self.success = "Alert check triggered successfully. Check email and logs."
        return True


# ── ROOT organization management ────────────────────────────────────

class RootDashboardView(ViewModel):
    """Cross-organization overview with activate / deactivate."""

    def __init__(self, dashboard: DashboardService, organizations: OrganizationService) -> None:
        super().__init__()
        self._dashboard = dashboard
        self._organizations = organizations
        self.stats: Optional[RootDashboardStats] = None

    async def load(self) -> None:
        self.error = None
        stats = await self._run(
            self._dashboard.get_root_stats(), context="load root dashboard", failure="Failed to load dashboard data",
        )
        if stats is not None:
            self.stats = stats

    async def _set_active(self, organization_id: int, active: bool) -> bool:
        self.reset_messages()
        if active:
            action = self._organizations.activate_organization(organization_id)
            fallback = "Failed to activate organization"
        else:
            action = self._organizations.deactivate_organization(organization_id)
            fallback = "Failed to deactivate organization"
        await self._run(action, context=fallback.lower(), fallback=fallback)
        if self.error:
            return False
        await self.load()
        return True

    async def activate(self, organization_id: int) -> bool:
        return await self._set_active(organization_id, True)

    async def deactivate(self, organization_id: int) -> bool:
        return await self._set_active(organization_id, False)

    @staticmethod
    def deactivate_prompt(name: str) -> str:
        return (
            f'Are you sure you want to DEACTIVATE "{name}"?\n\n'
            "This will block access for ALL users in this organization including Super Admins and Admins."
        )


class OrganizationDetailView(ViewModel):
    def __init__(self, service: OrganizationService, organization_id: int) -> None:
        super().__init__()
        self._service = service
        self.organization_id = organization_id
        self.organization: Optional[Organization] = None

    async def load(self) -> None:
        self.error = None
        org = await self._run(
            self._service.get_organization(self.organization_id),
            context="load organization",
            fallback="Failed to load organization details",
        )
        if org is not None:
            self.organization = org

    async def _set_active(self, active: bool) -> bool:
        if self.organization is None:
            return False
        self.reset_messages()
        action = (
            self._service.activate_organization(self.organization_id)
            if active
            else self._service.deactivate_organization(self.organization_id)
        )
        await self._run(action, context="change organization status", fallback="Unknown error")
        if self.error:
            verb = "activate" if active else "deactivate"
            self.error = f"Failed to {verb}: {self.error}"
            return False
        await self.load()
        return True

    async def activate(self) -> bool:
        return await self._set_active(True)

    async def deactivate(self) -> bool:
        return await self._set_active(False)
