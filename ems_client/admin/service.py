"""Administration services: SMTP settings, document alert rules, organizations."""

from __future__ import annotations

import logging
from typing import Any

from ems_client.admin.schemas import (
    AlertConfiguration,
    CreateOrganizationRequest,
    Organization,
    OrganizationCreationResponse,
    SmtpConfiguration,
)
from ems_client.api import ApiClient

logger = logging.getLogger(__name__)


class SmtpConfigService:
    """Per-organization outbound mail settings (``/smtp-configuration``)."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get_smtp_configuration(self) -> SmtpConfiguration:
        return SmtpConfiguration.from_response(await self._api.get(self._api.url("smtp_configuration")))

    async def save_smtp_configuration(self, config: SmtpConfiguration) -> SmtpConfiguration:
        data = await self._api.post(self._api.url("smtp_configuration"), config.to_payload())
        return SmtpConfiguration.from_response(data)

    async def is_smtp_configured(self) -> bool:
        return bool(await self._api.get(self._api.url("smtp_configuration", "check")))


class AlertConfigurationService:
    """Expiry alert rules per document type (``/alert-config``)."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get_all_configurations(self) -> list[AlertConfiguration]:
        data = await self._api.get(self._api.url("alert_config"))
        return AlertConfiguration.list_from_response(data)

    async def get_configuration_by_type(self, document_type: str) -> AlertConfiguration:
        data = await self._api.get(self._api.url("alert_config", "type", document_type))
        return AlertConfiguration.from_response(data)

    async def create_configuration(self, config: AlertConfiguration) -> AlertConfiguration:
        data = await self._api.post(self._api.url("alert_config"), config.to_payload())
        return AlertConfiguration.from_response(data)

    async def update_configuration(self, config_id: int, config: AlertConfiguration) -> AlertConfiguration:
        data = await self._api.put(self._api.url("alert_config", config_id), config.to_payload())
        return AlertConfiguration.from_response(data)

    async def test_alerts(self) -> Any:
        return await self._api.post(self._api.url("alert_config", "test-alerts"), {})


class OrganizationService:
    """ROOT-only tenant management (``/organizations``)."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def create_organization(self, request: CreateOrganizationRequest) -> OrganizationCreationResponse:
        data = await self._api.post(self._api.url("organizations"), request.to_payload())
        logger.info("Organization created: %s", request.organization_name)
        return OrganizationCreationResponse.from_response(data)

    async def get_organizations(self) -> list[Organization]:
        return Organization.list_from_response(await self._api.get(self._api.url("organizations")))

    async def get_organization(self, organization_id: int) -> Organization:
        org = Organization.from_response(await self._api.get(self._api.url("organizations", organization_id)))
        # logo paths come back relative to the server root
        if org.logo_url and not org.logo_url.startswith("http"):
            org.logo_url = f"{self._api.settings.API_BASE_URL.rstrip('/')}{org.logo_url}"
        return org

    async def activate_organization(self, organization_id: int) -> Any:
        logger.info("Activating organization %s", organization_id)
        return await self._api.post(self._api.url("organizations", organization_id, "activate"), {})

    async def deactivate_organization(self, organization_id: int) -> Any:
        logger.info("Deactivating organization %s", organization_id)
        return await self._api.post(self._api.url("organizations", organization_id, "deactivate"), {})
