"""Tenant administration schemas: SMTP, alert rules, organizations."""

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field

from ems_client.common.constants import AlertChannel, AlertPriority, SmtpProvider
from ems_client.common.models import ApiModel


class SmtpConfiguration(ApiModel):
    id: Optional[int] = None
    organization_id: Optional[int] = None
    provider: SmtpProvider = SmtpProvider.gmail
    host: Optional[str] = None
    port: Optional[int] = None
    username: Optional[str] = None
    # write-only; the backend never returns it
    password: Optional[str] = None
    from_email: Optional[str] = None
    from_name: Optional[str] = None
    enabled: Optional[bool] = None
    use_default: Optional[bool] = None
    is_configured: Optional[bool] = None


class AlertConfiguration(ApiModel):
    id: Optional[int] = None
    document_type: str
    alert_days_before: int = Field(ge=0)
    alert_email: str
    enabled: bool = True
    alert_priority: AlertPriority = AlertPriority.warning
    notification_type: AlertChannel = AlertChannel.both
    organization_id: Optional[int] = None


class Organization(ApiModel):
    id: int
    organization_uuid: Optional[str] = None
    name: str
    description: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    logo_url: Optional[str] = None


class CreateOrganizationRequest(ApiModel):
    organization_name: str
    super_admin_username: str
    super_admin_email: EmailStr
    super_admin_full_name: str
    password: str


class Credentials(ApiModel):
    username: str
    password: Optional[str] = None


class OrganizationCreationResponse(ApiModel):
    organization: Organization
    credentials: Optional[Credentials] = None
