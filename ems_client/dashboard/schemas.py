"""Dashboard statistics schemas: tenant and ROOT views."""

from __future__ import annotations

from typing import Dict, List, Optional

from ems_client.common.models import ApiModel


class TenantDashboardStats(ApiModel):
    total_employees: int = 0
    employees_on_leave: int = 0
    employees_working: int = 0
    documents_expiring_in_30_days: int = 0
    documents_expiring_in_60_days: int = 0
    documents_expired: int = 0
    employees_by_department: Dict[str, int] = {}
    employees_by_work_location: Dict[str, int] = {}


class OrganizationOnboarding(ApiModel):
    organization_id: int
    organization_uuid: Optional[str] = None
    organization_name: str
    onboarding_date: Optional[str] = None
    super_admin_username: Optional[str] = None
    super_admin_email: Optional[str] = None
    is_active: bool = True
    days_active: int = 0


class RootDashboardStats(ApiModel):
    total_organizations: int = 0
    active_organizations: int = 0
    inactive_organizations: int = 0
    system_start_date: Optional[str] = None
    total_super_admins: int = 0
    recent_onboardings: List[OrganizationOnboarding] = []
