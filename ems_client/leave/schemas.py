"""Leave Pydantic schemas: request / response shapes.

Naming conventions:
  - *Request  → request bodies (write)
  - plain     → response bodies (read)
"""

from __future__ import annotations

from typing import Optional

from ems_client.common.constants import LeaveStatus
from ems_client.common.models import ApiModel


class Leave(ApiModel):
    id: Optional[int] = None
    employee_id: int
    employee_name: Optional[str] = None
    leave_type: str
    start_date: str
    end_date: str
    number_of_days: Optional[float] = None
    reason: Optional[str] = None
    status: Optional[LeaveStatus] = None
    applied_date: Optional[str] = None
    approved_by: Optional[str] = None
    rejected_by: Optional[str] = None
    approval_date: Optional[str] = None
    rejection_date: Optional[str] = None
    remarks: Optional[str] = None
    admin_comments: Optional[str] = None
    requires_super_admin_approval: Optional[bool] = None
    has_medical_certificate: Optional[bool] = None
    certificate_file_name: Optional[str] = None
    financial_year: Optional[str] = None

    @property
    def is_approved(self) -> bool:
        return self.status is LeaveStatus.approved


class LeaveRequest(ApiModel):
    """Body of an apply / update call."""

    employee_id: int
    leave_type: str
    start_date: str
    end_date: str
    reason: str


class LeaveApprovalRequest(ApiModel):
    approved_by: Optional[str] = None
    rejected_by: Optional[str] = None
    remarks: str = ""
    admin_comments: Optional[str] = None


class LeaveBalance(ApiModel):
    id: int
    employee_id: int
    employee_name: Optional[str] = None
    financial_year: str
    leave_type: str
    total_allocated: float
    used_leaves: float
    remaining_leaves: float


class BlockedDate(ApiModel):
    start_date: str
    end_date: str
    status: str
    leave_type: str
