"""Notification Pydantic schemas."""


from typing import Optional

from ems_client.common.models import ApiModel


class Notification(ApiModel):
    """Single notification as returned by the backend."""

    id: int
    user_id: Optional[int] = None
    type: str
    title: str
    message: str
    reference_id: Optional[int] = None
    reference_type: Optional[str] = None
    is_read: bool = False
    created_at: str
    organization_id: Optional[int] = None


class UnreadCount(ApiModel):
    count: int = 0
