"""Notification dropdown."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

from ems_client.common.constants import DISPLAY_DATE_FORMAT, NotificationType
from ems_client.common.views import ViewModel
from ems_client.notifications.schemas import Notification
from ems_client.notifications.service import NotificationService

_ICONS: dict[str, str] = {
    NotificationType.leave_request.value: "🏖️",
    NotificationType.leave_approved.value: "✅",
    NotificationType.leave_rejected.value: "❌",
    NotificationType.document_expired.value: "🚨",
    NotificationType.document_near_expiry.value: "⚠️",
}
DEFAULT_ICON = "🔔"

# Backend timestamps trim trailing zeros, so the fraction has 1 to 9 digits
_FRACTION_RE = re.compile(r"\.(\d+)")


def icon_for(notification_type: str) -> str:
    return _ICONS.get(notification_type, DEFAULT_ICON)


def _parse_timestamp(value: str) -> datetime:
    text = _FRACTION_RE.sub(
        lambda m: "." + m.group(1)[:6].ljust(6, "0"), value.strip().replace("Z", "+00:00"), count=1,
    )
    return datetime.fromisoformat(text)


def time_ago(created_at: str, *, now: Optional[datetime] = None) -> str:
    """Relative age: "Just now", "5m ago", "3h ago", "2d ago", else a date.

    A value that is not an ISO timestamp is returned as is.
    """
    try:
        created = _parse_timestamp(created_at)
    except ValueError:
        return created_at
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    seconds = int((now - created).total_seconds())
    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    if seconds < 604800:
        return f"{seconds // 86400}d ago"
    return created.strftime(DISPLAY_DATE_FORMAT)


class NotificationDropdownView(ViewModel):
    def __init__(self, service: NotificationService) -> None:
        super().__init__()
        self._service = service
        self.notifications: list[Notification] = []
        self.unread_count = service.unread_count
        self._unsubscribe = service.subscribe(self._on_count)
        self.is_open = False

    def _on_count(self, count: int) -> None:
        self.unread_count = count

    async def toggle(self) -> None:
        self.is_open = not self.is_open
        if self.is_open:
            await self.load()

    async def load(self) -> None:
        notifications = await self._run(
            self._service.get_recent_notifications(), context="load notifications",
        )
        if notifications is not None:
            self.notifications = notifications

    async def refresh_count(self) -> None:
        count = await self._run(self._service.get_unread_count(), context="unread count")
        if count is not None:
            self.unread_count = count

    async def mark_as_read(self, notification: Notification) -> None:
        if notification.is_read:
            return
        updated = await self._run(
            self._service.mark_as_read(notification.id), context="mark notification read",
        )
        if updated is not None:
            self.notifications = [
                updated if n.id == updated.id else n for n in self.notifications
            ]

    async def mark_all_as_read(self) -> None:
        async def _mark_all() -> bool:
            await self._service.mark_all_as_read()
            return True

        if await self._run(_mark_all(), context="mark all notifications read"):
            self.notifications = [
                n.model_copy(update={"is_read": True}) for n in self.notifications
            ]

    async def delete(self, notification_id: int) -> None:
        async def _delete() -> bool:
            await self._service.delete_notification(notification_id)
            return True

        if await self._run(_delete(), context="delete notification"):
            self.notifications = [n for n in self.notifications if n.id != notification_id]

    def close(self) -> None:
        self._unsubscribe()
