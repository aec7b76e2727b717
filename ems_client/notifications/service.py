"""Notification service: CRUD calls plus the unread-count poller."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

from ems_client.api import ApiClient
from ems_client.auth.session import SessionState, SessionStore
from ems_client.common.exceptions import AppException
from ems_client.notifications.schemas import Notification, UnreadCount

logger = logging.getLogger(__name__)

CountListener = Callable[[int], None]


# ── Core service ────────────────────────────────────────────────────


class NotificationService:
    """Wraps ``/notifications`` and publishes the latest unread count."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api
        self.unread_count = 0
        self._listeners: list[CountListener] = []

    def _url(self, *parts: Any) -> str:
        return self._api.url("notifications", *parts)

    @staticmethod
    def _many(data: Any) -> list[Notification]:
        return Notification.list_from_response(data)

    def subscribe(self, listener: CountListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _publish(self, count: int) -> None:
        self.unread_count = count
        for listener in list(self._listeners):
            listener(count)

    async def get_my_notifications(self) -> list[Notification]:
        return self._many(await self._api.get(self._url()))

    async def get_unread_notifications(self) -> list[Notification]:
        return self._many(await self._api.get(self._url("unread")))

    async def get_recent_notifications(self) -> list[Notification]:
        return self._many(await self._api.get(self._url("recent")))

    async def get_unread_count(self) -> int:
        result = UnreadCount.from_response(await self._api.get(self._url("unread", "count")))
        self._publish(result.count)
        return result.count

    async def mark_as_read(self, notification_id: int) -> Notification:
        data = await self._api.put(self._url(notification_id, "read"), {})
        await self.get_unread_count()
        return Notification.from_response(data)

    async def mark_all_as_read(self) -> None:
        await self._api.put(self._url("read-all"), {})
        await self.get_unread_count()

    async def delete_notification(self, notification_id: int) -> None:
        await self._api.delete(self._url(notification_id))
        await self.get_unread_count()


# ── Poller ──────────────────────────────────────────────────────────


class UnreadCountPoller:
    """Refreshes the unread count on a fixed interval while logged in.

    Bound to the session: starts on AUTHENTICATED, cancelled on ANONYMOUS.
    ``start()`` is a no-op outside a running event loop.
    """

    def __init__(
        self,
        service: NotificationService,
        session: SessionStore,
        interval: float = 30.0,
    ) -> None:
        self._service = service
        self._session = session
        self.interval = interval
        self._task: Optional[asyncio.Task] = None
        self._unsubscribe = session.subscribe(self._on_session_change)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; unread-count poller not started")
            return
        self._task = loop.create_task(self._loop(), name="unread-count-poller")
        logger.info("Unread-count poller started (every %ss)", self.interval)

    def stop(self) -> None:
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
            logger.info("Unread-count poller stopped")
        self._task = None

    async def aclose(self) -> None:
        """Stop and wait for the task to finish unwinding."""
        task = self._task
        self.stop()
        self._unsubscribe()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _loop(self) -> None:
        while True:
            try:
                await self._service.get_unread_count()
            except AppException as exc:
                logger.warning("Unread-count refresh failed: %s", exc.detail)
            await asyncio.sleep(self.interval)

    def _on_session_change(self, state: SessionState) -> None:
        if state is SessionState.AUTHENTICATED:
            self.start()
        else:
            self.stop()
