"""Request decorator: bearer + tenant headers, forced logout on 401."""

from __future__ import annotations

import logging
from typing import Generator

import httpx

from ems_client.auth.session import SessionStore
from ems_client.common.exceptions import StaleSessionError

logger = logging.getLogger(__name__)


class SessionAuth(httpx.Auth):
    """Decorates every outbound request from the current session.

    While authenticated: ``Authorization: Bearer <token>`` always, and the
    tenant header for every non-ROOT user. ROOT requests never carry it.
    """

    def __init__(self, session: SessionStore, tenant_header: str) -> None:
        self._session = session
        self._tenant_header = tenant_header

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        token = self._session.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
            user = self._session.user
            if user is not None and not user.is_root:
                if not user.organization_uuid:
                    logger.error("Non-ROOT session for %s has no organization id", user.username)
                    self._session.logout(reason="stale_session")
                    raise StaleSessionError()
                request.headers[self._tenant_header] = user.organization_uuid

        response = yield request

        if response.status_code == 401:
            logger.warning("401 from %s %s; forcing logout", request.method, request.url.path)
            self._session.logout(reason="unauthorized")
