"""HTTP boundary: one async client shared by every service.

Every non-2xx response and every transport failure leaves this module as an
``ApiError`` subclass; nothing above it inspects raw error bodies.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from ems_client.auth.dependencies import SessionAuth
from ems_client.auth.session import SessionStore
from ems_client.common.exceptions import ApiError, ConnectivityError
from ems_client.config import Settings

logger = logging.getLogger(__name__)

# (filename, content, content type) as accepted by httpx ``files=``
FilePart = tuple[str, bytes, str]


class ApiClient:
    """Thin JSON/multipart wrapper around ``httpx.AsyncClient``."""

    def __init__(
        self,
        settings: Settings,
        session: SessionStore,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.session = session
        self._client = httpx.AsyncClient(
            auth=SessionAuth(session, settings.TENANT_HEADER),
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def url(self, resource: str, *parts: Any) -> str:
        """``url("documents", 5, "download")`` → ``.../api/documents/5/download``."""
        base = self.settings.endpoint(resource)
        suffix = "/".join(str(p).strip("/") for p in parts if p != "")
        return f"{base}/{suffix}" if suffix else base

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Core ────────────────────────────────────────────────────────

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, FilePart]] = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(
                method, url, params=params, json=json, data=data, files=files,
            )
        except httpx.TransportError as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise ConnectivityError(str(exc) or None) from exc

        if response.is_error:
            error = ApiError.from_response(response)
            logger.warning(
                "%s %s → %s (%s)", method, url, response.status_code, error.kind.value,
            )
            raise error
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    # ── JSON helpers ────────────────────────────────────────────────

    async def get(self, url: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._json(await self.request("GET", url, params=params))

    async def post(self, url: str, body: Any = None, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._json(await self.request("POST", url, json=body, params=params))

    async def put(self, url: str, body: Any = None) -> Any:
        return self._json(await self.request("PUT", url, json=body))

    async def delete(self, url: str) -> Any:
        return self._json(await self.request("DELETE", url))

    # ── Binary / multipart ──────────────────────────────────────────

    async def get_bytes(self, url: str) -> tuple[bytes, str]:
        """Download a blob; returns ``(content, content_type)``."""
        response = await self.request("GET", url)
        content_type = response.headers.get("content-type", "application/octet-stream")
        return response.content, content_type

    async def post_multipart(
        self,
        url: str,
        *,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, FilePart]] = None,
    ) -> Any:
        return self._json(await self.request("POST", url, data=data, files=files))
