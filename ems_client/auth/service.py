"""Auth service: login/logout, signup, password and username recovery."""

from __future__ import annotations

import logging
from typing import Any

from ems_client.api import ApiClient
from ems_client.auth.schemas import (
    JwtResponse,
    LoginRequest,
    PasswordChangeRequest,
    ResetPasswordRequest,
    SignupRequest,
)
from ems_client.auth.session import SessionState, SessionStore

logger = logging.getLogger(__name__)


class AuthService:
    """Wraps ``/auth``; the only writer of session start."""

    def __init__(self, api: ApiClient, session: SessionStore) -> None:
        self._api = api
        self._session = session

    async def login(self, credentials: LoginRequest) -> JwtResponse:
        """POST credentials; on a token-bearing response the session starts."""
        data = await self._api.post(self._api.url("auth", "login"), credentials.to_payload())
        response = JwtResponse.from_response(data)
        if self._session.start(response) is SessionState.AUTHENTICATED:
            logger.info("Logged in as %s (roles=%s)", response.username, ",".join(response.roles))
        return response

    def logout(self) -> None:
        self._session.logout(reason="logout")

    async def signup(self, request: SignupRequest) -> Any:
        return await self._api.post(self._api.url("auth", "signup"), request.to_payload())

    async def verify_email(self, token: str) -> Any:
        return await self._api.get(self._api.url("auth", "verify-email"), params={"token": token})

    async def resend_verification(self, email: str) -> Any:
        return await self._api.post(self._api.url("auth", "resend-verification"), {"email": email})

    async def change_password(self, request: PasswordChangeRequest) -> Any:
        result = await self._api.post(self._api.url("auth", "change-password"), request.to_payload())
        user = self._session.user
        if user is not None and user.temporary_password:
            self._session.update_user(user.model_copy(update={"temporary_password": False}))
        return result

    async def forgot_password(self, email: str) -> Any:
        return await self._api.post(self._api.url("auth", "forgot-password"), {"email": email})

    async def forgot_username(self, email: str) -> Any:
        return await self._api.post(self._api.url("auth", "forgot-username"), {"email": email})

    async def reset_password(self, request: ResetPasswordRequest) -> Any:
        return await self._api.post(self._api.url("auth", "reset-password"), request.to_payload())
