"""Login and password-change screens."""

from __future__ import annotations

from typing import Optional

from ems_client.auth.schemas import LoginRequest, PasswordChangeRequest
from ems_client.auth.service import AuthService
from ems_client.common.exceptions import ApiError, AppException, ErrorKind, user_message
from ems_client.common.views import FormErrors, ViewModel
from ems_client.navigation.routes import Route
from ems_client.navigation.service import resolve_landing

LOGIN_FAILED = "Login failed. Please try again."
INVALID_CREDENTIALS = "Invalid username or password"
ACCESS_DENIED = "Access denied. Your account or organization may be disabled."
NO_TOKEN = "Login failed: no token received"

MIN_PASSWORD_LENGTH = 6
PASSWORD_CHANGE_FAILED = "Failed to change password. Please try again."


class LoginView(ViewModel):
    """Returns the next route on success; stays anonymous on failure."""

    def __init__(self, service: AuthService) -> None:
        super().__init__()
        self._service = service

    async def _login(self, username: Optional[str], password: Optional[str]) -> Route:
        errors = FormErrors()
        errors.require("username", username, "Username is required")
        errors.require("password", password, "Password is required")
        errors.raise_if_any()

        response = await self._service.login(LoginRequest(username=username.strip(), password=password))
        if not response.token:
            raise AppException(200, "login", "Login Failed", NO_TOKEN)
        if response.temporary_password:
            return Route.change_password
        return resolve_landing(response.roles)

    async def submit(self, username: Optional[str], password: Optional[str]) -> Optional[Route]:
        self.reset_messages()
        return await self._run(self._login(username, password), context="login")

    def _message_for(self, exc: AppException) -> str:
        if isinstance(exc, ApiError):
            if exc.kind is ErrorKind.connectivity:
                return LOGIN_FAILED
            if exc.message:
                return exc.message
            if exc.kind is ErrorKind.forbidden:
                return ACCESS_DENIED
            if exc.kind is ErrorKind.unauthorized:
                return INVALID_CREDENTIALS
            return LOGIN_FAILED
        return user_message(exc)


class PasswordChangeView(ViewModel):
    """Forced after a temporary-password login; ends the session on success.

    Cancelling logs out too.
    """

    def __init__(self, service: AuthService) -> None:
        super().__init__()
        self._service = service

    @staticmethod
    def validate(
        current_password: Optional[str],
        new_password: Optional[str],
        confirm_password: Optional[str],
    ) -> PasswordChangeRequest:
        errors = FormErrors()
        errors.require("current_password", current_password, "Current password is required")
        errors.require("new_password", new_password, "New password is required")
        if new_password and len(new_password) < MIN_PASSWORD_LENGTH:
            errors.add("new_password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        errors.require("confirm_password", confirm_password, "Please confirm your new password")
        if confirm_password and new_password != confirm_password:
            errors.add("confirm_password", "Passwords do not match")
        errors.raise_if_any()
        return PasswordChangeRequest(
            current_password=current_password,
            new_password=new_password,
            confirm_password=confirm_password,
        )

    async def _change(self, current: Optional[str], new: Optional[str], confirm: Optional[str]) -> Route:
        await self._service.change_password(self.validate(current, new, confirm))
        self._service.logout()
        return Route.login

    async def submit(
        self,
        current_password: Optional[str],
        new_password: Optional[str],
        confirm_password: Optional[str],
    ) -> Optional[Route]:
        self.reset_messages()
        route = await self._run(
            self._change(current_password, new_password, confirm_password), context="change password",
        )
        if route is not None:
            self.success = "Password changed successfully! Please login with your new password."
        return route

    def cancel(self) -> Route:
        self._service.logout()
        return Route.login

    def _message_for(self, exc: AppException) -> str:
        if isinstance(exc, ApiError) and exc.kind is ErrorKind.server:
            return exc.message or PASSWORD_CHANGE_FAILED
        return user_message(exc)
