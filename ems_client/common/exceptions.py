"""Client exceptions: every backend error shape normalized into one type."""

from __future__ import annotations

import enum
from typing import Any, Optional

import httpx

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


class ErrorKind(str, enum.Enum):
    validation = "validation"
    unauthorized = "unauthorized"
    forbidden = "forbidden"
    not_found = "not_found"
    connectivity = "connectivity"
    server = "server"


# ── Exception hierarchy ─────────────────────────────────────────────

class AppException(Exception):
    """Base for all client exceptions, shaped like an RFC 7807 problem."""

    def __init__(
        self,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
        errors: Optional[dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.title = title
        self.detail = detail
        self.errors = errors
        super().__init__(detail)


class ValidationException(AppException):
    """Client-side form validation failure, raised before any request."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(
            status_code=422,
            error_type=ErrorKind.validation.value,
            title="Validation Error",
            detail="One or more fields failed validation.",
            errors=errors,
        )


class StaleSessionError(AppException):
    """Authenticated user record is missing its organization identifier."""

    def __init__(
        self,
        detail: str = "Your session is outdated. Please log in again.",
    ) -> None:
        super().__init__(
            status_code=401,
            error_type="stale-session",
            title="Session Outdated",
            detail=detail,
        )


class ApiError(AppException):
    """Any failed backend call, tagged by ``kind``."""

    kind: ErrorKind = ErrorKind.server

    def __init__(
        self,
        status_code: int,
        detail: Optional[str] = None,
        errors: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = detail
        super().__init__(
            status_code=status_code,
            error_type=self.kind.value,
            title=self.kind.value.replace("_", " ").title(),
            detail=detail or GENERIC_ERROR_MESSAGE,
            errors=errors,
        )

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        """Build the matching subclass from an error response."""
        detail, errors = _extract_error_body(response)
        error_cls = _STATUS_TO_ERROR.get(response.status_code, ServerError)
        return error_cls(response.status_code, detail, errors)


class UnauthorizedError(ApiError):
    kind = ErrorKind.unauthorized


class ForbiddenError(ApiError):
    kind = ErrorKind.forbidden


class NotFoundError(ApiError):
    kind = ErrorKind.not_found


class ConnectivityError(ApiError):
    """Transport failure: the backend was never reached (status 0)."""

    kind = ErrorKind.connectivity

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(0, detail)


class ServerError(ApiError):
    kind = ErrorKind.server


class ResponseDecodeError(ServerError):
    """A 2xx body that is not the JSON shape the caller expects.

    Users see the generic message; the model name is kept for the logs.
    """

    def __init__(self, expected: str, error_count: int = 0) -> None:
        self.expected = expected
        detail = f"Unexpected response body for {expected}"
        if error_count:
            detail = f"{detail} ({error_count} validation errors)"
        super().__init__(200, detail)
        self.message = None


_STATUS_TO_ERROR: dict[int, type[ApiError]] = {
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
}


# ── Body normalization ──────────────────────────────────────────────

def _extract_error_body(
    response: httpx.Response,
) -> tuple[Optional[str], Optional[dict[str, Any]]]:
    """Pull a message out of ``{"message"}``, ``{"detail"}``, ``{"error"}``
    (string or nested object) or a plain-text body."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or None), None

    if isinstance(body, str):
        return (body.strip() or None), None
    if not isinstance(body, dict):
        return None, None

    errors = body.get("errors") if isinstance(body.get("errors"), dict) else None
    for key in ("message", "detail", "error"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value, errors
        if isinstance(value, dict) and isinstance(value.get("message"), str):
            return value["message"], errors
    return None, errors


# ── User-facing text ────────────────────────────────────────────────

_FIXED_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.unauthorized: "Your session has expired. Please log in again.",
    ErrorKind.forbidden: "You do not have permission to perform this action.",
    ErrorKind.not_found: "The requested resource was not found.",
    ErrorKind.connectivity: "Unable to reach the server. Please check your connection.",
}


def user_message(exc: AppException) -> str:
    """Text a view shows for *exc*; the backend's message only for other errors."""
    if isinstance(exc, ApiError):
        fixed = _FIXED_MESSAGES.get(exc.kind)
        if fixed is not None:
            return fixed
        return exc.message or GENERIC_ERROR_MESSAGE
    return exc.detail
