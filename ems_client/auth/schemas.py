"""Auth Pydantic schemas for request / response validation."""


from typing import List, Optional

from pydantic import EmailStr, Field

from ems_client.common.constants import UserRole
from ems_client.common.models import ApiModel


# ── Requests ────────────────────────────────────────────────────────

class LoginRequest(ApiModel):
    username: str
    password: str


class SignupRequest(ApiModel):
    username: str
    email: EmailStr
    password: str
    roles: Optional[List[str]] = None


class PasswordChangeRequest(ApiModel):
    current_password: str
    new_password: str
    confirm_password: str


class ResetPasswordRequest(ApiModel):
    token: str
    new_password: str
    confirm_password: str


# ── Session user ────────────────────────────────────────────────────

class SessionUser(ApiModel):
    """User record persisted alongside the token."""

    id: int
    username: str
    email: str
    roles: List[str] = Field(default_factory=list)
    organization_uuid: Optional[str] = None
    employee_id: Optional[int] = None
    first_login: bool = False
    profile_completed: bool = True
    temporary_password: bool = False
    smtp_configured: Optional[bool] = None

    @property
    def role_set(self) -> frozenset[str]:
        return frozenset(self.roles)

    @property
    def is_root(self) -> bool:
        return UserRole.root.value in self.roles

    def has_any_role(self, *roles: str) -> bool:
        return bool(self.role_set.intersection(roles))


# ── Responses ───────────────────────────────────────────────────────

class JwtResponse(SessionUser):
    """Login response: the user record plus the bearer token."""

    token: Optional[str] = None
    type: str = "Bearer"

    def to_user(self) -> SessionUser:
        return SessionUser.model_validate(self.model_dump(exclude={"token", "type"}))


class MessageResponse(ApiModel):
    message: Optional[str] = None
