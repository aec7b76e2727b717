"""Login flow end to end against the fake backend."""

from __future__ import annotations

import pytest

from ems_client.auth.schemas import LoginRequest, PasswordChangeRequest
from ems_client.auth.service import AuthService
from ems_client.auth.session import SessionState
from ems_client.auth.views import LoginView, PasswordChangeView
from ems_client.common.constants import TOKEN_KEY
from ems_client.common.exceptions import ValidationException
from ems_client.navigation.routes import Route


async def test_valid_login_lands_by_role(api, backend, session):
    backend.add_user("sa", roles=["SUPER_ADMIN"])
    view = LoginView(AuthService(api, session))

    route = await view.submit("sa", "secret123")

    assert route is Route.dashboard
    assert view.error is None
    assert session.state is SessionState.AUTHENTICATED
    assert session.user.username == "sa"


async def test_root_lands_on_root_dashboard(api, backend, session):
    backend.add_user("root", roles=["ROOT"], organization_uuid=None)
    route = await LoginView(AuthService(api, session)).submit("root", "secret123")
    assert route is Route.root_dashboard


async def test_plain_user_lands_on_employees(api, backend, session):
    backend.add_user("bob", roles=["USER"])
    route = await LoginView(AuthService(api, session)).submit("bob", "secret123")
    assert route is Route.employees


async def test_temporary_password_goes_to_change_password(api, backend, session):
    backend.add_user("new", roles=["ADMIN"], temporary_password=True)
    route = await LoginView(AuthService(api, session)).submit("new", "secret123")
    assert route is Route.change_password
    assert session.is_logged_in


async def test_wrong_password_stays_anonymous(api, backend, session, storage):
    backend.add_user("alice")
    view = LoginView(AuthService(api, session))

    route = await view.submit("alice", "wrong")

    assert route is None
    assert view.error == "Invalid username or password"
    assert session.state is SessionState.ANONYMOUS
    assert storage.get(TOKEN_KEY) is None


async def test_disabled_organization_shows_backend_message(api, backend, session):
    backend.add_user("alice", disabled=True)
    view = LoginView(AuthService(api, session))

    assert await view.submit("alice", "secret123") is None
    assert view.error == "Your organization has been deactivated"


async def test_missing_fields_never_reach_backend(api, backend, session):
    view = LoginView(AuthService(api, session))

    assert await view.submit("  ", None) is None

    assert set(view.field_errors) == {"username", "password"}
    assert view.error == "Username is required"
    assert backend.requests == []


async def test_logout_clears_session(api, backend, session, storage):
    backend.add_user("alice")
    service = AuthService(api, session)
    await service.login(LoginRequest(username="alice", password="secret123"))

    service.logout()

    assert not session.is_logged_in
    assert storage.get(TOKEN_KEY) is None


async def test_change_password_clears_temporary_flag(api, backend, session, sign_in):
    sign_in(temporary_password=True)
    service = AuthService(api, session)

    await service.change_password(
        PasswordChangeRequest(current_password="secret123", new_password="n3w-pass!", confirm_password="n3w-pass!"),
    )

    assert session.user.temporary_password is False


async def test_forgot_password_is_public(api, backend, session):
    result = await AuthService(api, session).forgot_password("alice@example.com")
    assert "reset link" in result["message"]
    assert "authorization" not in backend.headers_for("/api/auth/forgot-password")


# ── Password change screen ──────────────────────────────────────────

def test_password_change_form_validation():
    view = PasswordChangeView(service=None)

    with pytest.raises(ValidationException) as exc_info:
        view.validate("", "abc", "abd")

    errors = exc_info.value.errors
    assert errors["current_password"] == ["Current password is required"]
    assert errors["new_password"] == ["Password must be at least 6 characters"]
    assert errors["confirm_password"] == ["Passwords do not match"]


def test_password_change_requires_confirmation():
    with pytest.raises(ValidationException) as exc_info:
        PasswordChangeView.validate("secret123", "n3w-pass!", None)
    assert exc_info.value.errors == {"confirm_password": ["Please confirm your new password"]}


async def test_password_change_ends_session(api, backend, session, sign_in):
    sign_in(temporary_password=True)
    view = PasswordChangeView(AuthService(api, session))

    route = await view.submit("secret123", "n3w-pass!", "n3w-pass!")

    assert route is Route.login
    assert view.success == "Password changed successfully! Please login with your new password."
    assert not session.is_logged_in


async def test_password_change_invalid_form_sends_nothing(api, backend, session, sign_in):
    sign_in(temporary_password=True)
    view = PasswordChangeView(AuthService(api, session))
    before = len(backend.requests)

    assert await view.submit("secret123", "short", "short") is None

    assert view.field_errors == {"new_password": ["Password must be at least 6 characters"]}
    assert len(backend.requests) == before
    assert session.is_logged_in


async def test_password_change_shows_backend_message(api, backend, session, sign_in):
    sign_in(temporary_password=True)
    backend.fail_once("POST", "/api/auth/change-password", 400, {"message": "Current password is incorrect"})
    view = PasswordChangeView(AuthService(api, session))

    assert await view.submit("wrong-one", "n3w-pass!", "n3w-pass!") is None

    assert view.error == "Current password is incorrect"
    assert session.is_logged_in


async def test_password_change_cancel_logs_out(api, session, sign_in):
    sign_in(temporary_password=True)
    assert PasswordChangeView(AuthService(api, session)).cancel() is Route.login
    assert not session.is_logged_in
