"""Landing resolution, route guard and the session-bound navigator."""

from __future__ import annotations

import itertools

import pytest

from ems_client.auth.session import MemoryStorage, SessionStore
from ems_client.navigation.routes import PUBLIC_ROUTES, Route, is_protected
from ems_client.navigation.service import (
    Navigator,
    can_activate,
    resolve_dashboard,
    resolve_landing,
)
from tests.factories import make_login_response

ALL_ROLES = ("ROOT", "SUPER_ADMIN", "ADMIN", "USER")


# ── Landing ─────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    ("roles", "expected"),
    [
        (["ROOT"], Route.root_dashboard),
        (["ROOT", "SUPER_ADMIN", "ADMIN", "USER"], Route.root_dashboard),
        (["SUPER_ADMIN"], Route.dashboard),
        (["SUPER_ADMIN", "ADMIN"], Route.dashboard),
        (["ADMIN"], Route.dashboard),
        (["ADMIN", "USER"], Route.dashboard),
        (["USER"], Route.employees),
        ([], Route.employees),
        (["SOMETHING_ELSE"], Route.employees),
    ],
)
def test_resolve_landing(roles, expected):
    assert resolve_landing(roles) is expected


def test_resolve_landing_is_total_over_role_subsets():
    for size in range(len(ALL_ROLES) + 1):
        for roles in itertools.combinations(ALL_ROLES, size):
            assert isinstance(resolve_landing(roles), Route)


def test_dashboard_sends_admin_on_to_employees():
    assert resolve_dashboard(["ADMIN"]) is Route.employees
    assert resolve_dashboard(["SUPER_ADMIN"]) is Route.dashboard
    assert resolve_dashboard(["ROOT"]) is Route.root_dashboard
    assert resolve_dashboard(["USER"]) is Route.dashboard


# ── Guard ───────────────────────────────────────────────────────────

def test_public_routes_are_not_protected():
    assert Route.login in PUBLIC_ROUTES
    assert not is_protected(Route.forgot_password)
    assert is_protected(Route.documents)
    assert is_protected(Route.change_password)


def test_can_activate():
    session = SessionStore(MemoryStorage())
    assert can_activate(Route.login, session)
    assert not can_activate(Route.dashboard, session)

    session.start(make_login_response())
    assert can_activate(Route.dashboard, session)


def test_route_path_fills_parameters():
    assert Route.document_detail.path(id=42) == "/documents/42"
    assert Route.documents.path() == "/documents"


# ── Navigator ───────────────────────────────────────────────────────

def test_anonymous_navigation_redirects_to_login():
    navigator = Navigator(SessionStore(MemoryStorage()))
    location = navigator.navigate(Route.leaves)
    assert location.route is Route.login
    assert location.return_to is Route.leaves


def test_authenticated_navigation_keeps_params_and_history():
    session = SessionStore(MemoryStorage())
    session.start(make_login_response())
    navigator = Navigator(session)

    navigator.navigate(Route.documents)
    location = navigator.navigate(Route.document_detail, id=5)
    assert location.path == "/documents/5"

    assert navigator.back().route is Route.documents


def test_forced_logout_redirects_to_login():
    session = SessionStore(MemoryStorage())
    session.start(make_login_response())
    navigator = Navigator(session)
    navigator.navigate(Route.attendance)

    session.logout(reason="unauthorized")

    assert navigator.current.route is Route.login
    assert navigator.current.return_to is Route.attendance


def test_closed_navigator_stops_listening():
    session = SessionStore(MemoryStorage())
    session.start(make_login_response())
    navigator = Navigator(session)
    navigator.navigate(Route.attendance)
    navigator.close()

    session.logout()

    assert navigator.current.route is Route.attendance
