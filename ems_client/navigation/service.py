"""Landing resolution and guarded navigation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from ems_client.auth.session import SessionState, SessionStore
from ems_client.common.constants import UserRole
from ems_client.navigation.routes import Route, is_protected

logger = logging.getLogger(__name__)


# ── Pure resolvers ──────────────────────────────────────────────────

def resolve_landing(roles: Iterable[str]) -> Route:
    """Screen to open after login.

    ROOT beats SUPER_ADMIN and ADMIN; either admin role beats a plain user.
    Total over every role set, the empty one included.
    """
    role_set = frozenset(roles)
    if UserRole.root.value in role_set:
        return Route.root_dashboard
    if UserRole.super_admin.value in role_set:
        return Route.dashboard
    if UserRole.admin.value in role_set:
        return Route.dashboard
    return Route.employees


def resolve_dashboard(roles: Iterable[str]) -> Route:
    """Where the dashboard screen actually sends a user.

    ROOT has its own dashboard and ADMIN is sent on to the employee list.
    SUPER_ADMIN gets the stats view, a plain user the personal summary.
    """
    role_set = frozenset(roles)
    if UserRole.root.value in role_set:
        return Route.root_dashboard
    if UserRole.super_admin.value in role_set:
        return Route.dashboard
    if UserRole.admin.value in role_set:
        return Route.employees
    return Route.dashboard


def can_activate(route: Route, session: SessionStore) -> bool:
    """Route guard: protected screens need an authenticated session."""
    if not is_protected(route):
        return True
    return session.state is SessionState.AUTHENTICATED


# ── Navigator ───────────────────────────────────────────────────────

@dataclass
class Location:
    route: Route
    params: dict[str, Any] = field(default_factory=dict)
    return_to: Optional[Route] = None

    @property
    def path(self) -> str:
        return self.route.path(**self.params)


class Navigator:
    """Current screen + history, guarded by the session.

    A forced logout (401, stale session) sends the user back to login.
    """

    def __init__(self, session: SessionStore, start: Route = Route.login) -> None:
        self._session = session
        self.history: list[Location] = [Location(start)]
        self._unsubscribe = session.subscribe(self._on_session_change)

    @property
    def current(self) -> Location:
        return self.history[-1]

    def navigate(self, route: Route, **params: Any) -> Location:
        if not can_activate(route, self._session):
            logger.info("Blocked %s for anonymous session; redirecting to login", route.value)
            location = Location(Route.login, return_to=route)
        else:
            location = Location(route, params)
        self.history.append(location)
        return location

    def back(self) -> Location:
        if len(self.history) > 1:
            self.history.pop()
        return self.current

    def _on_session_change(self, state: SessionState) -> None:
        if state is SessionState.ANONYMOUS and is_protected(self.current.route):
            self.history.append(Location(Route.login, return_to=self.current.route))

    def close(self) -> None:
        self._unsubscribe()
