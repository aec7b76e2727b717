"""Session store lifecycle and the request decorator."""

from __future__ import annotations

import os
import time
from datetime import timedelta

import pytest

from ems_client.auth.session import (
    FileStorage,
    MemoryStorage,
    SessionState,
    SessionStore,
    token_expired,
)
from ems_client.common.constants import TOKEN_KEY, USER_KEY
from ems_client.common.exceptions import StaleSessionError, UnauthorizedError
from ems_client.core_hr.service import EmployeeService
from tests.factories import make_login_response
from tests.fake_backend import issue_token


# ── Store ───────────────────────────────────────────────────────────

def test_start_persists_token_and_user():
    storage = MemoryStorage()
    session = SessionStore(storage)

    state = session.start(make_login_response(token="tok-1"))

    assert state is SessionState.AUTHENTICATED
    assert session.is_logged_in
    assert storage.get(TOKEN_KEY) == "tok-1"
    assert '"username":"alice"' in storage.get(USER_KEY)
    assert session.user.employee_id == 7


def test_response_without_token_does_not_change_state():
    session = SessionStore(MemoryStorage())
    events = []
    session.subscribe(events.append)

    assert session.start(make_login_response(token=None)) is SessionState.ANONYMOUS
    assert not session.is_logged_in
    assert events == []


def test_listeners_fire_on_every_transition_and_unsubscribe():
    session = SessionStore(MemoryStorage())
    events = []
    unsubscribe = session.subscribe(events.append)

    session.start(make_login_response())
    session.logout()
    unsubscribe()
    session.start(make_login_response())

    assert events == [SessionState.AUTHENTICATED, SessionState.ANONYMOUS]


def test_logout_when_anonymous_is_silent():
    session = SessionStore(MemoryStorage())
    events = []
    session.subscribe(events.append)
    session.logout()
    assert events == []


def test_restore_live_session():
    token = issue_token("alice")
    user = make_login_response().to_user()
    storage = MemoryStorage({TOKEN_KEY: token, USER_KEY: user.model_dump_json()})
    session = SessionStore(storage)

    assert session.restore() is SessionState.AUTHENTICATED
    assert session.token == token
    assert session.user.username == "alice"


def test_restore_discards_expired_jwt():
    token = issue_token("alice", expires_in=timedelta(minutes=-5))
    user = make_login_response().to_user()
    storage = MemoryStorage({TOKEN_KEY: token, USER_KEY: user.model_dump_json()})
    session = SessionStore(storage)

    assert session.restore() is SessionState.ANONYMOUS
    assert storage.get(TOKEN_KEY) is None
    assert storage.get(USER_KEY) is None


def test_restore_discards_unreadable_user_record():
    storage = MemoryStorage({TOKEN_KEY: "opaque", USER_KEY: '{"not": "a user"}'})
    session = SessionStore(storage)

    assert session.restore() is SessionState.ANONYMOUS
    assert storage.get(TOKEN_KEY) is None


def test_token_expired_only_for_past_exp():
    assert not token_expired("opaque-token")
    assert token_expired(issue_token("a", expires_in=timedelta(seconds=-1)))
    assert not token_expired(issue_token("a"))
    assert token_expired(issue_token("a"), now=time.time() + 86400)


def test_file_storage_survives_new_store(tmp_path):
    path = tmp_path / "nested" / "session.json"
    SessionStore(FileStorage(path)).start(make_login_response(token=issue_token("alice")))

    restored = SessionStore(FileStorage(path))
    assert restored.restore() is SessionState.AUTHENTICATED
    assert restored.user.username == "alice"
    assert oct(path.stat().st_mode & 0o777) == oct(0o600)


def test_file_storage_is_owner_only_from_creation(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{}")
    path.chmod(0o644)
    previous = os.umask(0)
    try:
        FileStorage(path).set("token", "secret")
    finally:
        os.umask(previous)

    assert oct(path.stat().st_mode & 0o777) == oct(0o600)
    assert FileStorage(path).get("token") == "secret"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["session.json"]


def test_file_storage_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json")
    assert SessionStore(FileStorage(path)).restore() is SessionState.ANONYMOUS


# ── Request decorator ───────────────────────────────────────────────

async def test_bearer_and_tenant_headers(api, backend, sign_in):
    response = sign_in(roles=["ADMIN"], organization_uuid="org-42")

    await EmployeeService(api).get_all_employees()

    headers = backend.headers_for("/api/employees")
    assert headers["authorization"] == f"Bearer {response.token}"
    assert headers["x-organization-uuid"] == "org-42"


async def test_root_never_sends_tenant_header(api, backend, sign_in):
    sign_in("root", roles=["ROOT"], organization_uuid="org-should-not-leak")

    await EmployeeService(api).get_all_employees()

    headers = backend.headers_for("/api/employees")
    assert "authorization" in headers
    assert "x-organization-uuid" not in headers


async def test_anonymous_requests_carry_no_credentials(api, backend):
    with pytest.raises(UnauthorizedError):
        await EmployeeService(api).get_all_employees()

    headers = backend.headers_for("/api/employees")
    assert "authorization" not in headers
    assert "x-organization-uuid" not in headers


async def test_stale_session_logs_out_before_sending(api, backend, session, storage, sign_in):
    sign_in(roles=["USER"], organization_uuid=None)

    with pytest.raises(StaleSessionError):
        await EmployeeService(api).get_all_employees()

    assert session.state is SessionState.ANONYMOUS
    assert storage.get(TOKEN_KEY) is None
    assert not any(path == "/api/employees" for _, path, _ in backend.requests)


async def test_401_forces_logout(api, backend, session, storage, sign_in):
    sign_in(roles=["ADMIN"])
    events = []
    session.subscribe(events.append)
    backend.revoke_all()

    with pytest.raises(UnauthorizedError):
        await EmployeeService(api).get_all_employees()

    assert session.state is SessionState.ANONYMOUS
    assert storage.get(TOKEN_KEY) is None
    assert storage.get(USER_KEY) is None
    assert events == [SessionState.ANONYMOUS]
