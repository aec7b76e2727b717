"""Shared test fixtures: settings, session, API client over the fake backend.

The fake backend is a FastAPI app mounted through ``httpx.ASGITransport``,
so every service call goes through the real ``ApiClient`` and ``SessionAuth``.
"""

from __future__ import annotations

from typing import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport

from ems_client.api import ApiClient
from ems_client.auth.schemas import JwtResponse
from ems_client.auth.session import MemoryStorage, SessionStore
from ems_client.config import Settings
from tests.fake_backend import FakeBackend, create_fake_backend


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        API_URL="http://test/api",
        API_BASE_URL="http://test",
        SESSION_FILE=str(tmp_path / "session.json"),
        NOTIFICATION_POLL_SECONDS=0.01,
        MAX_UPLOAD_SIZE_MB=1,
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def transport(backend) -> ASGITransport:
    return ASGITransport(app=create_fake_backend(backend))


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def session(storage) -> SessionStore:
    return SessionStore(storage)


@pytest.fixture
async def api(settings, session, transport) -> AsyncGenerator[ApiClient, None]:
    """ApiClient wired to the fake backend."""
    client = ApiClient(settings, session, transport=transport)
    yield client
    await client.aclose()


# ── Auth helpers ────────────────────────────────────────────────────

@pytest.fixture
def sign_in(backend, session) -> Callable[..., JwtResponse]:
    """Register a user on the backend and start a session with a live token."""

    def _sign_in(username: str = "alice", **user_fields) -> JwtResponse:
        backend.add_user(username, **user_fields)
        response = JwtResponse.model_validate(backend.login_payload(username))
        session.start(response)
        return response

    return _sign_in
