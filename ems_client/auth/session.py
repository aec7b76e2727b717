"""Session store: token + user record, persisted between runs.

The store is an explicit object handed to the request decorator, the
navigator and the services. Lifecycle:

    restore()  at app start, from persisted storage
    start()    on a login response carrying a token
    logout()   on explicit logout, a 401, or a stale session record
"""

from __future__ import annotations

import enum
import json
import logging
import os
import time
from pathlib import Path
from typing import Callable, Optional, Protocol

from jose import JWTError, jwt
from pydantic import ValidationError

from ems_client.auth.schemas import JwtResponse, SessionUser
from ems_client.common.constants import TOKEN_KEY, USER_KEY

logger = logging.getLogger(__name__)

Listener = Callable[["SessionState"], None]


class SessionState(str, enum.Enum):
    ANONYMOUS = "ANONYMOUS"
    AUTHENTICATED = "AUTHENTICATED"


# ── Persistent storage ──────────────────────────────────────────────

class SessionStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage; nothing survives the interpreter."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage:
    """Key/value strings in a single JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError:
            logger.warning("Session file %s is not valid JSON; ignoring it", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        """Owner-only temp file in the same directory, then an atomic rename."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(f".{self.path.name}.{os.getpid()}.tmp")
        tmp.unlink(missing_ok=True)
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        try:
            with os.fdopen(fd, "w") as fh:
                json.dump(data, fh)
            os.replace(tmp, self.path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


# ── Token helpers ───────────────────────────────────────────────────

def token_expired(token: str, *, now: Optional[float] = None) -> bool:
    """True only for a JWT whose ``exp`` claim has passed.

    The token is read without verification; opaque tokens count as live.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return False
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return False
    return exp <= (now if now is not None else time.time())


# ── Store ───────────────────────────────────────────────────────────

class SessionStore:
    """Holds the bearer token and user; publishes state changes."""

    def __init__(self, storage: SessionStorage) -> None:
        self._storage = storage
        self._token: Optional[str] = None
        self._user: Optional[SessionUser] = None
        self._listeners: list[Listener] = []

    # ── State ───────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        if self._token:
            return SessionState.AUTHENTICATED
        return SessionState.ANONYMOUS

    @property
    def is_logged_in(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def user(self) -> Optional[SessionUser]:
        return self._user

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _publish(self) -> None:
        state = self.state
        for listener in list(self._listeners):
            listener(state)

    # ── Lifecycle ───────────────────────────────────────────────────

    def restore(self) -> SessionState:
        """Load a persisted session; stale or unreadable entries are cleared."""
        token = self._storage.get(TOKEN_KEY)
        raw_user = self._storage.get(USER_KEY)
        if not token:
            return self.state

        if token_expired(token):
            logger.info("Persisted token has expired; starting anonymous")
            self._clear_storage()
            return self.state

        user: Optional[SessionUser] = None
        if raw_user:
            try:
                user = SessionUser.model_validate_json(raw_user)
            except ValidationError:
                logger.warning("Persisted user record is unreadable; starting anonymous")
                self._clear_storage()
                return self.state

        self._token = token
        self._user = user
        logger.info("Restored session for %s", user.username if user else "unknown user")
        self._publish()
        return self.state

    def start(self, response: JwtResponse) -> SessionState:
        """ANONYMOUS → AUTHENTICATED, only when the response carries a token."""
        if not response.token:
            logger.warning("Login response carried no token; staying anonymous")
            return self.state

        self._token = response.token
        self._user = response.to_user()
        self._storage.set(TOKEN_KEY, response.token)
        self._storage.set(USER_KEY, self._user.model_dump_json())
        logger.info("Session started for %s", self._user.username)
        self._publish()
        return self.state

    def update_user(self, user: SessionUser) -> None:
        """Replace the persisted user record (e.g. after a password change)."""
        self._user = user
        self._storage.set(USER_KEY, user.model_dump_json())

    def logout(self, reason: str = "logout") -> None:
        """Clear credentials and drop to ANONYMOUS."""
        was_authenticated = self.is_logged_in
        self._token = None
        self._user = None
        self._clear_storage()
        if was_authenticated:
            logger.info("Session ended (%s)", reason)
            self._publish()

    def _clear_storage(self) -> None:
        self._storage.remove(TOKEN_KEY)
        self._storage.remove(USER_KEY)
