"""Base view-model: per-screen UI state around one backend action at a time."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Optional, TypeVar

from ems_client.common.exceptions import (
    ApiError,
    AppException,
    ErrorKind,
    ValidationException,
    user_message,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ViewModel:
    """Holds ``loading`` / ``error`` / ``success`` / ``warning`` / ``field_errors``.

    Subclasses validate, then hand the awaitable to :meth:`_run`, which turns
    failures into messages instead of letting them reach the caller. Nothing
    is retried; the user re-triggers the action.
    """

    def __init__(self) -> None:
        self.loading = False
        self.error: Optional[str] = None
        self.success: Optional[str] = None
        self.warning: Optional[str] = None
        self.field_errors: dict[str, list[str]] = {}

    def reset_messages(self) -> None:
        self.error = None
        self.success = None
        self.warning = None
        self.field_errors = {}

    def _fail_validation(self, exc: ValidationException) -> None:
        self.field_errors = dict(exc.errors or {})
        first = next(iter(self.field_errors.values()), [])
        self.error = first[0] if first else exc.detail

    async def _run(
        self,
        action: Awaitable[T],
        *,
        context: str = "",
        failure: Optional[str] = None,
        fallback: Optional[str] = None,
    ) -> Optional[T]:
        """Await *action*; on failure set ``error`` and return ``None``.

        *failure* replaces the mapped message for backend errors. *fallback*
        is shown only when the backend sent no message of its own.
        """
        self.loading = True
        try:
            return await action
        except ValidationException as exc:
            self._fail_validation(exc)
        except AppException as exc:
            logger.warning("%s failed: %s", context or type(self).__name__, exc.detail)
            if failure:
                self.error = failure
            elif fallback:
                self.error = _backend_message(exc) or fallback
            else:
                self.error = self._message_for(exc)
        finally:
            self.loading = False
        return None

    def _message_for(self, exc: AppException) -> str:
        return user_message(exc)


def _backend_message(exc: AppException) -> Optional[str]:
    # transport failures carry the socket error, not a backend message
    if isinstance(exc, ApiError) and exc.kind is not ErrorKind.connectivity:
        return exc.message
    return None


class FormErrors:
    """Accumulates field errors; ``raise_if_any()`` raises ValidationException."""

    def __init__(self) -> None:
        self.errors: dict[str, list[str]] = {}

    def add(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)

    def require(self, field: str, value: Any, message: str) -> None:
        if value is None or (isinstance(value, str) and not value.strip()):
            self.add(field, message)

    def raise_if_any(self) -> None:
        if self.errors:
            raise ValidationException(self.errors)
