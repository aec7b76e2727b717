"""Common module: shared utilities for the EMS client."""

from ems_client.common.constants import (
    DATE_FORMAT,
    DISPLAY_DATE_FORMAT,
    DocumentType,
    ExpiryFilter,
    ExpiryStatus,
    LeaveStatus,
    NotificationType,
    UserRole,
    WorkLocation,
)
from ems_client.common.exceptions import (
    ApiError,
    AppException,
    ConnectivityError,
    ErrorKind,
    ForbiddenError,
    NotFoundError,
    ResponseDecodeError,
    ServerError,
    StaleSessionError,
    UnauthorizedError,
    ValidationException,
    user_message,
)
from ems_client.common.models import ApiModel
from ems_client.common.pagination import PageResponse, PaginationParams, page_numbers
from ems_client.common.views import FormErrors, ViewModel

__all__ = [
    # Constants / Enums
    "DocumentType",
    "ExpiryFilter",
    "ExpiryStatus",
    "LeaveStatus",
    "NotificationType",
    "UserRole",
    "WorkLocation",
    "DATE_FORMAT",
    "DISPLAY_DATE_FORMAT",
    # Exceptions
    "ApiError",
    "AppException",
    "ConnectivityError",
    "ErrorKind",
    "ForbiddenError",
    "NotFoundError",
    "ResponseDecodeError",
    "ServerError",
    "StaleSessionError",
    "UnauthorizedError",
    "ValidationException",
    "user_message",
    # Models
    "ApiModel",
    # Pagination
    "PageResponse",
    "PaginationParams",
    "page_numbers",
    # Views
    "FormErrors",
    "ViewModel",
]
