"""Document expiry classification and filtering.

One rule everywhere: a missing value is ``unknown``; ``0`` days left is
``critical`` (it still expires today, it has not expired yet).

    days < 0          expired
    0 <= days <= 30   critical
    31 <= days <= 90  warning
    days > 90         valid
"""

from __future__ import annotations

from typing import Iterable, NamedTuple, Optional, Protocol, TypeVar

from ems_client.common.constants import CRITICAL_DAYS, WARNING_DAYS, ExpiryFilter, ExpiryStatus


class ExpiryInfo(NamedTuple):
    status: ExpiryStatus
    text: str


class _HasExpiry(Protocol):
    days_until_expiry: Optional[int]


D = TypeVar("D", bound=_HasExpiry)


def classify(days: Optional[int]) -> ExpiryInfo:
    """Badge status and label for *days* until expiry."""
    if days is None:
        return ExpiryInfo(ExpiryStatus.unknown, "Unknown")
    if days < 0:
        return ExpiryInfo(ExpiryStatus.expired, "EXPIRED")
    if days <= CRITICAL_DAYS:
        return ExpiryInfo(ExpiryStatus.critical, f"Critical - {days} days left")
    if days <= WARNING_DAYS:
        return ExpiryInfo(ExpiryStatus.warning, f"Expires soon - {days} days")
    return ExpiryInfo(ExpiryStatus.valid, f"Valid - {days} days remaining")


def matches_expiry_filter(days: Optional[int], expiry_filter: ExpiryFilter) -> bool:
    if expiry_filter is ExpiryFilter.all:
        return True
    if days is None:
        return False
    if expiry_filter is ExpiryFilter.expired:
        return days < 0
    if expiry_filter is ExpiryFilter.expiring30:
        return 0 <= days <= 30
    if expiry_filter is ExpiryFilter.expiring60:
        return 30 < days <= 60
    return True


def filter_by_expiry(documents: Iterable[D], expiry_filter: ExpiryFilter | str) -> list[D]:
    """Documents matching *expiry_filter*, order preserved."""
    expiry_filter = ExpiryFilter(expiry_filter)
    return [d for d in documents if matches_expiry_filter(d.days_until_expiry, expiry_filter)]


_FILTER_LABELS: dict[ExpiryFilter, str] = {
    ExpiryFilter.expired: "Showing Expired Documents",
    ExpiryFilter.expiring30: "Showing Documents Expiring in 30 Days",
    ExpiryFilter.expiring60: "Showing Documents Expiring in 31-60 Days",
}


def expiry_filter_label(expiry_filter: ExpiryFilter) -> str:
    return _FILTER_LABELS.get(expiry_filter, "")
