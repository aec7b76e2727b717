"""Enums and constants: values match the backend's wire strings."""

from __future__ import annotations

import enum


# ── Auth / Roles ────────────────────────────────────────────────────

class UserRole(str, enum.Enum):
    root = "ROOT"
    super_admin = "SUPER_ADMIN"
    admin = "ADMIN"
    user = "USER"


ADMIN_ROLES: frozenset[str] = frozenset({UserRole.admin.value, UserRole.super_admin.value})


# ── Leave ───────────────────────────────────────────────────────────

class LeaveStatus(str, enum.Enum):
    pending = "PENDING"
    approved = "APPROVED"
    rejected = "REJECTED"


# ── Documents ───────────────────────────────────────────────────────

class DocumentType(str, enum.Enum):
    passport = "PASSPORT"
    visa = "VISA"
    contract = "CONTRACT"
    resume = "RESUME"
    share_code = "SHARE_CODE"
    proof_of_address = "PROOF_OF_ADDRESS"
    registration_form = "REGISTRATION_FORM"
    certificate = "CERTIFICATE"
    professional_certificate = "PROFESSIONAL_CERTIFICATE"
    term_letter = "TERM_LETTER"
    national_insurance = "NATIONAL_INSURANCE"
    bank_statement = "BANK_STATEMENT"
    others = "OTHERS"


DOCUMENT_TYPE_LABELS: dict[str, str] = {
    DocumentType.passport.value: "Passport (ID Document)",
    DocumentType.visa.value: "Visa / Work Permission",
    DocumentType.contract.value: "Employment Contract",
    DocumentType.resume.value: "CV / Resume",
    DocumentType.share_code.value: "Share Code Proof",
    DocumentType.proof_of_address.value: "Proof of Address",
    DocumentType.registration_form.value: "Registration Form",
    DocumentType.certificate.value: "Certificate",
    DocumentType.professional_certificate.value: "Professional Certificate",
    DocumentType.term_letter.value: "Term Letter",
    DocumentType.national_insurance.value: "National Insurance Document",
    DocumentType.bank_statement.value: "Bank Statement",
    DocumentType.others.value: "Others",
}


# Document types that carry no number / country / expiry to verify
UNVERIFIED_DOCUMENT_TYPES: frozenset[str] = frozenset(
    {DocumentType.contract.value, DocumentType.resume.value},
)


class ExpiryStatus(str, enum.Enum):
    unknown = "unknown"
    expired = "expired"
    critical = "critical"
    warning = "warning"
    valid = "valid"


class ExpiryFilter(str, enum.Enum):
    all = "all"
    expired = "expired"
    expiring30 = "expiring30"
    expiring60 = "expiring60"


# ── Attendance ──────────────────────────────────────────────────────

class WorkLocation(str, enum.Enum):
    office = "OFFICE"
    home = "HOME"
    client_site = "CLIENT_SITE"
    field_work = "FIELD_WORK"
    hybrid = "HYBRID"


class AttendanceState(str, enum.Enum):
    checked_in = "CHECKED_IN"
    checked_out = "CHECKED_OUT"
    on_leave = "ON_LEAVE"


# ── Notifications ───────────────────────────────────────────────────

class NotificationType(str, enum.Enum):
    leave_request = "LEAVE_REQUEST"
    leave_approved = "LEAVE_APPROVED"
    leave_rejected = "LEAVE_REJECTED"
    document_expired = "DOCUMENT_EXPIRED"
    document_near_expiry = "DOCUMENT_NEAR_EXPIRY"


# ── Admin ───────────────────────────────────────────────────────────

class SmtpProvider(str, enum.Enum):
    gmail = "GMAIL"
    outlook = "OUTLOOK"
    custom = "CUSTOM"


class AlertPriority(str, enum.Enum):
    expired = "EXPIRED"
    critical = "CRITICAL"
    warning = "WARNING"
    attention = "ATTENTION"


class AlertChannel(str, enum.Enum):
    email = "EMAIL"
    notification = "NOTIFICATION"
    both = "BOTH"


# ── Misc constants ──────────────────────────────────────────────────

TOKEN_KEY = "auth-token"
USER_KEY = "auth-user"
DATE_FORMAT = "%Y-%m-%d"
DISPLAY_DATE_FORMAT = "%b %d, %Y"
CRITICAL_DAYS = 30
WARNING_DAYS = 90
