"""Document Pydantic schemas."""

from __future__ import annotations

from typing import Optional

from ems_client.common.models import ApiModel


class Document(ApiModel):
    """Employee document with OCR-extracted fields.

    ``days_until_expiry`` is computed by the backend; the client only
    classifies it.
    """

    id: Optional[int] = None
    employee_id: int
    employee_name: Optional[str] = None
    document_type: str
    document_number: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    issue_date: Optional[str] = None
    expiry_date: Optional[str] = None
    issuing_country: Optional[str] = None
    full_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    nationality: Optional[str] = None

    # VISA
    visa_type: Optional[str] = None
    company_name: Optional[str] = None
    date_of_check: Optional[str] = None
    reference_number: Optional[str] = None

    # CONTRACT
    contract_date: Optional[str] = None
    place_of_work: Optional[str] = None
    contract_between: Optional[str] = None
    job_title_contract: Optional[str] = None

    uploaded_date: Optional[str] = None
    days_until_expiry: Optional[int] = None
    alert_sent_count: Optional[int] = None
    last_alert_sent: Optional[str] = None
    last_viewed_at: Optional[str] = None
    last_viewed_by: Optional[str] = None

    # None: OCR not attempted
    ocr_failed: Optional[bool] = None
    ocr_failure_message: Optional[str] = None


class DocumentUpdate(ApiModel):
    """Manual corrections to OCR-extracted fields."""

    document_number: Optional[str] = None
    issuing_country: Optional[str] = None
    issue_date: Optional[str] = None
    expiry_date: Optional[str] = None
    full_name: Optional[str] = None
    nationality: Optional[str] = None
