"""Document screens: list, upload, detail."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import PurePath
from typing import Optional

from ems_client.api import FilePart
from ems_client.common.constants import (
    DISPLAY_DATE_FORMAT,
    DOCUMENT_TYPE_LABELS,
    UNVERIFIED_DOCUMENT_TYPES,
    DocumentType,
    ExpiryFilter,
)
from ems_client.common.exceptions import ApiError
from ems_client.common.views import FormErrors, ViewModel
from ems_client.config import Settings
from ems_client.documents.expiry import ExpiryInfo, classify, expiry_filter_label, filter_by_expiry
from ems_client.documents.preview import DocumentPreview
from ems_client.documents.schemas import Document
from ems_client.documents.service import DocumentService, find_duplicate

logger = logging.getLogger(__name__)

ALL_TYPES = "ALL"


def document_type_label(document_type: str) -> str:
    return DOCUMENT_TYPE_LABELS.get(document_type, document_type)


def display_date(value: Optional[str]) -> str:
    """``"2026-01-10T10:00:00"`` → ``"Jan 10, 2026"``; unparseable values pass through."""
    if not value:
        return "an unknown date"
    try:
        return datetime.fromisoformat(value).strftime(DISPLAY_DATE_FORMAT)
    except ValueError:
        return value


# ── List ────────────────────────────────────────────────────────────

class DocumentListView(ViewModel):
    def __init__(self, service: DocumentService) -> None:
        super().__init__()
        self._service = service
        self.documents: list[Document] = []
        self.filter_type: str = ALL_TYPES
        self.expiry_filter: ExpiryFilter = ExpiryFilter.all

    async def load(self, employee_id: Optional[int] = None) -> None:
        if employee_id is None:
            action = self._service.get_all_documents()
        else:
            action = self._service.get_documents_by_employee_id(employee_id)
        documents = await self._run(action, context="load documents")
        if documents is not None:
            self.documents = documents

    @property
    def filtered_documents(self) -> list[Document]:
        filtered = self.documents
        if self.filter_type != ALL_TYPES:
            filtered = [d for d in filtered if d.document_type == self.filter_type]
        return filter_by_expiry(filtered, self.expiry_filter)

    def filter_by_type(self, document_type: str) -> None:
        """Changing the type filter clears the expiry filter."""
        self.filter_type = document_type
        self.expiry_filter = ExpiryFilter.all

    def set_expiry_filter(self, expiry_filter: ExpiryFilter | str) -> None:
        self.expiry_filter = ExpiryFilter(expiry_filter)

    def clear_expiry_filter(self) -> None:
        self.expiry_filter = ExpiryFilter.all

    @property
    def expiry_filter_label(self) -> str:
        return expiry_filter_label(self.expiry_filter)

    @staticmethod
    def expiry(document: Document) -> ExpiryInfo:
        return classify(document.days_until_expiry)


# ── Upload ──────────────────────────────────────────────────────────

class DocumentUploadView(ViewModel):
    """Validates locally, uploads, then warns about a likely duplicate."""

    def __init__(self, service: DocumentService, settings: Settings) -> None:
        super().__init__()
        self._service = service
        self._settings = settings
        self.existing_documents: list[Document] = []
        self.uploaded_document: Optional[Document] = None
        self.duplicate_document: Optional[Document] = None

    async def load_existing(self, employee_id: int) -> None:
        documents = await self._run(
            self._service.get_documents_by_employee_id(employee_id),
            context="load existing documents",
        )
        if documents is not None:
            self.existing_documents = documents

    def validate(
        self,
        employee_id: Optional[int],
        document_type: Optional[str],
        file: Optional[FilePart],
        visa_type: Optional[str] = None,
    ) -> None:
        form = FormErrors()
        form.require("employee_id", employee_id, "Please select an employee.")
        form.require("document_type", document_type, "Please select a document type.")
        if file is None:
            form.add("file", "Please select a file to upload.")
        else:
            file_name, content, _ = file
            extension = PurePath(file_name).suffix.lower()
            allowed = self._settings.ALLOWED_DOCUMENT_TYPES
            if extension not in allowed:
                form.add("file", f"Invalid file type. Allowed types: {', '.join(allowed)}")
            if len(content) > self._settings.max_upload_bytes:
                size_mb = len(content) / (1024 * 1024)
                form.add(
                    "file",
                    f"File size must be less than {self._settings.MAX_UPLOAD_SIZE_MB}MB. "
                    f"Current size: {size_mb:.2f} MB",
                )
        if document_type == DocumentType.visa.value and not visa_type:
            form.add("visa_type", "Please select a visa type before uploading.")
        form.raise_if_any()

    async def _upload(self, employee_id, document_type, file, visa_type) -> Document:
        self.validate(employee_id, document_type, file, visa_type)
        return await self._service.upload_document(employee_id, document_type, file, visa_type)

    async def submit(
        self,
        employee_id: Optional[int],
        document_type: Optional[str],
        file: Optional[FilePart],
        visa_type: Optional[str] = None,
    ) -> Optional[Document]:
        self.reset_messages()
        self.duplicate_document = None
        uploaded = await self._run(
            self._upload(employee_id, document_type, file, visa_type),
            context="document upload",
        )
        if uploaded is None:
            return None

        self.uploaded_document = uploaded
        self.success = "Document uploaded successfully!"
        duplicate = find_duplicate(self.existing_documents, uploaded)
        if duplicate is not None:
            self.duplicate_document = duplicate
            self.warning = (
                f"Warning: A similar {document_type_label(uploaded.document_type)} document "
                f"already exists with number {duplicate.document_number}. "
                f"Uploaded on {display_date(duplicate.uploaded_date)}."
            )
            logger.info("Upload %s duplicates document %s", uploaded.id, duplicate.id)
        await self.load_existing(uploaded.employee_id)
        return uploaded


# ── Detail ──────────────────────────────────────────────────────────

class DocumentDetailView(ViewModel):
    """One document plus its local preview; ``close()`` frees the preview."""

    def __init__(self, service: DocumentService, preview: Optional[DocumentPreview] = None) -> None:
        super().__init__()
        self._service = service
        self.preview = preview or DocumentPreview()
        self.document: Optional[Document] = None
        self.preview_error = False

    async def load(self, document_id: int) -> None:
        document = await self._run(
            self._service.get_document_by_id(document_id), context="load document",
        )
        if document is None:
            return
        self.document = document
        await self.load_preview(document_id)

    async def load_preview(self, document_id: int) -> None:
        self.preview_error = False
        try:
            content, content_type = await self._service.get_document_image(document_id)
        except ApiError as exc:
            logger.warning("Preview of document %s unavailable: %s", document_id, exc.detail)
            self.preview_error = True
            self.preview.release()
            return
        self.preview.load(content, content_type)

    @property
    def expiry(self) -> ExpiryInfo:
        return classify(self.document.days_until_expiry if self.document else None)

    def missing_fields(self) -> list[str]:
        if self.document is None or self.document.document_type in UNVERIFIED_DOCUMENT_TYPES:
            return []
        missing = []
        if not self.document.document_number:
            missing.append("Document Number")
        if not self.document.issuing_country:
            missing.append("Issuing Country")
        if not self.document.expiry_date:
            missing.append("Expiry Date")
        return missing

    def is_data_incomplete(self) -> bool:
        return bool(self.missing_fields())

    def close(self) -> None:
        self.preview.release()
