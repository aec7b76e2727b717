"""Document service: upload/download, expiry queries, duplicate detection."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ems_client.api import ApiClient, FilePart
from ems_client.common.constants import DocumentType
from ems_client.common.pagination import PageResponse, PaginationParams
from ems_client.documents.schemas import Document, DocumentUpdate


def find_duplicate(existing: Sequence[Document], candidate: Document) -> Optional[Document]:
    """First document in *existing* with the candidate's type and number.

    The candidate itself is skipped, whether it is the same object or
    carries the same id. Purely informational; uploads are never refused.
    """
    for doc in existing:
        if doc is candidate:
            continue
        if candidate.id is not None and doc.id == candidate.id:
            continue
        if (
            doc.document_type == candidate.document_type
            and doc.document_number == candidate.document_number
        ):
            return doc
    return None


class DocumentService:
    """Wraps ``/documents``."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def _url(self, *parts: Any) -> str:
        return self._api.url("documents", *parts)

    async def upload_document(
        self,
        employee_id: int,
        document_type: str,
        file: FilePart,
        visa_type: Optional[str] = None,
    ) -> Document:
        form = {"employeeId": str(employee_id), "documentType": document_type}
        if visa_type and document_type == DocumentType.visa.value:
            form["visaType"] = visa_type
        data = await self._api.post_multipart(self._url("upload"), data=form, files={"file": file})
        return Document.from_response(data)

    async def get_all_documents(self) -> list[Document]:
        return Document.list_from_response(await self._api.get(self._url()))

    async def get_all_documents_paginated(
        self, pagination: Optional[PaginationParams] = None,
    ) -> PageResponse[Document]:
        pagination = pagination or PaginationParams()
        data = await self._api.get(self._url("paginated"), params=pagination.as_query())
        return PageResponse[Document].from_response(data)

    async def get_document_by_id(self, document_id: int) -> Document:
        return Document.from_response(await self._api.get(self._url(document_id)))

    async def get_documents_by_employee_id(self, employee_id: int) -> list[Document]:
        data = await self._api.get(self._url("employee", employee_id))
        return Document.list_from_response(data)

    async def get_expiring_documents(self, days: int = 90) -> list[Document]:
        data = await self._api.get(self._url("expiring"), params={"days": days})
        return Document.list_from_response(data)

    async def update_document(self, document_id: int, update: DocumentUpdate) -> Document:
        data = await self._api.put(self._url(document_id), update.to_payload())
        return Document.from_response(data)

    async def delete_document(self, document_id: int) -> None:
        await self._api.delete(self._url(document_id))

    # ── Blobs ───────────────────────────────────────────────────────

    async def download_document(self, document_id: int) -> tuple[bytes, str]:
        return await self._api.get_bytes(self._url(document_id, "download"))

    async def get_document_image(self, document_id: int) -> tuple[bytes, str]:
        return await self._api.get_bytes(self._url(document_id, "image"))

    async def get_document_preview(self, document_id: int) -> tuple[bytes, str]:
        return await self._api.get_bytes(self._url(document_id, "preview"))
