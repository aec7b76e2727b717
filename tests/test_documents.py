"""Documents: duplicate detection, list filters, upload and detail screens."""

from __future__ import annotations

from ems_client.common.constants import ExpiryFilter, ExpiryStatus
from ems_client.documents.preview import DocumentPreview
from ems_client.documents.service import DocumentService, find_duplicate
from ems_client.documents.views import (
    ALL_TYPES,
    DocumentDetailView,
    DocumentListView,
    DocumentUploadView,
)
from tests.factories import make_document


def _store(backend, **fields):
    doc = {
        "id": fields.pop("id"),
        "employeeId": 7,
        "documentType": "PASSPORT",
        "documentNumber": "P123",
        "uploadedDate": "2026-01-10T10:00:00",
    }
    doc.update(fields)
    backend.documents[doc["id"]] = doc
    return doc


# ── Duplicate detector ──────────────────────────────────────────────

def test_find_duplicate_in_empty_list_is_none():
    assert find_duplicate([], make_document(id=1)) is None


def test_find_duplicate_matches_type_and_number():
    existing = [
        make_document(id=1, document_type="VISA", document_number="X1"),
        make_document(id=2, document_type="PASSPORT", document_number="X1"),
    ]
    candidate = make_document(id=3, document_type="PASSPORT", document_number="X1")
    assert find_duplicate(existing, candidate).id == 2


def test_find_duplicate_skips_the_candidate_itself():
    candidate = make_document(id=3)
    assert find_duplicate([candidate], candidate) is None
    assert find_duplicate([make_document(id=3)], candidate) is None


def test_find_duplicate_without_ids_compares_other_objects():
    first = make_document(id=None)
    second = make_document(id=None)
    assert find_duplicate([first, second], second) is first


def test_find_duplicate_none_when_number_differs():
    assert find_duplicate([make_document(id=1, document_number="A")], make_document(id=2, document_number="B")) is None


# ── List ────────────────────────────────────────────────────────────

async def test_list_view_filters(api, backend, sign_in):
    sign_in(roles=["ADMIN"])
    _store(backend, id=1, documentType="PASSPORT", daysUntilExpiry=-3)
    _store(backend, id=2, documentType="VISA", daysUntilExpiry=10)
    _store(backend, id=3, documentType="PASSPORT", daysUntilExpiry=45)
    view = DocumentListView(DocumentService(api))

    await view.load()
    assert [d.id for d in view.filtered_documents] == [1, 2, 3]

    view.set_expiry_filter("expiring30")
    assert [d.id for d in view.filtered_documents] == [2]
    assert view.expiry_filter_label == "Showing Documents Expiring in 30 Days"

    view.filter_by_type("PASSPORT")
    assert view.expiry_filter is ExpiryFilter.all
    assert [d.id for d in view.filtered_documents] == [1, 3]

    view.set_expiry_filter(ExpiryFilter.expiring60)
    assert [d.id for d in view.filtered_documents] == [3]

    view.filter_by_type(ALL_TYPES)
    view.clear_expiry_filter()
    assert len(view.filtered_documents) == 3
    assert view.expiry(view.documents[0]).status is ExpiryStatus.expired


async def test_list_view_by_employee(api, backend, sign_in):
    sign_in()
    _store(backend, id=1, employeeId=7)
    _store(backend, id=2, employeeId=8)
    view = DocumentListView(DocumentService(api))
    await view.load(employee_id=8)
    assert [d.id for d in view.documents] == [2]


# ── Upload ──────────────────────────────────────────────────────────

async def test_upload_warns_about_duplicate(api, backend, settings, sign_in):
    sign_in(roles=["ADMIN"])
    _store(backend, id=1, documentNumber="P123")
    view = DocumentUploadView(DocumentService(api), settings)
    await view.load_existing(7)

    uploaded = await view.submit(7, "PASSPORT", ("P123.pdf", b"%PDF-1.7", "application/pdf"))

    assert uploaded is not None
    assert view.success == "Document uploaded successfully!"
    assert view.duplicate_document.id == 1
    assert view.warning.startswith("Warning: A similar Passport (ID Document) document already exists with number P123")
    assert view.warning.endswith("Uploaded on Jan 10, 2026.")
    assert {d.id for d in view.existing_documents} == {1, uploaded.id}


async def test_upload_without_duplicate(api, backend, settings, sign_in):
    sign_in(roles=["ADMIN"])
    _store(backend, id=1, documentNumber="P123")
    view = DocumentUploadView(DocumentService(api), settings)
    await view.load_existing(7)

    await view.submit(7, "PASSPORT", ("Q999.png", b"\x89PNG", "image/png"))

    assert view.warning is None
    assert view.duplicate_document is None


async def test_upload_sends_visa_type_only_for_visa(api, backend, settings, sign_in):
    sign_in(roles=["ADMIN"])
    service = DocumentService(api)

    visa = await service.upload_document(7, "VISA", ("V1.pdf", b"x", "application/pdf"), visa_type="SKILLED_WORKER")
    passport = await service.upload_document(7, "PASSPORT", ("P1.pdf", b"x", "application/pdf"), visa_type="SKILLED_WORKER")

    assert visa.visa_type == "SKILLED_WORKER"
    assert passport.visa_type is None


async def test_upload_validation_blocks_request(api, backend, settings, sign_in):
    sign_in(roles=["ADMIN"])
    view = DocumentUploadView(DocumentService(api), settings)
    before = len(backend.requests)

    assert await view.submit(None, None, None) is None
    assert set(view.field_errors) == {"employee_id", "document_type", "file"}

    await view.submit(7, "PASSPORT", ("scan.docx", b"x", "application/msword"))
    assert view.field_errors["file"][0].startswith("Invalid file type")

    too_big = b"x" * (settings.max_upload_bytes + 1)
    await view.submit(7, "PASSPORT", ("scan.pdf", too_big, "application/pdf"))
    assert view.field_errors["file"][0].startswith("File size must be less than 1MB")

    await view.submit(7, "VISA", ("visa.pdf", b"x", "application/pdf"))
    assert view.field_errors == {"visa_type": ["Please select a visa type before uploading."]}

    assert len(backend.requests) == before


# ── Detail / preview ────────────────────────────────────────────────

async def test_detail_loads_preview_and_releases(api, backend, sign_in, tmp_path):
    sign_in()
    _store(backend, id=5, daysUntilExpiry=0, issuingCountry=None, expiryDate="2026-10-19")
    backend.document_images[5] = (b"\x89PNG-data", "image/png")
    view = DocumentDetailView(DocumentService(api), DocumentPreview(str(tmp_path)))

    await view.load(5)

    assert view.document.id == 5
    assert view.expiry.status is ExpiryStatus.critical
    assert view.missing_fields() == ["Issuing Country"]
    assert view.is_data_incomplete()
    path = view.preview.path
    assert path.read_bytes() == b"\x89PNG-data"

    view.close()
    assert not path.exists()
    assert not view.preview.is_loaded


async def test_detail_preview_failure_keeps_document(api, backend, sign_in):
    sign_in()
    _store(backend, id=5, documentType="CONTRACT")
    view = DocumentDetailView(DocumentService(api))

    await view.load(5)

    assert view.document is not None
    assert view.preview_error is True
    assert view.error is None
    assert not view.is_data_incomplete()


async def test_detail_not_found(api, sign_in):
    sign_in()
    view = DocumentDetailView(DocumentService(api))
    await view.load(999)
    assert view.document is None
    assert view.error == "The requested resource was not found."


def test_preview_replaces_and_releases(tmp_path):
    with DocumentPreview(str(tmp_path)) as preview:
        first = preview.load(b"one", "application/pdf")
        assert preview.is_pdf
        assert first.suffix == ".pdf"
        second = preview.load(b"two", "image/png")
        assert not first.exists()
        assert second.read_bytes() == b"two"
    assert not second.exists()
    preview.release()
