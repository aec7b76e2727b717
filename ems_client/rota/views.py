"""Rota screens: paged list with the schedule grid, and the upload flow."""

from __future__ import annotations

import re
from pathlib import PurePath
from typing import Optional

from ems_client.api import FilePart
from ems_client.common.exceptions import ApiError, AppException, ErrorKind, user_message
from ems_client.common.pagination import PaginationParams, page_numbers
from ems_client.common.views import FormErrors, ViewModel
from ems_client.config import Settings
from ems_client.navigation.routes import Route
from ems_client.rota.schemas import EmployeeRotaRow, Rota, RotaUploadPreview
from ems_client.rota.service import RotaService

_OFF_DUTY_RE = re.compile(r"OFF|Leave|Holiday", re.IGNORECASE)

_SCHEDULE_ERRORS = {
    ErrorKind.forbidden: "You do not have permission to view schedules",
    ErrorKind.not_found: "ROTA not found",
    ErrorKind.connectivity: "Network error. Please check your connection.",
}


def duty_class(duty: Optional[str]) -> str:
    """CSS class of a grid cell: off, setup or regular work."""
    if not duty or _OFF_DUTY_RE.search(duty):
        return "duty-off"
    if "set" in duty.lower():
        return "duty-setup"
    return "duty-work"


class RotaListView(ViewModel):
    """Rotas one page at a time; the first rota is opened when nothing is selected."""

    def __init__(self, service: RotaService, page_size: int = 10) -> None:
        super().__init__()
        self._service = service
        self.rotas: list[Rota] = []
        self.current_page = 0
        self.page_size = page_size
        self.total_elements = 0
        self.total_pages = 0

        self.selected: Optional[Rota] = None
        self.rows: list[EmployeeRotaRow] = []
        self.dates: list[str] = []

    async def load(self) -> None:
        page = await self._run(
            self._service.get_all_rotas_paginated(
                PaginationParams(page=self.current_page, size=self.page_size),
            ),
            context="load rotas",
            failure="Failed to load ROTAs",
        )
        if page is None:
            return
        self.rotas = list(page.content)
        self.total_elements = page.total_elements
        self.total_pages = page.total_pages
        if self.rotas and self.selected is None:
            await self.view(self.rotas[0])

    async def change_page(self, page: int) -> None:
        self.current_page = page
        await self.load()

    async def change_page_size(self, size: int) -> None:
        self.page_size = size
        self.current_page = 0
        await self.load()

    @property
    def page_numbers(self) -> list[int]:
        return page_numbers(self.current_page, self.total_pages)

    async def view(self, rota: Rota) -> None:
        self.selected = rota
        self.rows, self.dates = [], []
        grouped = await self._run(
            self._service.get_grouped_schedules(rota.id), context=f"load schedules of rota {rota.id}",
        )
        if grouped is not None:
            self.rows, self.dates = grouped

    def _message_for(self, exc: AppException) -> str:
        # only schedule loading falls through to here
        if isinstance(exc, ApiError):
            fixed = _SCHEDULE_ERRORS.get(exc.kind)
            if fixed is not None:
                return fixed
            return exc.message or "Failed to load schedules"
        return user_message(exc)

    async def delete(self, rota: Rota) -> bool:
        self.reset_messages()

        async def _delete() -> bool:
            await self._service.delete_rota(rota.id)
            return True

        if not await self._run(_delete(), context="delete rota", fallback="Failed to delete ROTA"):
            return False
        self.success = "ROTA deleted successfully"
        if self.selected is not None and self.selected.id == rota.id:
            self.selected = None
            self.rows, self.dates = [], []
        await self.load()
        return True

    @staticmethod
    def delete_prompt(rota: Rota) -> str:
        return (
            f"Are you sure you want to delete the ROTA for {rota.hotel_name} - {rota.department}?\n\n"
            f"This will delete all {rota.total_employees} employee schedules. "
            "This action cannot be undone."
        )


class RotaUploadView(ViewModel):
    """Excel upload (parsed exactly) or a photo of the rota (OCR, needs review)."""

    def __init__(self, service: RotaService, settings: Settings) -> None:
        super().__init__()
        self._service = service
        self._settings = settings
        self.preview: Optional[RotaUploadPreview] = None
        self.image_result: Optional[Rota] = None
        self.needs_review = False

    def _check_size(self, errors: FormErrors, content: bytes) -> None:
        if len(content) > self._settings.max_rota_upload_bytes:
            errors.add("file", f"File size must be less than {self._settings.MAX_ROTA_UPLOAD_SIZE_MB}MB")

    def validate_excel(self, file: Optional[FilePart]) -> FilePart:
        errors = FormErrors()
        if file is None:
            errors.add("file", "Please select an Excel file to upload")
        else:
            name, content, _ = file
            if PurePath(name).suffix.lower() != ".xlsx":
                errors.add("file", "Please select an Excel file (.xlsx)")
            self._check_size(errors, content)
        errors.raise_if_any()
        return file

    def validate_image(self, file: Optional[FilePart]) -> FilePart:
        errors = FormErrors()
        if file is None:
            errors.add("file", "Please select an image to upload")
        else:
            _, content, content_type = file
            if not content_type.startswith("image/"):
                errors.add("file", "Please select an image file (PNG, JPG, JPEG)")
            self._check_size(errors, content)
        errors.raise_if_any()
        return file

    def clear(self) -> None:
        self.reset_messages()
        self.preview = None
        self.image_result = None
        self.needs_review = False

    async def _upload_excel(self, file: Optional[FilePart]) -> RotaUploadPreview:
        return await self._service.upload_excel_rota(self.validate_excel(file))

    async def upload_excel(self, file: Optional[FilePart]) -> Optional[RotaUploadPreview]:
        self.clear()
        preview = await self._run(
            self._upload_excel(file),
            context="upload excel rota",
            fallback="Failed to upload Excel ROTA. Please try again.",
        )
        if preview is not None:
            self.preview = preview
            self.success = (
                f"Excel ROTA uploaded! Found {preview.total_employees} employees with "
                f"{preview.total_schedules} schedules. Please review and confirm."
            )
        return preview

    async def discard_excel(self) -> bool:
        """Delete the rota created by the last Excel upload."""
        if self.preview is None:
            return False
        self.reset_messages()
        rota_id = self.preview.rota_id

        async def _delete() -> bool:
            await self._service.delete_rota(rota_id)
            return True

        if not await self._run(_delete(), context="discard excel rota", fallback="Failed to delete ROTA"):
            return False
        self.clear()
        self.success = "ROTA deleted successfully. You can upload again."
        return True

    async def _upload_image(self, file: Optional[FilePart]) -> Rota:
        return await self._service.upload_rota(self.validate_image(file))

    async def upload_image(self, file: Optional[FilePart]) -> Optional[Rota]:
        self.clear()
        result = await self._run(
            self._upload_image(file),
            context="upload rota image",
            fallback="Failed to process image. OCR quality may be poor.",
        )
        if self.field_errors:
            return None
        # a failed OCR run can still be fixed by hand
        self.needs_review = True
        if result is not None:
            self.image_result = result
            self.warning = (
                "Image processed! Please review - OCR may have errors. "
                "You can manually correct or accept as-is."
            )
        return result

    def accept(self) -> Route:
        self.success = "ROTA accepted and saved successfully!"
        return Route.rota
