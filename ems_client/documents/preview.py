"""Local copy of the document being viewed.

Each loaded blob lives in a temp file until the next load or ``release()``.
"""

from __future__ import annotations

import logging
import mimetypes
import os
import tempfile
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class DocumentPreview:
    def __init__(self, directory: Optional[str] = None) -> None:
        self._directory = directory
        self.path: Optional[Path] = None
        self.content_type: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self.path is not None

    @property
    def is_pdf(self) -> bool:
        return self.content_type == "application/pdf"

    def load(self, content: bytes, content_type: str) -> Path:
        """Write *content* to a fresh temp file, releasing the previous one."""
        self.release()
        suffix = mimetypes.guess_extension(content_type.split(";")[0].strip()) or ""
        fd, name = tempfile.mkstemp(prefix="ems-doc-", suffix=suffix, dir=self._directory)
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
        self.path = Path(name)
        self.content_type = content_type
        return self.path

    def release(self) -> None:
        if self.path is None:
            return
        try:
            self.path.unlink()
        except FileNotFoundError:
            logger.debug("Preview file %s already gone", self.path)
        self.path = None
        self.content_type = None

    def __enter__(self) -> "DocumentPreview":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()
