from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import parse_int, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import FileContent, FileQuery, StoredFile
from .repository import FileRepository

logger = logging.getLogger(__name__)


class FileService:
    def __init__(self, files: FileRepository):
        self._files = files

    def upload(self, *, filename: str, filetype: Optional[str], data: bytes, description: Optional[str]) -> StoredFile:
        filename = require_non_empty(filename, "filename")
        if not data:
            raise ValidationError("No file uploaded")
        stored = self._files.create(
            filename=filename,
            filetype=filetype or "application/octet-stream",
            data=data,
            description=(description or "").strip() or None,
        )
        logger.info("Stored file #%s (%s, %d bytes)", stored.file_id, stored.filename, len(data))
        return stored

    def search(self, query: FileQuery) -> list[StoredFile]:
        return list(self._files.search(query))

    def download(self, file_id) -> FileContent:
        content = self._files.get_content(parse_int(file_id, "id"))
        if not content:
            raise NotFoundError("File not found")
        return content
