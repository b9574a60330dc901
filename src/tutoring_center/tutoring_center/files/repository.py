from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import FileContent, FileQuery, StoredFile


class FileRepository(Protocol):
    def create(self, *, filename: str, filetype: Optional[str], data: bytes, description: Optional[str]) -> StoredFile:
        raise NotImplementedError

    def search(self, query: FileQuery) -> Sequence[StoredFile]:
        raise NotImplementedError

    def get_content(self, file_id: int) -> Optional[FileContent]:
        raise NotImplementedError
