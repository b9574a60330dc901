from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class StoredFile:
    file_id: int
    filename: str
    filetype: Optional[str]
    description: Optional[str]
    uploaded_at: datetime


@dataclass(frozen=True)
class FileContent:
    meta: StoredFile
    data: bytes


@dataclass(frozen=True)
class FileQuery:
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    search: Optional[str] = None
