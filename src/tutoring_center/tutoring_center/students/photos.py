from __future__ import annotations

import json
from typing import Mapping, Optional, Protocol


class PhotoLookup(Protocol):
    def photo_url(self, fcc_id: str) -> Optional[str]:
        raise NotImplementedError


class StaticPhotoLookup(PhotoLookup):
    """Photo URLs from a configured mapping (fcc_id -> URL)."""

    def __init__(self, mapping: Optional[Mapping[str, str]] = None):
        self._mapping = dict(mapping or {})

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "StaticPhotoLookup":
        if not raw:
            return cls()
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("STUDENT_PHOTOS must be a JSON object")
        return cls({str(k): str(v) for k, v in data.items()})

    def photo_url(self, fcc_id: str) -> Optional[str]:
        return self._mapping.get(fcc_id)
