from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceLogEntry, PresencePatch, PresenceState


class PresenceRepository(Protocol):
    def get_state(self, fcc_id: str) -> Optional[PresenceState]:
        raise NotImplementedError

    def save_signal(self, fcc_id: str, patch: PresencePatch, *, log_date: date, insert: bool) -> None:
        """Write the state row (insert or patch) and upsert the log row for log_date atomically."""

        raise NotImplementedError

    def list_log(self, fcc_id: str) -> Sequence[AttendanceLogEntry]:
        raise NotImplementedError
