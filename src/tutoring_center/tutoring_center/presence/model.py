from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import SignalOutcome


@dataclass(frozen=True)
class PresenceState:
    """Current CTC/CTG state of a student (one row per student)."""

    fcc_id: str
    ctc_time: Optional[datetime]
    ctg_time: Optional[datetime]
    task_completed: bool

    @property
    def last_signal_at(self) -> Optional[datetime]:
        stamps = [t for t in (self.ctc_time, self.ctg_time) if t is not None]
        return max(stamps) if stamps else None


@dataclass(frozen=True)
class AttendanceLogEntry:
    """Daily log row, unique per (fcc_id, log_date)."""

    fcc_id: str
    log_date: date
    ctc_time: Optional[datetime]
    ctg_time: Optional[datetime]
    task_completed: bool


@dataclass(frozen=True)
class PresencePatch:
    """Timestamps to write; None keeps the stored value. task_completed always overwrites."""

    ctc_time: Optional[datetime]
    ctg_time: Optional[datetime]
    task_completed: bool

    def assignments(self) -> list[tuple[str, object]]:
        out: list[tuple[str, object]] = []
        if self.ctc_time is not None:
            out.append(("ctc_time", self.ctc_time))
        if self.ctg_time is not None:
            out.append(("ctg_time", self.ctg_time))
        out.append(("task_completed", int(self.task_completed)))
        return out


@dataclass(frozen=True)
class SignalResult:
    outcome: SignalOutcome
    fcc_id: str
    log_date: date


@dataclass(frozen=True)
class PresenceView:
    state: PresenceState
    logs: Sequence[AttendanceLogEntry]
