from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.tutoring_center.tutoring_center.core.enums import SignalOutcome
from src.tutoring_center.tutoring_center.core.exceptions import NotFoundError, StaleUpdateError, ValidationError
from src.tutoring_center.tutoring_center.presence.model import AttendanceLogEntry, PresencePatch, PresenceState
from src.tutoring_center.tutoring_center.presence.service import PresenceService


class InMemoryPresence:
    def __init__(self):
        self.states: dict[str, PresenceState] = {}
        self.logs: dict[tuple[str, date], AttendanceLogEntry] = {}
        self.writes = 0

    def get_state(self, fcc_id: str) -> Optional[PresenceState]:
        return self.states.get(fcc_id)

    def save_signal(self, fcc_id: str, patch: PresencePatch, *, log_date: date, insert: bool) -> None:
        self.writes += 1
        current = self.states.get(fcc_id)
        if insert or current is None:
            current = PresenceState(fcc_id=fcc_id, ctc_time=None, ctg_time=None, task_completed=False)
        self.states[fcc_id] = replace(
            current,
            ctc_time=patch.ctc_time or current.ctc_time,
            ctg_time=patch.ctg_time or current.ctg_time,
            task_completed=patch.task_completed,
        )

        key = (fcc_id, log_date)
        entry = self.logs.get(key) or AttendanceLogEntry(
            fcc_id=fcc_id, log_date=log_date, ctc_time=None, ctg_time=None, task_completed=False
        )
        self.logs[key] = replace(
            entry,
            ctc_time=patch.ctc_time or entry.ctc_time,
            ctg_time=patch.ctg_time or entry.ctg_time,
            task_completed=patch.task_completed,
        )

    def list_log(self, fcc_id: str):
        return sorted((e for e in self.logs.values() if e.fcc_id == fcc_id), key=lambda e: e.log_date, reverse=True)


def test_first_arrival_creates_state_and_todays_log(fixed_now):
    repo = InMemoryPresence()
    svc = PresenceService(repo)

    result = svc.record_signal("1234567890", ctc=True, ctg=False, task_completed=False, now=fixed_now)

    assert result.outcome == SignalOutcome.INSERTED
    state = repo.states["1234567890"]
    assert state.ctc_time == fixed_now
    assert state.ctg_time is None

    entry = repo.logs[("1234567890", fixed_now.date())]
    assert entry.ctc_time == fixed_now
    assert entry.ctg_time is None


def test_update_within_window_changes_only_signaled_fields(fixed_now):
    repo = InMemoryPresence()
    svc = PresenceService(repo)
    svc.record_signal("4949200024", ctc=True, ctg=False, task_completed=True, now=fixed_now)

    later = fixed_now + timedelta(hours=6)
    result = svc.record_signal("4949200024", ctc=False, ctg=True, task_completed=False, now=later)

    assert result.outcome == SignalOutcome.UPDATED
    state = repo.states["4949200024"]
    assert state.ctc_time == fixed_now
    assert state.ctg_time == later
    assert state.task_completed is False


def test_stale_update_is_rejected_without_writes(fixed_now):
    repo = InMemoryPresence()
    svc = PresenceService(repo)
    svc.record_signal("4949200024", ctc=True, ctg=False, task_completed=False, now=fixed_now)
    before = repo.states["4949200024"]
    writes = repo.writes

    with pytest.raises(StaleUpdateError) as exc:
        svc.record_signal(
            "4949200024", ctc=True, ctg=True, task_completed=True, now=fixed_now + timedelta(hours=31)
        )

    assert "30 hours" in str(exc.value)
    assert repo.states["4949200024"] == before
    assert repo.writes == writes
    assert len(repo.logs) == 1


def test_force_update_overrides_staleness(fixed_now):
    repo = InMemoryPresence()
    svc = PresenceService(repo)
    svc.record_signal("4949200024", ctc=True, ctg=False, task_completed=False, now=fixed_now)

    later = fixed_now + timedelta(hours=48)
    result = svc.record_signal("4949200024", ctc=True, ctg=False, task_completed=False, force_update=True, now=later)

    assert result.outcome == SignalOutcome.UPDATED
    assert repo.states["4949200024"].ctc_time == later


def test_staleness_uses_latest_of_arrival_and_departure(fixed_now):
    repo = InMemoryPresence()
    repo.states["4949200024"] = PresenceState(
        fcc_id="4949200024",
        ctc_time=fixed_now - timedelta(hours=40),
        ctg_time=fixed_now - timedelta(hours=10),
        task_completed=False,
    )
    svc = PresenceService(repo)

    result = svc.record_signal("4949200024", ctc=True, ctg=False, task_completed=False, now=fixed_now)

    assert result.outcome == SignalOutcome.UPDATED


def test_same_day_signals_merge_into_one_log_entry(fixed_now):
    repo = InMemoryPresence()
    svc = PresenceService(repo)

    svc.record_signal("4949200024", ctc=True, ctg=False, task_completed=False, now=fixed_now)
    departure = fixed_now + timedelta(hours=3)
    svc.record_signal("4949200024", ctc=False, ctg=True, task_completed=True, now=departure)

    entries = repo.list_log("4949200024")
    assert len(entries) == 1
    assert entries[0].ctc_time == fixed_now
    assert entries[0].ctg_time == departure
    assert entries[0].task_completed is True


def test_missing_fcc_id_rejected_before_io(fixed_now):
    repo = InMemoryPresence()
    svc = PresenceService(repo)

    with pytest.raises(ValidationError):
        svc.record_signal("  ", ctc=True, ctg=False, task_completed=False, now=fixed_now)
    assert repo.writes == 0


def test_get_presence_unknown_student():
    with pytest.raises(NotFoundError):
        PresenceService(InMemoryPresence()).get_presence("9999200024")


def test_presence_route_reports_stale_update_as_400(client_for, fixed_now):
    repo = InMemoryPresence()
    repo.states["4949200024"] = PresenceState(
        fcc_id="4949200024",
        ctc_time=datetime.now() - timedelta(hours=31),
        ctg_time=None,
        task_completed=False,
    )
    client = client_for(presence_service=PresenceService(repo))

    resp = client.post("/api/update-student", json={"fcc_id": "4949200024", "ctc": True})
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "CTC is more than 30 hours old. Update not allowed!"}

    resp = client.post("/api/update-student", json={"fcc_id": "4949200024", "ctc": True, "forceUpdate": True})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["result"] == "updated"
    assert body["ctcUpdated"] is True


def test_presence_route_requires_fcc_id(client_for):
    client = client_for(presence_service=PresenceService(InMemoryPresence()))

    resp = client.post("/api/update-student", json={"ctc": True})

    assert resp.status_code == 400
    assert "FCC_ID" in resp.get_json()["error"]
