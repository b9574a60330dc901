from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from src.tutoring_center.tutoring_center.core.exceptions import (
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from src.tutoring_center.tutoring_center.leaderboard.model import (
    CompletionResult,
    LeaderboardLogEntry,
    LeaderboardRecord,
    ScoringTaskLog,
    TaskProgress,
)
from src.tutoring_center.tutoring_center.leaderboard.service import LeaderboardService
from src.tutoring_center.tutoring_center.students.model import Student


def _record(fcc_id: str, total: int, fcc_class: str = "5", record_id: int = 1) -> LeaderboardRecord:
    return LeaderboardRecord(
        record_id=record_id,
        student_fcc_id=fcc_id,
        name=f"Student {fcc_id}",
        fcc_class=fcc_class,
        total_score=total,
        last_updated=None,
    )


def _student(fcc_id: str, fcc_class: Optional[str] = "5") -> Student:
    return Student(
        student_id=1,
        fcc_id=fcc_id,
        name="Asha",
        father=None,
        mother=None,
        schooling_class=None,
        mobile_number=None,
        address=None,
        paid=False,
        tutionfee_paid=None,
        fcc_class=fcc_class,
        skills=None,
        admission_date=None,
    )


class InMemoryLeaderboard:
    def __init__(self, records: list[LeaderboardRecord]):
        self.records = {r.student_fcc_id: r for r in records}
        self.task_logs: list[ScoringTaskLog] = []
        self.leaderboard_logs: list[LeaderboardLogEntry] = []
        self.tasks: list[TaskProgress] = []

    def record_completion(self, *, fcc_id, task_id, score_earned, completed_at) -> CompletionResult:
        record = self.records.get(fcc_id)
        if record is None:
            raise PreconditionError(f"Leaderboard record not found for student {fcc_id}")
        task_log = ScoringTaskLog(
            log_id=len(self.task_logs) + 1,
            student_fcc_id=fcc_id,
            task_id=task_id,
            score_earned=score_earned,
            status="COMPLETED",
            completed_at=completed_at,
        )
        self.task_logs.append(task_log)
        record = replace(record, total_score=record.total_score + score_earned, last_updated=completed_at)
        self.records[fcc_id] = record
        entry = LeaderboardLogEntry(
            log_id=len(self.leaderboard_logs) + 1,
            leaderboard_id=record.record_id,
            action="UPDATE",
            description="Score updated by task completion",
        )
        self.leaderboard_logs.append(entry)
        return CompletionResult(task_log=task_log, leaderboard=record, leaderboard_log=entry)

    def ranked(self, *, fcc_class, limit):
        rows = [r for r in self.records.values() if fcc_class is None or r.fcc_class == fcc_class]
        rows.sort(key=lambda r: r.total_score, reverse=True)
        return rows[:limit]

    def get_record(self, fcc_id):
        return self.records.get(fcc_id)

    def tasks_for_student(self, *, fcc_id, fcc_class):
        return list(self.tasks)

    def list_classes(self):
        return sorted({r.fcc_class for r in self.records.values() if r.fcc_class})


class InMemoryStudents:
    def __init__(self, students: list[Student]):
        self._by_id = {s.fcc_id: s for s in students}

    def get_by_fcc_id(self, fcc_id):
        return self._by_id.get(fcc_id)


def test_completion_adds_score_and_writes_one_log_each(fixed_now):
    board = InMemoryLeaderboard([_record("4949200024", 10)])
    svc = LeaderboardService(board, InMemoryStudents([]))

    result = svc.complete_task("4949200024", "1", 5, now=fixed_now)

    assert result.leaderboard.total_score == 15
    assert result.leaderboard.last_updated == fixed_now
    assert len(board.task_logs) == 1
    assert board.task_logs[0].status == "COMPLETED"
    assert len(board.leaderboard_logs) == 1
    assert board.leaderboard_logs[0].leaderboard_id == result.leaderboard.record_id


def test_total_is_independent_of_completion_order(fixed_now):
    scores = [3, 7, 1, 12]
    totals = set()
    for order in itertools.permutations(scores):
        board = InMemoryLeaderboard([_record("4949200024", 10)])
        svc = LeaderboardService(board, InMemoryStudents([]))
        for task_id, score in enumerate(order, start=1):
            svc.complete_task("4949200024", task_id, score, now=fixed_now)
        totals.add(board.records["4949200024"].total_score)

    assert totals == {10 + sum(scores)}


def test_completion_requires_existing_record(fixed_now):
    board = InMemoryLeaderboard([])
    svc = LeaderboardService(board, InMemoryStudents([]))

    with pytest.raises(PreconditionError):
        svc.complete_task("4949200024", 1, 5, now=fixed_now)
    assert board.task_logs == []


@pytest.mark.parametrize("score", ["abc", -1, None, True])
def test_completion_rejects_bad_score(score, fixed_now):
    board = InMemoryLeaderboard([_record("4949200024", 10)])
    svc = LeaderboardService(board, InMemoryStudents([]))

    with pytest.raises(ValidationError):
        svc.complete_task("4949200024", 1, score, now=fixed_now)
    assert board.records["4949200024"].total_score == 10


def test_ranked_is_capped_and_filtered():
    records = [_record(f"{i:04d}200024", i, fcc_class="5" if i % 2 else "6", record_id=i) for i in range(150)]
    svc = LeaderboardService(InMemoryLeaderboard(records), InMemoryStudents([]))

    everyone = svc.ranked("ALL")
    assert len(everyone) == 100
    assert everyone[0].total_score == 149
    assert [r.total_score for r in everyone] == sorted((r.total_score for r in everyone), reverse=True)

    class_five = svc.ranked("5")
    assert {r.fcc_class for r in class_five} == {"5"}
    assert len(class_five) == 75


def test_student_board_needs_known_student_with_class():
    board = InMemoryLeaderboard([_record("4949200024", 10)])
    svc = LeaderboardService(board, InMemoryStudents([_student("9631200024", fcc_class=None)]))

    with pytest.raises(NotFoundError):
        svc.student_board("4949200024")
    with pytest.raises(ValidationError):
        svc.student_board("9631200024")


def test_student_board_defaults_unearned_tasks_to_zero():
    board = InMemoryLeaderboard([_record("4949200024", 10)])
    board.tasks = [
        TaskProgress(
            task_id=1,
            task_name="Tables of 12",
            description=None,
            max_score=10,
            start_time=None,
            end_time=None,
            score_earned=0,
            status=None,
            completed_at=None,
        )
    ]
    svc = LeaderboardService(board, InMemoryStudents([_student("4949200024")]))

    result = svc.student_board("4949200024", "ALL")

    assert result.student.total_score == 10
    assert result.tasks[0].score_earned == 0


def test_complete_task_route(client_for):
    board = InMemoryLeaderboard([_record("4949200024", 10)])
    client = client_for(leaderboard_service=LeaderboardService(board, InMemoryStudents([])))

    resp = client.post("/complete-task", json={"fccId": "4949200024", "taskId": 1, "scoreEarned": 5})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["updatedLeaderboard"]["total_score"] == 15
    assert body["taskLog"]["score_earned"] == 5

    resp = client.post("/complete-task", json={"fccId": "9631200024", "taskId": 1, "scoreEarned": 5})
    assert resp.status_code == 404


def test_leaderboard_route_lists_classes(client_for):
    board = InMemoryLeaderboard([_record("4949200024", 10, "5"), _record("9631200024", 4, "6", record_id=2)])
    client = client_for(leaderboard_service=LeaderboardService(board, InMemoryStudents([])))

    assert client.get("/get-classes").get_json() == {"classes": ["5", "6"]}
    rows = client.get("/leaderboard?leaderboardClassFilter=6").get_json()["leaderboard"]
    assert [r["student_fcc_id"] for r in rows] == ["9631200024"]
