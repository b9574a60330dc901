from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import parse_int, require_non_empty
from ..core.constants import ALL_CLASSES, LEADERBOARD_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import CompletionResult, LeaderboardRecord, StudentBoard
from .repository import LeaderboardRepository

logger = logging.getLogger(__name__)


def _normalize_class_filter(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    if not value or value.upper() == ALL_CLASSES:
        return None
    return value


class LeaderboardService:
    def __init__(self, leaderboard: LeaderboardRepository, students: StudentRepository, *, limit: int = LEADERBOARD_LIMIT):
        self._leaderboard = leaderboard
        self._students = students
        self._limit = int(limit)

    def complete_task(self, fcc_id, task_id, score_earned, *, now: datetime | None = None) -> CompletionResult:
        """Record a task completion and add its score to the student's total.

        No idempotency key: calling twice logs (and scores) twice.
        """

        fcc_id = require_non_empty(fcc_id, "fccId")
        task_id = parse_int(task_id, "taskId")
        score_earned = parse_int(score_earned, "scoreEarned", minimum=0)
        now = now or now_local()

        result = self._leaderboard.record_completion(
            fcc_id=fcc_id,
            task_id=task_id,
            score_earned=score_earned,
            completed_at=now,
        )
        logger.info(
            "Task %s completed by %s (+%d, total=%d)",
            task_id,
            fcc_id,
            score_earned,
            result.leaderboard.total_score,
        )
        return result

    def ranked(self, class_filter: Optional[str] = None) -> list[LeaderboardRecord]:
        return list(self._leaderboard.ranked(fcc_class=_normalize_class_filter(class_filter), limit=self._limit))

    def student_board(self, fcc_id: str, class_filter: Optional[str] = None) -> StudentBoard:
        fcc_id = require_non_empty(fcc_id, "fccId")
        student = self._students.get_by_fcc_id(fcc_id)
        if not student:
            raise NotFoundError("Student not found")
        if not student.fcc_class:
            raise ValidationError("Student class not found")

        return StudentBoard(
            leaderboard=self.ranked(class_filter),
            tasks=list(self._leaderboard.tasks_for_student(fcc_id=fcc_id, fcc_class=student.fcc_class)),
            student=self._leaderboard.get_record(fcc_id),
        )

    def list_classes(self) -> list[str]:
        return list(self._leaderboard.list_classes())
