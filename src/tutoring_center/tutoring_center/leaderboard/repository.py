from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import CompletionResult, LeaderboardRecord, TaskProgress


class LeaderboardRepository(Protocol):
    def record_completion(
        self,
        *,
        fcc_id: str,
        task_id: int,
        score_earned: int,
        completed_at: datetime,
    ) -> CompletionResult:
        """Task log + score increment + leaderboard log as one unit.

        Raises PreconditionError when the student has no leaderboard record.
        """

        raise NotImplementedError

    def ranked(self, *, fcc_class: Optional[str], limit: int) -> Sequence[LeaderboardRecord]:
        raise NotImplementedError

    def get_record(self, fcc_id: str) -> Optional[LeaderboardRecord]:
        raise NotImplementedError

    def tasks_for_student(self, *, fcc_id: str, fcc_class: str) -> Sequence[TaskProgress]:
        raise NotImplementedError

    def list_classes(self) -> Sequence[str]:
        raise NotImplementedError
