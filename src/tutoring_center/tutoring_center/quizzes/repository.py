from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import QuizAttempt, QuizQuestion, QuizSession


class QuizRepository(Protocol):
    def questions_for_topic(self, skill_topic: str) -> Sequence[QuizQuestion]:
        raise NotImplementedError

    def correct_answers(self, question_ids: Sequence[int]) -> dict[int, str]:
        raise NotImplementedError

    def create_session(
        self, *, fcc_id: str, skill_topic: str, total_questions: int, start_time: datetime
    ) -> QuizSession:
        raise NotImplementedError

    def get_session(self, session_id: int) -> Optional[QuizSession]:
        raise NotImplementedError

    def close_session(
        self,
        *,
        session_id: int,
        attempts: Sequence[QuizAttempt],
        score: int,
        end_time: datetime,
    ) -> Optional[QuizSession]:
        """Insert attempts and close the session in one transaction.

        Returns None (writing nothing) when the session is already closed.
        """

        raise NotImplementedError
