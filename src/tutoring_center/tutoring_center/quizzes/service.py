from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import parse_int, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import AnswerSubmission, QuizAttempt, QuizQuestion, QuizSession
from .repository import QuizRepository

logger = logging.getLogger(__name__)


def parse_answers(raw: Any) -> list[AnswerSubmission]:
    if not isinstance(raw, list):
        raise ValidationError("quizAnswers must be a list")
    answers = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValidationError("Each quiz answer must be an object")
        user_answer = item.get("user_answer")
        answers.append(
            AnswerSubmission(
                question_id=parse_int(item.get("question_id"), "question_id"),
                user_answer=None if user_answer is None else str(user_answer),
            )
        )
    return answers


class QuizService:
    def __init__(self, quizzes: QuizRepository):
        self._quizzes = quizzes

    def questions_for_topic(self, skill_topic: str) -> list[QuizQuestion]:
        return list(self._quizzes.questions_for_topic(require_non_empty(skill_topic, "skillTopic")))

    def start_session(self, fcc_id, skill_topic, total_questions, *, now: datetime | None = None) -> QuizSession:
        return self._quizzes.create_session(
            fcc_id=require_non_empty(fcc_id, "fccId"),
            skill_topic=require_non_empty(skill_topic, "skillTopic"),
            total_questions=parse_int(total_questions, "totalQuestions", minimum=0),
            start_time=now or now_local(),
        )

    def submit_attempt(
        self,
        session_id,
        fcc_id,
        answers: Sequence[AnswerSubmission],
        *,
        now: datetime | None = None,
    ) -> QuizSession:
        """Score the answers and close the session. Score = number of correct answers."""

        session_id = parse_int(session_id, "sessionId")
        fcc_id = require_non_empty(fcc_id, "fccId")
        now = now or now_local()

        session = self._quizzes.get_session(session_id)
        if not session:
            raise NotFoundError("Quiz session not found")
        if session.is_closed:
            raise ValidationError("Quiz session already submitted")
        if session.fcc_id != fcc_id:
            raise ValidationError("Quiz session belongs to another student")

        correct = self._quizzes.correct_answers([a.question_id for a in answers])
        attempts: list[QuizAttempt] = []
        for answer in answers:
            if answer.question_id not in correct:
                logger.warning("Question ID %s not found (session %s)", answer.question_id, session_id)
                continue
            attempts.append(
                QuizAttempt(
                    session_id=session_id,
                    question_id=answer.question_id,
                    user_answer=answer.user_answer,
                    is_correct=answer.user_answer == correct[answer.question_id],
                    fcc_id=fcc_id,
                )
            )

        score = sum(1 for a in attempts if a.is_correct)
        closed = self._quizzes.close_session(session_id=session_id, attempts=attempts, score=score, end_time=now)
        if closed is None:
            raise ValidationError("Quiz session already submitted")

        logger.info("Quiz session %s closed: %d/%d correct", session_id, score, len(attempts))
        return closed
