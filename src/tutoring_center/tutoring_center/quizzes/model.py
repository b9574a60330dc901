from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class QuizQuestion:
    quiz_id: int
    skill_topic: str
    question: str
    options: Any
    correct_answer: str


@dataclass(frozen=True)
class QuizSession:
    session_id: int
    fcc_id: str
    skill_topic: str
    total_questions: int
    score: int
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_seconds: Optional[int] = None

    @property
    def is_closed(self) -> bool:
        return self.end_time is not None


@dataclass(frozen=True)
class AnswerSubmission:
    question_id: int
    user_answer: Optional[str]


@dataclass(frozen=True)
class QuizAttempt:
    session_id: int
    question_id: int
    user_answer: Optional[str]
    is_correct: bool
    fcc_id: str
