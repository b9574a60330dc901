from __future__ import annotations

import json
from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders
from .model import QuizAttempt, QuizQuestion, QuizSession
from .repository import QuizRepository

_SESSION_COLUMNS = "session_id, fcc_id, skill_topic, total_questions, score, start_time, end_time, duration_seconds"


def _to_session(r: dict) -> QuizSession:
    return QuizSession(
        session_id=int(r["session_id"]),
        fcc_id=r["fcc_id"],
        skill_topic=r["skill_topic"],
        total_questions=int(r.get("total_questions") or 0),
        score=int(r.get("score") or 0),
        start_time=r["start_time"],
        end_time=r.get("end_time"),
        duration_seconds=int(r["duration_seconds"]) if r.get("duration_seconds") is not None else None,
    )


def _options(value):
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


class MySQLQuizRepository(QuizRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def questions_for_topic(self, skill_topic: str) -> Sequence[QuizQuestion]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT quiz_id, skill_topic, question, options, correct_answer
                FROM quizzes
                WHERE skill_topic=%s
                ORDER BY quiz_id
                """,
                (skill_topic,),
            )
            return [
                QuizQuestion(
                    quiz_id=int(r["quiz_id"]),
                    skill_topic=r["skill_topic"],
                    question=r["question"],
                    options=_options(r.get("options")),
                    correct_answer=r["correct_answer"],
                )
                for r in fetchall(cur)
            ]

    def correct_answers(self, question_ids: Sequence[int]) -> dict[int, str]:
        ids = sorted({int(q) for q in question_ids})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT quiz_id, correct_answer FROM quizzes WHERE quiz_id IN ({placeholders(len(ids))})",
                tuple(ids),
            )
            return {int(r["quiz_id"]): r["correct_answer"] for r in fetchall(cur)}

    def create_session(
        self, *, fcc_id: str, skill_topic: str, total_questions: int, start_time: datetime
    ) -> QuizSession:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO quiz_sessions (fcc_id, skill_topic, total_questions, score, start_time)
                VALUES (%s, %s, %s, 0, %s)
                """,
                (fcc_id, skill_topic, total_questions, start_time),
            )
            return QuizSession(
                session_id=int(cur.lastrowid),
                fcc_id=fcc_id,
                skill_topic=skill_topic,
                total_questions=total_questions,
                score=0,
                start_time=start_time,
            )

    def get_session(self, session_id: int) -> Optional[QuizSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SESSION_COLUMNS} FROM quiz_sessions WHERE session_id=%s", (session_id,))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def close_session(
        self,
        *,
        session_id: int,
        attempts: Sequence[QuizAttempt],
        score: int,
        end_time: datetime,
    ) -> Optional[QuizSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SESSION_COLUMNS} FROM quiz_sessions WHERE session_id=%s FOR UPDATE",
                (session_id,),
            )
            r = fetchone(cur)
            if not r or r.get("end_time") is not None:
                return None

            if attempts:
                cur.executemany(
                    """
                    INSERT INTO quiz_attempts (session_id, question_id, user_answer, is_correct, fcc_id)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    [(a.session_id, a.question_id, a.user_answer, int(a.is_correct), a.fcc_id) for a in attempts],
                )

            cur.execute(
                """
                UPDATE quiz_sessions
                SET score=%s, end_time=%s, duration_seconds=TIMESTAMPDIFF(SECOND, start_time, %s)
                WHERE session_id=%s AND end_time IS NULL
                """,
                (score, end_time, end_time, session_id),
            )
            cur.execute(f"SELECT {_SESSION_COLUMNS} FROM quiz_sessions WHERE session_id=%s", (session_id,))
            return _to_session(fetchone(cur))
