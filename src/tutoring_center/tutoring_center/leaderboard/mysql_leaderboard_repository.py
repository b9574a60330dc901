from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.constants import LEADERBOARD_ACTION_UPDATE, LEADERBOARD_COMPLETION_NOTE, TASK_STATUS_COMPLETED
from ..core.exceptions import PreconditionError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import CompletionResult, LeaderboardLogEntry, LeaderboardRecord, ScoringTaskLog, TaskProgress
from .repository import LeaderboardRepository

_RECORD_COLUMNS = "id, student_fcc_id, name, fcc_class, total_score, last_updated"


def _to_record(r: dict) -> LeaderboardRecord:
    return LeaderboardRecord(
        record_id=int(r["id"]),
        student_fcc_id=r["student_fcc_id"],
        name=r.get("name"),
        fcc_class=r.get("fcc_class"),
        total_score=int(r.get("total_score") or 0),
        last_updated=r.get("last_updated"),
    )


class MySQLLeaderboardRepository(LeaderboardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record_completion(
        self,
        *,
        fcc_id: str,
        task_id: int,
        score_earned: int,
        completed_at: datetime,
    ) -> CompletionResult:
        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock serializes concurrent completions for the same student.
            cur.execute("SELECT id FROM leaderboard WHERE student_fcc_id=%s FOR UPDATE", (fcc_id,))
            if not fetchone(cur):
                raise PreconditionError(f"No leaderboard record for student {fcc_id}")

            cur.execute(
                """
                INSERT INTO scoring_task_log (student_fcc_id, task_id, score_earned, status, completed_at)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (fcc_id, task_id, score_earned, TASK_STATUS_COMPLETED, completed_at),
            )
            task_log = ScoringTaskLog(
                log_id=int(cur.lastrowid),
                student_fcc_id=fcc_id,
                task_id=task_id,
                score_earned=score_earned,
                status=TASK_STATUS_COMPLETED,
                completed_at=completed_at,
            )

            cur.execute(
                """
                UPDATE leaderboard
                SET total_score = total_score + %s, last_updated = %s
                WHERE student_fcc_id = %s
                """,
                (score_earned, completed_at, fcc_id),
            )

            cur.execute(f"SELECT {_RECORD_COLUMNS} FROM leaderboard WHERE student_fcc_id=%s", (fcc_id,))
            record = _to_record(fetchone(cur))

            cur.execute(
                """
                INSERT INTO leaderboard_log (leaderboard_id, action, description, created_at)
                VALUES (%s, %s, %s, %s)
                """,
                (record.record_id, LEADERBOARD_ACTION_UPDATE, LEADERBOARD_COMPLETION_NOTE, completed_at),
            )
            entry = LeaderboardLogEntry(
                log_id=int(cur.lastrowid),
                leaderboard_id=record.record_id,
                action=LEADERBOARD_ACTION_UPDATE,
                description=LEADERBOARD_COMPLETION_NOTE,
            )

            return CompletionResult(task_log=task_log, leaderboard=record, leaderboard_log=entry)

    def ranked(self, *, fcc_class: Optional[str], limit: int) -> Sequence[LeaderboardRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if fcc_class:
            clauses.append("fcc_class=%s")
            params.append(fcc_class)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM leaderboard
                {where}
                ORDER BY total_score DESC, id ASC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_record(self, fcc_id: str) -> Optional[LeaderboardRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_RECORD_COLUMNS} FROM leaderboard WHERE student_fcc_id=%s", (fcc_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def tasks_for_student(self, *, fcc_id: str, fcc_class: str) -> Sequence[TaskProgress]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT st.task_id, st.task_name, st.description, st.max_score, st.start_time, st.end_time,
                       COALESCE(stl.score_earned, 0) AS score_earned, stl.status, stl.completed_at
                FROM leaderboard_scoring_tasks st
                LEFT JOIN scoring_task_log stl
                    ON st.task_id = stl.task_id AND stl.student_fcc_id = %s
                WHERE st.class = %s
                ORDER BY st.task_id
                """,
                (fcc_id, str(fcc_class)),
            )
            return [
                TaskProgress(
                    task_id=int(r["task_id"]),
                    task_name=r["task_name"],
                    description=r.get("description"),
                    max_score=int(r.get("max_score") or 0),
                    start_time=r.get("start_time"),
                    end_time=r.get("end_time"),
                    score_earned=int(r.get("score_earned") or 0),
                    status=r.get("status"),
                    completed_at=r.get("completed_at"),
                )
                for r in fetchall(cur)
            ]

    def list_classes(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT class
                FROM leaderboard_scoring_tasks
                WHERE class IS NOT NULL AND class != ''
                ORDER BY class
                """
            )
            return [r["class"] for r in fetchall(cur)]
