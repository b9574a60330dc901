from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceLogEntry, PresencePatch, PresenceState
from .repository import PresenceRepository


class MySQLPresenceRepository(PresenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_state(self, fcc_id: str) -> Optional[PresenceState]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT fcc_id, ctc_time, ctg_time, task_completed FROM students WHERE fcc_id=%s",
                (fcc_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return PresenceState(
                fcc_id=r["fcc_id"],
                ctc_time=r.get("ctc_time"),
                ctg_time=r.get("ctg_time"),
                task_completed=bool(r.get("task_completed")),
            )

    def save_signal(self, fcc_id: str, patch: PresencePatch, *, log_date: date, insert: bool) -> None:
        assignments = patch.assignments()
        sets = ", ".join(f"{column}=%s" for column, _ in assignments)
        values = tuple(value for _, value in assignments)

        with db_cursor(self._conn_factory) as (_, cur):
            if insert:
                # A concurrent first signal may have created the row already.
                cur.execute(
                    f"""
                    INSERT INTO students (fcc_id, ctc_time, ctg_time, task_completed)
                    VALUES (%s, %s, %s, %s)
                    ON DUPLICATE KEY UPDATE {sets}
                    """,
                    (fcc_id, patch.ctc_time, patch.ctg_time, int(patch.task_completed)) + values,
                )
            else:
                cur.execute(f"UPDATE students SET {sets} WHERE fcc_id=%s", values + (fcc_id,))

            cur.execute(
                f"""
                INSERT INTO attendance_log (fcc_id, log_date, ctc_time, ctg_time, task_completed)
                VALUES (%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE {sets}
                """,
                (fcc_id, log_date, patch.ctc_time, patch.ctg_time, int(patch.task_completed)) + values,
            )

    def list_log(self, fcc_id: str) -> Sequence[AttendanceLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT fcc_id, log_date, ctc_time, ctg_time, task_completed
                FROM attendance_log
                WHERE fcc_id=%s
                ORDER BY log_date DESC
                """,
                (fcc_id,),
            )
            return [
                AttendanceLogEntry(
                    fcc_id=r["fcc_id"],
                    log_date=r["log_date"],
                    ctc_time=r.get("ctc_time"),
                    ctg_time=r.get("ctg_time"),
                    task_completed=bool(r.get("task_completed")),
                )
                for r in fetchall(cur)
            ]
