from __future__ import annotations

from datetime import datetime

from src.tutoring_center.tutoring_center.presence.model import PresencePatch
from src.tutoring_center.tutoring_center.presence.mysql_presence_repository import MySQLPresenceRepository

NOW = datetime(2025, 3, 5, 9, 7)


def test_update_sets_only_signaled_columns_on_state_and_log(scripted_db):
    factory = scripted_db([])
    repo = MySQLPresenceRepository(factory)

    repo.save_signal(
        "4949200024",
        PresencePatch(ctc_time=None, ctg_time=NOW, task_completed=True),
        log_date=NOW.date(),
        insert=False,
    )

    (update_sql, update_params), (log_sql, log_params) = factory.cursor.executed
    assert update_sql == "UPDATE students SET ctg_time=%s, task_completed=%s WHERE fcc_id=%s"
    assert update_params == (NOW, 1, "4949200024")
    assert log_sql.endswith("ON DUPLICATE KEY UPDATE ctg_time=%s, task_completed=%s")
    assert log_params == ("4949200024", NOW.date(), None, NOW, 1, NOW, 1)
    assert factory.conn.committed


def test_first_signal_upserts_state_row(scripted_db):
    factory = scripted_db([])
    repo = MySQLPresenceRepository(factory)

    repo.save_signal(
        "1234567890",
        PresencePatch(ctc_time=NOW, ctg_time=None, task_completed=False),
        log_date=NOW.date(),
        insert=True,
    )

    state_sql, state_params = factory.cursor.executed[0]
    assert state_sql.startswith("INSERT INTO students")
    assert state_sql.endswith("ON DUPLICATE KEY UPDATE ctc_time=%s, task_completed=%s")
    assert state_params == ("1234567890", NOW, None, 0, NOW, 0)
