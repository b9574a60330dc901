from __future__ import annotations

from datetime import datetime

import pytest

from src.tutoring_center.tutoring_center.container import Container
from src.tutoring_center.tutoring_center.main import create_app


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 5, 9, 7, 0)


@pytest.fixture
def client_for(monkeypatch, tmp_path):
    """Flask test client over a container holding only the services a test needs."""

    monkeypatch.setenv("APP_ENV", "testing")

    def _make(**services):
        fields = dict(
            student_service=None,
            presence_service=None,
            leaderboard_service=None,
            payment_service=None,
            quiz_service=None,
            file_service=None,
            chat_service=None,
            receipts_dir=tmp_path,
            runner=None,
            render_runner=None,
        )
        fields.update(services)
        app = create_app(container=Container(**fields))
        app.config["TESTING"] = True
        return app.test_client()

    return _make


class ScriptedCursor:
    """Dictionary cursor returning queued rows from fetchone(), recording every statement."""

    def __init__(self, rows):
        self._rows = list(rows)
        self.executed: list[tuple[str, tuple]] = []
        self.statement = None
        self.lastrowid = 0

    def execute(self, sql, params=()):
        self.statement = " ".join(sql.split())
        self.executed.append((self.statement, params))
        if self.statement.startswith("INSERT"):
            self.lastrowid += 1

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def fetchall(self):
        return []

    def close(self):
        pass


class ScriptedConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class ScriptedFactory:
    def __init__(self, rows):
        self.cursor = ScriptedCursor(rows)
        self.conn = ScriptedConnection(self.cursor)

    def connect(self, *, with_database=True):
        return self.conn


@pytest.fixture
def scripted_db():
    """Stand-in for DatabaseConnection: scripted_db([row, ...]) -> factory."""

    return ScriptedFactory
