from __future__ import annotations

from datetime import timedelta
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import FileContent, FileQuery, StoredFile
from .repository import FileRepository


def _to_meta(r: dict) -> StoredFile:
    return StoredFile(
        file_id=int(r["id"]),
        filename=r["filename"],
        filetype=r.get("filetype"),
        description=r.get("description"),
        uploaded_at=r["uploaded_at"],
    )


class MySQLFileRepository(FileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, filename: str, filetype: Optional[str], data: bytes, description: Optional[str]) -> StoredFile:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO files (filename, filetype, filedata, description, uploaded_at)
                VALUES (%s, %s, %s, %s, NOW())
                """,
                (filename, filetype, data, description),
            )
            cur.execute(
                "SELECT id, filename, filetype, description, uploaded_at FROM files WHERE id=%s",
                (cur.lastrowid,),
            )
            return _to_meta(fetchone(cur))

    def search(self, query: FileQuery) -> Sequence[StoredFile]:
        clauses: list[str] = []
        params: list[object] = []

        if query.start_date:
            clauses.append("uploaded_at >= %s")
            params.append(query.start_date)
        if query.end_date:
            clauses.append("uploaded_at < %s")
            params.append(query.end_date + timedelta(days=1))
        if query.search:
            clauses.append("(LOWER(filename) LIKE %s OR LOWER(description) LIKE %s)")
            pattern = f"%{query.search.lower()}%"
            params.extend([pattern, pattern])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, filename, filetype, description, uploaded_at
                FROM files
                {where}
                ORDER BY uploaded_at DESC, id DESC
                """,
                tuple(params),
            )
            return [_to_meta(r) for r in fetchall(cur)]

    def get_content(self, file_id: int) -> Optional[FileContent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, filename, filetype, filedata, description, uploaded_at FROM files WHERE id=%s",
                (file_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return FileContent(meta=_to_meta(r), data=bytes(r["filedata"]))
