from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import PracticeSession
from .repository import SessionRepository

_COLUMNS = "session_id, title, description, practice_date, start_time, end_time, duration_minutes, created_by"


def _to_session(r: dict) -> PracticeSession:
    return PracticeSession(
        session_id=int(r["session_id"]),
        title=r["title"],
        description=r.get("description"),
        practice_date=r["practice_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        duration_minutes=int(r["duration_minutes"]),
        created_by=r.get("created_by"),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        title: str,
        description: Optional[str],
        practice_date: date,
        start_time: time,
        end_time: time,
        duration_minutes: int,
        created_by: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO practice_sessions(title, description, practice_date, start_time, end_time, duration_minutes, created_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (title, description, practice_date, start_time, end_time, int(duration_minutes), created_by),
            )
            return int(cur.lastrowid)

    def get_by_id(self, session_id: int) -> Optional[PracticeSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM practice_sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_all(self, *, start: Optional[date] = None, end: Optional[date] = None, newest_first: bool = True) -> Sequence[PracticeSession]:
        clauses = ["1=1"]
        params: list[object] = []
        if start is not None:
            clauses.append("practice_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("practice_date <= %s")
            params.append(end)

        where = " AND ".join(clauses)
        order = "DESC" if newest_first else "ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM practice_sessions
                WHERE {where}
                ORDER BY practice_date {order}, start_time {order}
                """,
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def delete(self, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM practice_sessions WHERE session_id=%s", (int(session_id),))
            return cur.rowcount > 0
