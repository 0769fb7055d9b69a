from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, to_float
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_COLUMNS = (
    "attendance_id, session_id, cadet_id, entry_time, exit_time, "
    "participation_minutes, attendance_percentage, attendance_status, marked_at"
)


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        session_id=int(r["session_id"]),
        cadet_id=int(r["cadet_id"]),
        entry_time=normalize_mysql_time(r.get("entry_time")),
        exit_time=normalize_mysql_time(r.get("exit_time")),
        participation_minutes=int(r.get("participation_minutes") or 0),
        attendance_percentage=to_float(r.get("attendance_percentage")),
        attendance_status=AttendanceStatus(r["attendance_status"]),
        marked_at=r.get("marked_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, session_id: int, cadet_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM cadet_attendance WHERE session_id=%s AND cadet_id=%s",
                (int(session_id), int(cadet_id)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert(
        self,
        *,
        session_id: int,
        cadet_id: int,
        entry_time: Optional[time],
        exit_time: Optional[time],
        participation_minutes: int,
        attendance_percentage: float,
        attendance_status: AttendanceStatus,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO cadet_attendance(
                    session_id, cadet_id, entry_time, exit_time,
                    participation_minutes, attendance_percentage, attendance_status, marked_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,NOW())
                ON DUPLICATE KEY UPDATE
                    entry_time=VALUES(entry_time),
                    exit_time=VALUES(exit_time),
                    participation_minutes=VALUES(participation_minutes),
                    attendance_percentage=VALUES(attendance_percentage),
                    attendance_status=VALUES(attendance_status),
                    marked_at=VALUES(marked_at)
                """,
                (
                    int(session_id),
                    int(cadet_id),
                    entry_time,
                    exit_time,
                    int(participation_minutes),
                    round(float(attendance_percentage), 2),
                    attendance_status.value,
                ),
            )
            # lastrowid is 0 when the row was updated instead of inserted
            cur.execute(
                f"SELECT {_COLUMNS} FROM cadet_attendance WHERE session_id=%s AND cadet_id=%s",
                (int(session_id), int(cadet_id)),
            )
            return _to_record(fetchone(cur))

    def list_by_cadet(self, cadet_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM cadet_attendance WHERE cadet_id=%s ORDER BY marked_at DESC",
                (int(cadet_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM cadet_attendance WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0

    def get_report_rows(
        self,
        *,
        session_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        platoon: Optional[str] = None,
        cadet_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["1=1"]
        params: list[object] = []

        if session_id is not None:
            clauses.append("ca.session_id=%s")
            params.append(int(session_id))
        if start_date is not None:
            clauses.append("ps.practice_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("ps.practice_date <= %s")
            params.append(end_date)
        if platoon:
            clauses.append("c.platoon=%s")
            params.append(platoon)
        if cadet_id is not None:
            clauses.append("c.cadet_id=%s")
            params.append(int(cadet_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    ca.attendance_id, ca.session_id, ps.title AS session_title, ps.practice_date,
                    c.cadet_id, c.name_full AS cadet_name, c.application_number, c.platoon,
                    ca.entry_time, ca.exit_time, ca.participation_minutes,
                    ca.attendance_percentage, ca.attendance_status
                FROM cadet_attendance ca
                JOIN cadets c ON c.cadet_id = ca.cadet_id
                JOIN practice_sessions ps ON ps.session_id = ca.session_id
                WHERE {where}
                ORDER BY ps.practice_date DESC, c.name_full ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceReportRow(
                    attendance_id=int(r["attendance_id"]),
                    session_id=int(r["session_id"]),
                    session_title=r["session_title"],
                    practice_date=r["practice_date"],
                    cadet_id=int(r["cadet_id"]),
                    cadet_name=r["cadet_name"],
                    application_number=r["application_number"],
                    platoon=r.get("platoon"),
                    entry_time=normalize_mysql_time(r.get("entry_time")),
                    exit_time=normalize_mysql_time(r.get("exit_time")),
                    participation_minutes=int(r.get("participation_minutes") or 0),
                    attendance_percentage=to_float(r.get("attendance_percentage")),
                    attendance_status=AttendanceStatus(r["attendance_status"]),
                )
                for r in rows
            ]
