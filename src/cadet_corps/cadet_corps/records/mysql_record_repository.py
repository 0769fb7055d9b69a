from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import RecordKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Achievement, AchievementReportRow, DisciplinaryAction, TrainingCamp, TrainingCampReportRow
from .repository import RecordRepository

# kind -> (table, primary key); never built from user input
_TABLES = {
    RecordKind.ACHIEVEMENT: ("achievements", "achievement_id"),
    RecordKind.DISCIPLINARY: ("disciplinary_actions", "action_id"),
    RecordKind.TRAINING_CAMP: ("training_camps", "camp_id"),
}


def _to_achievement(r: dict) -> Achievement:
    return Achievement(
        achievement_id=int(r["achievement_id"]),
        cadet_id=int(r["cadet_id"]),
        achievement_type=r.get("achievement_type") or "",
        achievement_description=r.get("achievement_description"),
        date_achieved=r.get("date_achieved"),
        camp_name=r.get("camp_name"),
        certificate_no=r.get("certificate_no"),
    )


def _to_camp(r: dict) -> TrainingCamp:
    return TrainingCamp(
        camp_id=int(r["camp_id"]),
        cadet_id=int(r["cadet_id"]),
        camp_name=r.get("camp_name") or "",
        camp_level=r.get("camp_level"),
        location=r.get("location"),
        duration_from=r.get("duration_from"),
        duration_to=r.get("duration_to"),
        remarks=r.get("remarks"),
    )


def _cadet_filter(platoon: Optional[str], cadet_id: Optional[int]) -> tuple[str, tuple]:
    clauses = ["1=1"]
    params: list[object] = []
    if platoon:
        clauses.append("c.platoon=%s")
        params.append(platoon)
    if cadet_id is not None:
        clauses.append("c.cadet_id=%s")
        params.append(int(cadet_id))
    return " AND ".join(clauses), tuple(params)


class MySQLRecordRepository(RecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add_achievement(
        self,
        *,
        cadet_id: int,
        achievement_type: str,
        achievement_description: Optional[str],
        date_achieved: Optional[date],
        camp_name: Optional[str],
        certificate_no: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO achievements(cadet_id, achievement_type, achievement_description, date_achieved, camp_name, certificate_no)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(cadet_id), achievement_type, achievement_description, date_achieved, camp_name, certificate_no),
            )
            return int(cur.lastrowid)

    def add_disciplinary_action(
        self,
        *,
        cadet_id: int,
        date_of_action: Optional[date],
        offence: str,
        punishment: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO disciplinary_actions(cadet_id, date_of_action, offence, punishment) VALUES(%s,%s,%s,%s)",
                (int(cadet_id), date_of_action, offence, punishment),
            )
            return int(cur.lastrowid)

    def add_training_camp(
        self,
        *,
        cadet_id: int,
        camp_name: str,
        camp_level: Optional[str],
        location: Optional[str],
        duration_from: Optional[date],
        duration_to: Optional[date],
        remarks: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO training_camps(cadet_id, camp_name, camp_level, location, duration_from, duration_to, remarks)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(cadet_id), camp_name, camp_level, location, duration_from, duration_to, remarks),
            )
            return int(cur.lastrowid)

    def list_achievements(self, cadet_id: int) -> Sequence[Achievement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT achievement_id, cadet_id, achievement_type, achievement_description, date_achieved, camp_name, certificate_no
                FROM achievements
                WHERE cadet_id=%s
                ORDER BY date_achieved DESC, achievement_id DESC
                """,
                (int(cadet_id),),
            )
            return [_to_achievement(r) for r in fetchall(cur)]

    def list_disciplinary_actions(self, cadet_id: int) -> Sequence[DisciplinaryAction]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT action_id, cadet_id, date_of_action, offence, punishment
                FROM disciplinary_actions
                WHERE cadet_id=%s
                ORDER BY date_of_action DESC, action_id DESC
                """,
                (int(cadet_id),),
            )
            return [
                DisciplinaryAction(
                    action_id=int(r["action_id"]),
                    cadet_id=int(r["cadet_id"]),
                    date_of_action=r.get("date_of_action"),
                    offence=r.get("offence") or "",
                    punishment=r.get("punishment"),
                )
                for r in fetchall(cur)
            ]

    def list_training_camps(self, cadet_id: int) -> Sequence[TrainingCamp]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT camp_id, cadet_id, camp_name, camp_level, location, duration_from, duration_to, remarks
                FROM training_camps
                WHERE cadet_id=%s
                ORDER BY duration_from DESC, camp_id DESC
                """,
                (int(cadet_id),),
            )
            return [_to_camp(r) for r in fetchall(cur)]

    def delete(self, kind: RecordKind, record_id: int) -> bool:
        table, pk = _TABLES[RecordKind(kind)]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {table} WHERE {pk}=%s", (int(record_id),))
            return cur.rowcount > 0

    def achievement_report_rows(
        self, *, platoon: Optional[str] = None, cadet_id: Optional[int] = None
    ) -> Sequence[AchievementReportRow]:
        where, params = _cadet_filter(platoon, cadet_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.achievement_id, a.cadet_id, a.achievement_type, a.achievement_description,
                       a.date_achieved, a.camp_name, a.certificate_no,
                       c.name_full, c.application_number, c.platoon
                FROM achievements a
                JOIN cadets c ON c.cadet_id = a.cadet_id
                WHERE {where}
                ORDER BY a.date_achieved DESC, c.name_full ASC
                """,
                params,
            )
            return [
                AchievementReportRow(
                    achievement=_to_achievement(r),
                    cadet_name=r["name_full"],
                    application_number=r["application_number"],
                    platoon=r.get("platoon"),
                )
                for r in fetchall(cur)
            ]

    def training_camp_report_rows(
        self, *, platoon: Optional[str] = None, cadet_id: Optional[int] = None
    ) -> Sequence[TrainingCampReportRow]:
        where, params = _cadet_filter(platoon, cadet_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT t.camp_id, t.cadet_id, t.camp_name, t.camp_level, t.location,
                       t.duration_from, t.duration_to, t.remarks,
                       c.name_full, c.application_number, c.platoon
                FROM training_camps t
                JOIN cadets c ON c.cadet_id = t.cadet_id
                WHERE {where}
                ORDER BY t.duration_from DESC, c.name_full ASC
                """,
                params,
            )
            return [
                TrainingCampReportRow(
                    camp=_to_camp(r),
                    cadet_name=r["name_full"],
                    application_number=r["application_number"],
                    platoon=r.get("platoon"),
                )
                for r in fetchall(cur)
            ]
