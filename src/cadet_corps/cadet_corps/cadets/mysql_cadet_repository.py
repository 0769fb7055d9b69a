from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Cadet, FamilyContact, MedicalRecord, NewCadet
from .repository import CadetRepository

_COLUMNS = (
    "cadet_id, application_number, name_full, name_with_initials, date_of_birth, age, platoon, "
    "`rank`, regiment_no, school_admission_no, blood_group, created_at"
)


def _to_cadet(r: dict) -> Cadet:
    return Cadet(
        cadet_id=int(r["cadet_id"]),
        application_number=r["application_number"],
        name_full=r["name_full"],
        name_with_initials=r["name_with_initials"],
        date_of_birth=r["date_of_birth"],
        age=int(r["age"]) if r.get("age") is not None else None,
        platoon=r.get("platoon"),
        rank=r.get("rank") or "Cadet",
        regiment_no=r.get("regiment_no"),
        school_admission_no=r.get("school_admission_no"),
        blood_group=r.get("blood_group"),
        created_at=r.get("created_at"),
    )


class MySQLCadetRepository(CadetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, cadet: NewCadet, *, age: Optional[int], platoon: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO cadets(
                    application_number, name_full, name_with_initials, date_of_birth, age, platoon,
                    `rank`, regiment_no, school_admission_no, blood_group
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    cadet.application_number,
                    cadet.name_full,
                    cadet.name_with_initials or cadet.name_full,
                    cadet.date_of_birth,
                    age,
                    platoon,
                    cadet.rank or "Cadet",
                    cadet.regiment_no,
                    cadet.school_admission_no,
                    cadet.blood_group,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, cadet_id: int) -> Optional[Cadet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM cadets WHERE cadet_id=%s", (int(cadet_id),))
            r = fetchone(cur)
            return _to_cadet(r) if r else None

    def get_by_application_number(self, application_number: str) -> Optional[Cadet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM cadets WHERE application_number=%s", (application_number,))
            r = fetchone(cur)
            return _to_cadet(r) if r else None

    def list_all(self, *, platoon: Optional[str] = None) -> Sequence[Cadet]:
        with db_cursor(self._conn_factory) as (_, cur):
            if platoon:
                cur.execute(f"SELECT {_COLUMNS} FROM cadets WHERE platoon=%s ORDER BY name_full", (platoon,))
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM cadets ORDER BY name_full")
            return [_to_cadet(r) for r in fetchall(cur)]

    def delete(self, cadet_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM cadets WHERE cadet_id=%s", (int(cadet_id),))
            return cur.rowcount > 0

    def add_family_contact(self, cadet_id: int, contact: FamilyContact) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO family_contacts(
                    cadet_id, father_name, father_occupation, father_contact,
                    mother_name, mother_occupation, mother_contact, guardian_name, guardian_contact
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(cadet_id),
                    contact.father_name,
                    contact.father_occupation,
                    contact.father_contact,
                    contact.mother_name,
                    contact.mother_occupation,
                    contact.mother_contact,
                    contact.guardian_name,
                    contact.guardian_contact,
                ),
            )
            return int(cur.lastrowid)

    def add_medical_record(self, cadet_id: int, record: MedicalRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO medical_records(cadet_id, issuance_party, date_of_issue, validity_end_date, medical_certificate_url)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    int(cadet_id),
                    record.issuance_party,
                    record.date_of_issue,
                    record.validity_end_date,
                    record.medical_certificate_url,
                ),
            )
            return int(cur.lastrowid)

    def get_family_contact(self, cadet_id: int) -> Optional[FamilyContact]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT father_name, father_occupation, father_contact, mother_name, mother_occupation,
                       mother_contact, guardian_name, guardian_contact
                FROM family_contacts
                WHERE cadet_id=%s
                ORDER BY contact_id DESC
                LIMIT 1
                """,
                (int(cadet_id),),
            )
            r = fetchone(cur)
            return FamilyContact(**r) if r else None

    def get_medical_record(self, cadet_id: int) -> Optional[MedicalRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT issuance_party, date_of_issue, validity_end_date, medical_certificate_url
                FROM medical_records
                WHERE cadet_id=%s
                ORDER BY medical_id DESC
                LIMIT 1
                """,
                (int(cadet_id),),
            )
            r = fetchone(cur)
            return MedicalRecord(**r) if r else None
