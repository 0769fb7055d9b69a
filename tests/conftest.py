from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.cadet_corps.cadet_corps.attendance.model import AttendanceRecord, AttendanceReportRow
from src.cadet_corps.cadet_corps.cadets.model import Cadet, FamilyContact, MedicalRecord, NewCadet
from src.cadet_corps.cadet_corps.container import wire_services
from src.cadet_corps.cadet_corps.core.enums import AttendanceStatus, RecordKind, RequestStatus, Role
from src.cadet_corps.cadet_corps.core.exceptions import StorageError
from src.cadet_corps.cadet_corps.database.mysql_base import DuplicateKeyError
from src.cadet_corps.cadet_corps.linking.model import LinkingRequest
from src.cadet_corps.cadet_corps.records.model import (
    Achievement,
    AchievementReportRow,
    DisciplinaryAction,
    TrainingCamp,
    TrainingCampReportRow,
)
from src.cadet_corps.cadet_corps.sessions.model import PracticeSession
from src.cadet_corps.cadet_corps.users.model import User

FIXED_NOW = datetime(2026, 3, 1, 10, 36, 42)


class InMemorySessions:
    def __init__(self):
        self.sessions: dict[int, PracticeSession] = {}
        self._id = 0

    def add(self, *, title="Drill", practice_date=date(2026, 3, 1), start=time(9, 0), end=time(11, 0)) -> PracticeSession:
        duration = (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
        session_id = self.create(
            title=title,
            description=None,
            practice_date=practice_date,
            start_time=start,
            end_time=end,
            duration_minutes=duration,
        )
        return self.sessions[session_id]

    def create(self, *, title, description, practice_date, start_time, end_time, duration_minutes, created_by=None) -> int:
        self._id += 1
        self.sessions[self._id] = PracticeSession(
            session_id=self._id,
            title=title,
            description=description,
            practice_date=practice_date,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration_minutes,
            created_by=created_by,
        )
        return self._id

    def get_by_id(self, session_id: int) -> Optional[PracticeSession]:
        return self.sessions.get(session_id)

    def list_all(self, *, start=None, end=None, newest_first=True):
        items = [
            s
            for s in self.sessions.values()
            if (start is None or s.practice_date >= start) and (end is None or s.practice_date <= end)
        ]
        items.sort(key=lambda s: (s.practice_date, s.start_time), reverse=newest_first)
        return items

    def delete(self, session_id: int) -> bool:
        return self.sessions.pop(session_id, None) is not None


class InMemoryCadets:
    def __init__(self):
        self.cadets: dict[int, Cadet] = {}
        self.family: dict[int, FamilyContact] = {}
        self.medical: dict[int, MedicalRecord] = {}
        self.fail_family = False
        self.created_at = datetime(2026, 2, 20, 8, 0)
        self._id = 0

    def add(self, *, name="Cadet One", application_number="A001", platoon="Junior", created_at=None) -> Cadet:
        cadet_id = self.create(
            NewCadet(application_number=application_number, name_full=name, date_of_birth=date(2013, 1, 1)),
            age=13,
            platoon=platoon,
        )
        if created_at is not None:
            self.cadets[cadet_id] = replace(self.cadets[cadet_id], created_at=created_at)
        return self.cadets[cadet_id]

    def create(self, cadet: NewCadet, *, age, platoon) -> int:
        if self.get_by_application_number(cadet.application_number):
            raise DuplicateKeyError("Duplicate entry")
        self._id += 1
        self.cadets[self._id] = Cadet(
            cadet_id=self._id,
            application_number=cadet.application_number,
            name_full=cadet.name_full,
            name_with_initials=cadet.name_with_initials or cadet.name_full,
            date_of_birth=cadet.date_of_birth,
            age=age,
            platoon=platoon,
            rank=cadet.rank,
            regiment_no=cadet.regiment_no,
            school_admission_no=cadet.school_admission_no,
            blood_group=cadet.blood_group,
            created_at=self.created_at,
        )
        return self._id

    def get_by_id(self, cadet_id: int) -> Optional[Cadet]:
        return self.cadets.get(cadet_id)

    def get_by_application_number(self, application_number: str) -> Optional[Cadet]:
        return next((c for c in self.cadets.values() if c.application_number == application_number), None)

    def list_all(self, *, platoon=None):
        items = [c for c in self.cadets.values() if not platoon or c.platoon == platoon]
        return sorted(items, key=lambda c: c.name_full)

    def delete(self, cadet_id: int) -> bool:
        return self.cadets.pop(cadet_id, None) is not None

    def add_family_contact(self, cadet_id: int, contact: FamilyContact) -> int:
        if self.fail_family:
            raise StorageError("family_contacts unavailable")
        self.family[cadet_id] = contact
        return cadet_id

    def add_medical_record(self, cadet_id: int, record: MedicalRecord) -> int:
        self.medical[cadet_id] = record
        return cadet_id

    def get_family_contact(self, cadet_id: int):
        return self.family.get(cadet_id)

    def get_medical_record(self, cadet_id: int):
        return self.medical.get(cadet_id)


class InMemoryAttendance:
    """Keyed on (session_id, cadet_id) like the UNIQUE KEY in MySQL."""

    def __init__(self, sessions: InMemorySessions, cadets: InMemoryCadets):
        self._sessions = sessions
        self._cadets = cadets
        self.records: dict[tuple[int, int], AttendanceRecord] = {}
        self.upsert_calls = 0
        self._id = 0

    def get(self, session_id: int, cadet_id: int):
        return self.records.get((session_id, cadet_id))

    def upsert(self, *, session_id, cadet_id, entry_time, exit_time, participation_minutes, attendance_percentage, attendance_status):
        self.upsert_calls += 1
        current = self.records.get((session_id, cadet_id))
        if current:
            attendance_id = current.attendance_id
        else:
            self._id += 1
            attendance_id = self._id
        record = AttendanceRecord(
            attendance_id=attendance_id,
            session_id=session_id,
            cadet_id=cadet_id,
            entry_time=entry_time,
            exit_time=exit_time,
            participation_minutes=participation_minutes,
            attendance_percentage=round(attendance_percentage, 2),
            attendance_status=attendance_status,
        )
        self.records[(session_id, cadet_id)] = record
        return record

    def list_by_cadet(self, cadet_id: int):
        return [r for (_, c), r in self.records.items() if c == cadet_id]

    def delete(self, attendance_id: int) -> bool:
        for key, r in list(self.records.items()):
            if r.attendance_id == attendance_id:
                del self.records[key]
                return True
        return False

    def get_report_rows(self, *, session_id=None, start_date=None, end_date=None, platoon=None, cadet_id=None):
        rows = []
        for r in self.records.values():
            session = self._sessions.get_by_id(r.session_id)
            cadet = self._cadets.get_by_id(r.cadet_id)
            if not session or not cadet:
                continue
            if session_id is not None and r.session_id != session_id:
                continue
            if start_date and session.practice_date < start_date:
                continue
            if end_date and session.practice_date > end_date:
                continue
            if platoon and cadet.platoon != platoon:
                continue
            if cadet_id is not None and cadet.cadet_id != cadet_id:
                continue
            rows.append(
                AttendanceReportRow(
                    attendance_id=r.attendance_id,
                    session_id=session.session_id,
                    session_title=session.title,
                    practice_date=session.practice_date,
                    cadet_id=cadet.cadet_id,
                    cadet_name=cadet.name_full,
                    application_number=cadet.application_number,
                    platoon=cadet.platoon,
                    entry_time=r.entry_time,
                    exit_time=r.exit_time,
                    participation_minutes=r.participation_minutes,
                    attendance_percentage=r.attendance_percentage,
                    attendance_status=r.attendance_status,
                )
            )
        rows.sort(key=lambda x: (x.practice_date, x.cadet_name))
        return rows


class InMemoryRecords:
    def __init__(self, cadets: InMemoryCadets):
        self._cadets = cadets
        self.achievements: dict[int, Achievement] = {}
        self.disciplinary: dict[int, DisciplinaryAction] = {}
        self.camps: dict[int, TrainingCamp] = {}
        self._id = 0

    def _next(self) -> int:
        self._id += 1
        return self._id

    def add_achievement(self, *, cadet_id, achievement_type, achievement_description, date_achieved, camp_name, certificate_no) -> int:
        new_id = self._next()
        self.achievements[new_id] = Achievement(
            achievement_id=new_id,
            cadet_id=cadet_id,
            achievement_type=achievement_type,
            achievement_description=achievement_description,
            date_achieved=date_achieved,
            camp_name=camp_name,
            certificate_no=certificate_no,
        )
        return new_id

    def add_disciplinary_action(self, *, cadet_id, date_of_action, offence, punishment) -> int:
        new_id = self._next()
        self.disciplinary[new_id] = DisciplinaryAction(
            action_id=new_id, cadet_id=cadet_id, date_of_action=date_of_action, offence=offence, punishment=punishment
        )
        return new_id

    def add_training_camp(self, *, cadet_id, camp_name, camp_level, location, duration_from, duration_to, remarks) -> int:
        new_id = self._next()
        self.camps[new_id] = TrainingCamp(
            camp_id=new_id,
            cadet_id=cadet_id,
            camp_name=camp_name,
            camp_level=camp_level,
            location=location,
            duration_from=duration_from,
            duration_to=duration_to,
            remarks=remarks,
        )
        return new_id

    def list_achievements(self, cadet_id: int):
        return [a for a in self.achievements.values() if a.cadet_id == cadet_id]

    def list_disciplinary_actions(self, cadet_id: int):
        return [d for d in self.disciplinary.values() if d.cadet_id == cadet_id]

    def list_training_camps(self, cadet_id: int):
        return [t for t in self.camps.values() if t.cadet_id == cadet_id]

    def delete(self, kind: RecordKind, record_id: int) -> bool:
        store = {
            RecordKind.ACHIEVEMENT: self.achievements,
            RecordKind.DISCIPLINARY: self.disciplinary,
            RecordKind.TRAINING_CAMP: self.camps,
        }[kind]
        return store.pop(record_id, None) is not None

    def _owner_ok(self, cadet_id: int, platoon, only_cadet) -> bool:
        cadet = self._cadets.get_by_id(cadet_id)
        if not cadet:
            return False
        if platoon and cadet.platoon != platoon:
            return False
        return only_cadet is None or cadet.cadet_id == only_cadet

    def achievement_report_rows(self, *, platoon=None, cadet_id=None):
        rows = []
        for a in self.achievements.values():
            if self._owner_ok(a.cadet_id, platoon, cadet_id):
                c = self._cadets.get_by_id(a.cadet_id)
                rows.append(AchievementReportRow(achievement=a, cadet_name=c.name_full, application_number=c.application_number, platoon=c.platoon))
        return rows

    def training_camp_report_rows(self, *, platoon=None, cadet_id=None):
        rows = []
        for t in self.camps.values():
            if self._owner_ok(t.cadet_id, platoon, cadet_id):
                c = self._cadets.get_by_id(t.cadet_id)
                rows.append(TrainingCampReportRow(camp=t, cadet_name=c.name_full, application_number=c.application_number, platoon=c.platoon))
        return rows


class InMemoryUsers:
    def __init__(self):
        self.users: dict[int, User] = {}
        self._id = 0

    def add(self, *, email="cadet@school.lk", password="secret1", role=Role.STUDENT, cadet_id=None, is_active=True) -> User:
        user_id = self.create_user(
            email=email,
            full_name=email.split("@")[0],
            password_hash=generate_password_hash(password),
            role=role,
            cadet_id=cadet_id,
        )
        if not is_active:
            self.users[user_id] = replace(self.users[user_id], is_active=False)
        return self.users[user_id]

    def get_by_id(self, user_id: int):
        return self.users.get(user_id)

    def get_by_email(self, email: str):
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(self, *, email, full_name, password_hash, role, cadet_id=None) -> int:
        self._id += 1
        self.users[self._id] = User(
            user_id=self._id,
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            role=role,
            cadet_id=cadet_id,
        )
        return self._id

    def update_password(self, user_id: int, password_hash: str) -> bool:
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], password_hash=password_hash)
        return True

    def link_cadet(self, user_id: int, cadet_id: int) -> bool:
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], cadet_id=cadet_id)
        return True


class InMemoryLinking:
    def __init__(self):
        self.requests: dict[int, LinkingRequest] = {}
        self._id = 0

    def create(self, *, user_id, application_number, full_name, date_of_birth, additional_info) -> int:
        self._id += 1
        self.requests[self._id] = LinkingRequest(
            request_id=self._id,
            user_id=user_id,
            application_number=application_number,
            full_name=full_name,
            date_of_birth=date_of_birth,
            additional_info=additional_info,
            status=RequestStatus.PENDING,
            created_at=FIXED_NOW,
        )
        return self._id

    def get(self, request_id: int):
        return self.requests.get(request_id)

    def latest_for_user(self, user_id: int):
        mine = [r for r in self.requests.values() if r.user_id == user_id]
        return max(mine, key=lambda r: r.request_id) if mine else None

    def list_all(self, *, status=None, limit=200):
        items = [r for r in self.requests.values() if status is None or r.status == status]
        return sorted(items, key=lambda r: r.request_id, reverse=True)[:limit]

    def decide(self, *, request_id, status, decided_by, admin_notes=None) -> bool:
        req = self.requests.get(request_id)
        if not req or req.status != RequestStatus.PENDING:
            return False
        self.requests[request_id] = replace(req, status=status, decided_by=decided_by, admin_notes=admin_notes)
        return True


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def sessions_repo() -> InMemorySessions:
    return InMemorySessions()


@pytest.fixture
def cadets_repo() -> InMemoryCadets:
    return InMemoryCadets()


@pytest.fixture
def attendance_repo(sessions_repo, cadets_repo) -> InMemoryAttendance:
    return InMemoryAttendance(sessions_repo, cadets_repo)


@pytest.fixture
def records_repo(cadets_repo) -> InMemoryRecords:
    return InMemoryRecords(cadets_repo)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def linking_repo() -> InMemoryLinking:
    return InMemoryLinking()


@pytest.fixture
def container(sessions_repo, cadets_repo, attendance_repo, records_repo, users_repo, linking_repo):
    return wire_services(
        conn=None,
        users_repo=users_repo,
        cadets_repo=cadets_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        records_repo=records_repo,
        linking_repo=linking_repo,
    )


@pytest.fixture
def app(container, monkeypatch):
    from src.cadet_corps.cadet_corps.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
