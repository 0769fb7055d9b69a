from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import MarkStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceNotifier, AttendanceService
from .cadets.mysql_cadet_repository import MySQLCadetRepository
from .cadets.repository import CadetRepository
from .cadets.service import CadetService
from .database.connection import DBConfig, DatabaseConnection
from .linking.mysql_linking_repository import MySQLLinkingRequestRepository
from .linking.repository import LinkingRequestRepository
from .linking.service import LinkingService
from .records.mysql_record_repository import MySQLRecordRepository
from .records.repository import RecordRepository
from .records.service import RecordService
from .reports.service import AttendanceReportService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    cadets_repo: CadetRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository
    records_repo: RecordRepository
    linking_repo: LinkingRequestRepository

    auth_service: AuthService
    user_service: UserService
    cadet_service: CadetService
    session_service: SessionService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    record_service: RecordService
    linking_service: LinkingService


def wire_services(
    *,
    conn: Optional[DatabaseConnection],
    users_repo: UserRepository,
    cadets_repo: CadetRepository,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    records_repo: RecordRepository,
    linking_repo: LinkingRequestRepository,
    on_attendance_marked: Optional[AttendanceNotifier] = None,
) -> Container:
    """Build every service on top of the given repositories.

    Tests call this with in-memory repositories.
    """

    return Container(
        conn=conn,
        users_repo=users_repo,
        cadets_repo=cadets_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        records_repo=records_repo,
        linking_repo=linking_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        cadet_service=CadetService(cadets_repo),
        session_service=SessionService(sessions_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            sessions_repo,
            strategy_factory=MarkStrategyFactory(),
            on_marked=on_attendance_marked,
        ),
        report_service=AttendanceReportService(attendance_repo, sessions_repo),
        record_service=RecordService(records_repo, cadets_repo),
        linking_service=LinkingService(linking_repo, cadets_repo, users_repo),
    )


def build_container(*, db_config: dict, on_attendance_marked: Optional[AttendanceNotifier] = None) -> Container:
    conn = DatabaseConnection.for_config(DBConfig.from_dict(db_config))

    return wire_services(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        cadets_repo=MySQLCadetRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        records_repo=MySQLRecordRepository(conn),
        linking_repo=MySQLLinkingRequestRepository(conn),
        on_attendance_marked=on_attendance_marked,
    )
