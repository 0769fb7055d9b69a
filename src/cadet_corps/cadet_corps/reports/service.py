from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..common.csv_export import write_csv
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..sessions.model import PracticeSession
from ..sessions.repository import SessionRepository
from .formatter.base import ReportFormatter
from .formatter.text_formatter import PlainTextReportFormatter

logger = logging.getLogger(__name__)

ATTENDANCE_CSV_FIELDS = [
    "Regiment No.",
    "Name",
    "Platoon",
    "Session Date",
    "Session Title",
    "Duration (min)",
    "Attendance %",
    "Status",
]


@dataclass(frozen=True)
class SessionReport:
    session: Optional[PracticeSession]
    present: list[AttendanceReportRow] = field(default_factory=list)
    leave_early: list[AttendanceReportRow] = field(default_factory=list)
    absent: list[AttendanceReportRow] = field(default_factory=list)

    @property
    def present_count(self) -> int:
        return len(self.present)

    @property
    def leave_early_count(self) -> int:
        return len(self.leave_early)

    @property
    def absent_count(self) -> int:
        return len(self.absent)

    @property
    def total(self) -> int:
        return self.present_count + self.leave_early_count + self.absent_count

    def to_dict(self) -> dict:
        def rows(items: list[AttendanceReportRow]) -> list[dict]:
            return [
                {
                    "attendance_id": r.attendance_id,
                    "cadet_id": r.cadet_id,
                    "name": r.cadet_name,
                    "application_number": r.application_number,
                    "platoon": r.platoon,
                    "entry_time": r.entry_time.strftime("%H:%M") if r.entry_time else None,
                    "exit_time": r.exit_time.strftime("%H:%M") if r.exit_time else None,
                    "participation_minutes": r.participation_minutes,
                    "attendance_percentage": round(r.attendance_percentage, 1),
                }
                for r in items
            ]

        return {
            "session": self.session.to_dict() if self.session else None,
            "summary": {
                "present": self.present_count,
                "leave_early": self.leave_early_count,
                "absent": self.absent_count,
                "total": self.total,
            },
            "present": rows(self.present),
            "leave_early": rows(self.leave_early),
            "absent": rows(self.absent),
        }


def report_filename(session: PracticeSession, extension: str = "txt") -> str:
    title = re.sub(r"\s+", "-", session.title.strip())
    return f"attendance-report-{session.practice_date.strftime('%Y-%m-%d')}-{title}.{extension}"


class AttendanceReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        sessions: SessionRepository,
        *,
        formatter: Optional[ReportFormatter] = None,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._formatter = formatter or PlainTextReportFormatter()

    def build_session_report(self, session_id: int) -> SessionReport:
        """Bucket a session's records by stored status.

        Unknown sessions and sessions without records give an empty report.
        """

        session = self._sessions.get_by_id(int(session_id))
        if not session:
            return SessionReport(session=None)

        buckets: dict[AttendanceStatus, list[AttendanceReportRow]] = {s: [] for s in AttendanceStatus}
        for row in self._attendance.get_report_rows(session_id=session.session_id):
            buckets[row.attendance_status].append(row)

        return SessionReport(
            session=session,
            present=buckets[AttendanceStatus.PRESENT],
            leave_early=buckets[AttendanceStatus.LEAVE_EARLY],
            absent=buckets[AttendanceStatus.ABSENT],
        )

    def download_session_report(self, session_id: int) -> tuple[str, str]:
        report = self.build_session_report(session_id)
        if report.session is None:
            raise NotFoundError("Practice session not found")

        text = self._formatter.render(report)
        return report_filename(report.session, self._formatter.extension), text

    def export_attendance_csv(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        platoon: Optional[str] = None,
        cadet_id: Optional[int] = None,
    ) -> tuple[str, str]:
        rows = self._attendance.get_report_rows(start_date=start, end_date=end, platoon=platoon, cadet_id=cadet_id)
        logger.info("Exporting %d attendance rows (platoon=%s, cadet=%s)", len(rows), platoon or "all", cadet_id or "all")

        text = write_csv(
            ATTENDANCE_CSV_FIELDS,
            (
                {
                    "Regiment No.": r.application_number,
                    "Name": r.cadet_name,
                    "Platoon": r.platoon or "",
                    "Session Date": r.practice_date.strftime("%Y-%m-%d"),
                    "Session Title": r.session_title,
                    "Duration (min)": r.participation_minutes,
                    "Attendance %": f"{r.attendance_percentage:.1f}",
                    "Status": r.attendance_status.value,
                }
                for r in rows
            ),
        )

        suffix = "all"
        if start or end:
            suffix = f"{start.strftime('%Y%m%d') if start else 'begin'}_{end.strftime('%Y%m%d') if end else 'now'}"
        return f"attendance_{suffix}.csv", text
