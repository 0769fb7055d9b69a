from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_hhmm
from ..core.enums import AttendanceStatus
from ..sessions.model import PracticeSession


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one cadet's entry/exit for one practice session.

    The derived fields are stored alongside the raw times and recomputed on
    every write.
    """

    attendance_id: int
    session_id: int
    cadet_id: int
    entry_time: Optional[time]
    exit_time: Optional[time]
    participation_minutes: int
    attendance_percentage: float
    attendance_status: AttendanceStatus
    marked_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "session_id": self.session_id,
            "cadet_id": self.cadet_id,
            "entry_time": format_hhmm(self.entry_time, ""),
            "exit_time": format_hhmm(self.exit_time, ""),
            "participation_minutes": self.participation_minutes,
            "attendance_percentage": round(self.attendance_percentage, 1),
            "attendance_status": self.attendance_status.value,
        }


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports/exports (record joined with cadet and session)."""

    attendance_id: int
    session_id: int
    session_title: str
    practice_date: date
    cadet_id: int
    cadet_name: str
    application_number: str
    platoon: Optional[str]
    entry_time: Optional[time]
    exit_time: Optional[time]
    participation_minutes: int
    attendance_percentage: float
    attendance_status: AttendanceStatus


@dataclass(frozen=True)
class HistoryEntry:
    record: AttendanceRecord
    session: PracticeSession

    def to_dict(self) -> dict:
        return {"session": self.session.to_dict(), "attendance": self.record.to_dict()}
