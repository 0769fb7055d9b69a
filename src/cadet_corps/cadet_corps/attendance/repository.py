from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get(self, session_id: int, cadet_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

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
        """Insert or replace the single record for (session_id, cadet_id)."""

        raise NotImplementedError

    def list_by_cadet(self, cadet_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        session_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        platoon: Optional[str] = None,
        cadet_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
