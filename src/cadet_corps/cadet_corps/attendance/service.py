from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_admin
from ..core.enums import MarkKind, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..sessions.model import PracticeSession
from ..sessions.repository import SessionRepository
from .engine import derive
from .factory import MarkStrategyFactory
from .model import AttendanceRecord, HistoryEntry
from .repository import AttendanceRepository
from .strategies.base import MarkDecision

logger = logging.getLogger(__name__)

# Called after every successful write with the stored record and "entry", "exit" or "manual".
AttendanceNotifier = Callable[[AttendanceRecord, str], None]


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        sessions: SessionRepository,
        *,
        strategy_factory: MarkStrategyFactory | None = None,
        on_marked: AttendanceNotifier | None = None,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._factory = strategy_factory or MarkStrategyFactory()
        self._on_marked = on_marked

    def _require_session(self, session_id: int) -> PracticeSession:
        session = self._sessions.get_by_id(int(session_id))
        if not session:
            raise NotFoundError("Practice session not found")
        return session

    @staticmethod
    def _require_cadet(cadet_id: Optional[int]) -> int:
        if cadet_id is None:
            raise ValidationError("Your account is not linked to a cadet profile")
        return int(cadet_id)

    def _store(self, session: PracticeSession, cadet_id: int, decision: MarkDecision, how: str) -> AttendanceRecord:
        derived = derive(decision.entry_time, decision.exit_time, session.duration_minutes)
        record = self._attendance.upsert(
            session_id=session.session_id,
            cadet_id=cadet_id,
            entry_time=decision.entry_time,
            exit_time=decision.exit_time,
            participation_minutes=derived.participation_minutes,
            attendance_percentage=derived.attendance_percentage,
            attendance_status=derived.attendance_status,
        )
        logger.info(
            "Attendance %s marked for cadet %s in session %s: %s (%.1f%%)",
            how,
            cadet_id,
            session.session_id,
            record.attendance_status.value,
            record.attendance_percentage,
        )
        if self._on_marked:
            self._on_marked(record, how)
        return record

    def upsert_entry_or_exit(self, *, session_id: int, cadet_id: int, kind: MarkKind | str, time_value: time) -> AttendanceRecord:
        """Write one of the two times and recompute the derived fields.

        Repeating the same call leaves the record unchanged.
        """
        strategy = self._factory.for_kind(kind)
        kind = MarkKind(kind)
        cadet_id = self._require_cadet(cadet_id)
        session = self._require_session(session_id)

        current = self._attendance.get(session.session_id, cadet_id)
        decision = strategy.decide(
            current=current,
            entry_time=time_value if kind == MarkKind.ENTRY else None,
            exit_time=time_value if kind == MarkKind.EXIT else None,
        )
        return self._store(session, cadet_id, decision, kind.value)

    def mark_entry(self, cadet_id: Optional[int], session_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        return self.upsert_entry_or_exit(
            session_id=session_id,
            cadet_id=cadet_id,
            kind=MarkKind.ENTRY,
            time_value=now.time().replace(second=0, microsecond=0),
        )

    def mark_exit(self, cadet_id: Optional[int], session_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        return self.upsert_entry_or_exit(
            session_id=session_id,
            cadet_id=cadet_id,
            kind=MarkKind.EXIT,
            time_value=now.time().replace(second=0, microsecond=0),
        )

    def manual_mark(
        self,
        cadet_id: Optional[int],
        session_id: int,
        entry_time: Optional[time],
        exit_time: Optional[time],
    ) -> AttendanceRecord:
        # a rejected mark writes nothing
        decision = self._factory.for_manual().decide(current=None, entry_time=entry_time, exit_time=exit_time)
        cadet_id = self._require_cadet(cadet_id)
        session = self._require_session(session_id)
        return self._store(session, cadet_id, decision, "manual")

    def get_my_history(self, cadet_id: Optional[int]) -> list[HistoryEntry]:
        if cadet_id is None:
            return []

        records = self._attendance.list_by_cadet(int(cadet_id))
        sessions = {s.session_id: s for s in self._sessions.list_all()}

        history = [HistoryEntry(record=r, session=sessions[r.session_id]) for r in records if r.session_id in sessions]
        history.sort(key=lambda h: (h.session.practice_date, h.session.start_time), reverse=True)
        return history

    def average_percentage(self, cadet_id: Optional[int]) -> float:
        """Mean percentage over completed records (both times present)."""
        if cadet_id is None:
            return 0.0
        completed = [
            r.attendance_percentage
            for r in self._attendance.list_by_cadet(int(cadet_id))
            if r.entry_time is not None and r.exit_time is not None
        ]
        if not completed:
            return 0.0
        return sum(completed) / len(completed)

    def delete_record(self, *, current_role: Role, attendance_id: int) -> None:
        require_admin(current_role)
        if not self._attendance.delete(int(attendance_id)):
            raise NotFoundError("Attendance record not found")
        logger.info("Attendance record %s deleted", attendance_id)
