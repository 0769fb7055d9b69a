from __future__ import annotations

import logging
from datetime import date, time
from typing import Optional, Sequence

from ..common.datetime_utils import minutes_of_day
from ..common.validators import optional_text, require_admin, require_non_empty
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from .model import PracticeSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


def session_duration_minutes(start_time: time, end_time: time) -> int:
    """Scheduled length of a session; rejects empty or inverted windows."""
    duration = minutes_of_day(end_time) - minutes_of_day(start_time)
    if duration <= 0:
        raise ValidationError("End time must be after start time")
    return duration


class SessionService:
    def __init__(self, sessions: SessionRepository):
        self._sessions = sessions

    def create_session(
        self,
        *,
        current_role: Role,
        title: str,
        practice_date: Optional[date],
        start_time: Optional[time],
        end_time: Optional[time],
        description: Optional[str] = None,
        created_by: Optional[int] = None,
    ) -> PracticeSession:
        require_admin(current_role)

        title = require_non_empty(title, "Practice title")
        if practice_date is None or start_time is None or end_time is None:
            raise ValidationError("Please fill in all required fields")

        duration = session_duration_minutes(start_time, end_time)
        session_id = self._sessions.create(
            title=title,
            description=optional_text(description),
            practice_date=practice_date,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration,
            created_by=created_by,
        )
        logger.info("Practice session %s created for %s (%s min)", session_id, practice_date, duration)
        return PracticeSession(
            session_id=session_id,
            title=title,
            description=optional_text(description),
            practice_date=practice_date,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration,
            created_by=created_by,
        )

    def list_sessions(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[PracticeSession]:
        return self._sessions.list_all(start=start, end=end, newest_first=True)

    def list_upcoming(self, *, today: date) -> Sequence[PracticeSession]:
        """Sessions cadets can still mark: today and later, soonest first."""
        return self._sessions.list_all(start=today, newest_first=False)

    def get_session(self, session_id: int) -> PracticeSession:
        session = self._sessions.get_by_id(int(session_id))
        if not session:
            raise NotFoundError("Practice session not found")
        return session

    def delete_session(self, *, current_role: Role, session_id: int) -> None:
        require_admin(current_role)
        if not self._sessions.delete(int(session_id)):
            raise NotFoundError("Practice session not found")
        logger.info("Practice session %s deleted", session_id)
