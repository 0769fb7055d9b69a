from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import PracticeSession


class SessionRepository(Protocol):
    def create(
        self,
        *,
        title: str,
        description: Optional[str],
        practice_date: date,
        start_time: time,
        end_time: time,
        duration_minutes: int,
        created_by: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, session_id: int) -> Optional[PracticeSession]:
        raise NotImplementedError

    def list_all(self, *, start: Optional[date] = None, end: Optional[date] = None, newest_first: bool = True) -> Sequence[PracticeSession]:
        """List sessions ordered by practice_date, optionally bounded by a date window."""

        raise NotImplementedError

    def delete(self, session_id: int) -> bool:
        raise NotImplementedError
