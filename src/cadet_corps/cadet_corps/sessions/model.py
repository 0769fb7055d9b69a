from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional


@dataclass(frozen=True)
class PracticeSession:
    """Domain entity: a scheduled drill/training event with a fixed time window."""

    session_id: int
    title: str
    practice_date: date
    start_time: time
    end_time: time
    duration_minutes: int
    description: Optional[str] = None
    created_by: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "title": self.title,
            "description": self.description or "",
            "practice_date": self.practice_date.strftime("%Y-%m-%d"),
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
            "duration_minutes": self.duration_minutes,
        }
