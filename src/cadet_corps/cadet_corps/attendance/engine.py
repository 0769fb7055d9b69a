"""Attendance arithmetic and status classification.

Every function here is pure: callers pass the stored times and the session's
scheduled duration, and persist whatever comes back.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..common.datetime_utils import minutes_of_day
from ..core.constants import LEAVE_EARLY_THRESHOLD, PRESENT_THRESHOLD
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class DerivedAttendance:
    participation_minutes: int
    attendance_percentage: float
    attendance_status: AttendanceStatus


def compute_participation(entry_time: Optional[time], exit_time: Optional[time]) -> int:
    """Minutes between entry and exit.

    Missing times give 0. Exit before entry also gives 0 instead of an error;
    only the manual path rejects that ordering.
    """
    if entry_time is None or exit_time is None:
        return 0
    return max(0, minutes_of_day(exit_time) - minutes_of_day(entry_time))


def compute_percentage(participation_minutes: int, session_duration_minutes: Optional[int]) -> float:
    if not session_duration_minutes or session_duration_minutes <= 0:
        return 0.0
    pct = participation_minutes / session_duration_minutes * 100
    return min(100.0, max(0.0, pct))


def classify_status(percentage: float) -> AttendanceStatus:
    if percentage >= PRESENT_THRESHOLD:
        return AttendanceStatus.PRESENT
    if percentage >= LEAVE_EARLY_THRESHOLD:
        return AttendanceStatus.LEAVE_EARLY
    return AttendanceStatus.ABSENT


def derive(entry_time: Optional[time], exit_time: Optional[time], session_duration_minutes: Optional[int]) -> DerivedAttendance:
    minutes = compute_participation(entry_time, exit_time)
    pct = compute_percentage(minutes, session_duration_minutes)
    return DerivedAttendance(
        participation_minutes=minutes,
        attendance_percentage=pct,
        attendance_status=classify_status(pct),
    )
