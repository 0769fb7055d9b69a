from __future__ import annotations

from datetime import time
from typing import Optional

from ...common.datetime_utils import minutes_of_day
from ...core.exceptions import ValidationError
from ..model import AttendanceRecord
from .base import MarkDecision, MarkStrategy


class ManualMarkStrategy(MarkStrategy):
    """Overwrite both times at once; exit must come after entry."""

    def decide(self, *, current: Optional[AttendanceRecord], entry_time: Optional[time], exit_time: Optional[time]) -> MarkDecision:
        if entry_time is None or exit_time is None:
            raise ValidationError("Please enter both entry and exit times")
        if minutes_of_day(entry_time) >= minutes_of_day(exit_time):
            raise ValidationError("Exit time must be after entry time")
        return MarkDecision(entry_time=entry_time, exit_time=exit_time)
