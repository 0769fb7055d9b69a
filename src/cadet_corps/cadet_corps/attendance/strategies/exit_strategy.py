from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.exceptions import ValidationError
from ..model import AttendanceRecord
from .base import MarkDecision, MarkStrategy


class ExitMarkStrategy(MarkStrategy):
    """Set the exit time, keep whatever entry time is already stored."""

    def decide(self, *, current: Optional[AttendanceRecord], entry_time: Optional[time], exit_time: Optional[time]) -> MarkDecision:
        if exit_time is None:
            raise ValidationError("Exit time is required")
        return MarkDecision(entry_time=current.entry_time if current else None, exit_time=exit_time)
