from __future__ import annotations

from datetime import time
from typing import Optional

from ...core.exceptions import ValidationError
from ..model import AttendanceRecord
from .base import MarkDecision, MarkStrategy


class EntryMarkStrategy(MarkStrategy):
    """Set the entry time, keep whatever exit time is already stored."""

    def decide(self, *, current: Optional[AttendanceRecord], entry_time: Optional[time], exit_time: Optional[time]) -> MarkDecision:
        if entry_time is None:
            raise ValidationError("Entry time is required")
        return MarkDecision(entry_time=entry_time, exit_time=current.exit_time if current else None)
