from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..model import AttendanceRecord


@dataclass(frozen=True)
class MarkDecision:
    entry_time: Optional[time]
    exit_time: Optional[time]


class MarkStrategy(ABC):
    """Strategy Pattern: decide which times a write leaves on the record."""

    @abstractmethod
    def decide(
        self,
        *,
        current: Optional[AttendanceRecord],
        entry_time: Optional[time],
        exit_time: Optional[time],
    ) -> MarkDecision:
        raise NotImplementedError
