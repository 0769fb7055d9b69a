from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..service import SessionReport


class ReportFormatter(ABC):
    """Formatter interface (Strategy Pattern for report downloads)."""

    extension = "txt"

    @abstractmethod
    def render(self, report: "SessionReport") -> str:
        raise NotImplementedError
