from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import MarkKind
from ..core.exceptions import ValidationError
from .strategies.base import MarkStrategy
from .strategies.entry_strategy import EntryMarkStrategy
from .strategies.exit_strategy import ExitMarkStrategy
from .strategies.manual_strategy import ManualMarkStrategy


@dataclass
class MarkStrategyFactory:
    """Factory Pattern: choose the strategy for a kind of attendance write."""

    def for_kind(self, kind: MarkKind | str) -> MarkStrategy:
        try:
            kind = MarkKind(kind)
        except ValueError:
            raise ValidationError(f"Unknown mark kind: {kind!r}")

        if kind == MarkKind.ENTRY:
            return EntryMarkStrategy()
        return ExitMarkStrategy()

    def for_manual(self) -> MarkStrategy:
        return ManualMarkStrategy()
