from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RecordKind
from .model import Achievement, AchievementReportRow, DisciplinaryAction, TrainingCamp, TrainingCampReportRow


class RecordRepository(Protocol):
    def add_achievement(
        self,
        *,
        cadet_id: int,
        achievement_type: str,
        achievement_description: Optional[str],
        date_achieved: Optional[date],
        camp_name: Optional[str],
        certificate_no: Optional[str],
    ) -> int:
        raise NotImplementedError

    def add_disciplinary_action(
        self,
        *,
        cadet_id: int,
        date_of_action: Optional[date],
        offence: str,
        punishment: Optional[str],
    ) -> int:
        raise NotImplementedError

    def add_training_camp(
        self,
        *,
        cadet_id: int,
        camp_name: str,
        camp_level: Optional[str],
        location: Optional[str],
        duration_from: Optional[date],
        duration_to: Optional[date],
        remarks: Optional[str],
    ) -> int:
        raise NotImplementedError

    def list_achievements(self, cadet_id: int) -> Sequence[Achievement]:
        raise NotImplementedError

    def list_disciplinary_actions(self, cadet_id: int) -> Sequence[DisciplinaryAction]:
        raise NotImplementedError

    def list_training_camps(self, cadet_id: int) -> Sequence[TrainingCamp]:
        raise NotImplementedError

    def delete(self, kind: RecordKind, record_id: int) -> bool:
        raise NotImplementedError

    def achievement_report_rows(
        self, *, platoon: Optional[str] = None, cadet_id: Optional[int] = None
    ) -> Sequence[AchievementReportRow]:
        raise NotImplementedError

    def training_camp_report_rows(
        self, *, platoon: Optional[str] = None, cadet_id: Optional[int] = None
    ) -> Sequence[TrainingCampReportRow]:
        raise NotImplementedError
