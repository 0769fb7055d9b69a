from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


def _iso(value: Optional[date]) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if value else None


@dataclass(frozen=True)
class Achievement:
    achievement_id: int
    cadet_id: int
    achievement_type: str
    achievement_description: Optional[str] = None
    date_achieved: Optional[date] = None
    camp_name: Optional[str] = None
    certificate_no: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "achievement_id": self.achievement_id,
            "cadet_id": self.cadet_id,
            "achievement_type": self.achievement_type,
            "achievement_description": self.achievement_description,
            "date_achieved": _iso(self.date_achieved),
            "camp_name": self.camp_name,
            "certificate_no": self.certificate_no,
        }


@dataclass(frozen=True)
class DisciplinaryAction:
    action_id: int
    cadet_id: int
    offence: str
    punishment: Optional[str] = None
    date_of_action: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "action_id": self.action_id,
            "cadet_id": self.cadet_id,
            "date_of_action": _iso(self.date_of_action),
            "offence": self.offence,
            "punishment": self.punishment,
        }


@dataclass(frozen=True)
class TrainingCamp:
    camp_id: int
    cadet_id: int
    camp_name: str
    camp_level: Optional[str] = None
    location: Optional[str] = None
    duration_from: Optional[date] = None
    duration_to: Optional[date] = None
    remarks: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "camp_id": self.camp_id,
            "cadet_id": self.cadet_id,
            "camp_name": self.camp_name,
            "camp_level": self.camp_level,
            "location": self.location,
            "duration_from": _iso(self.duration_from),
            "duration_to": _iso(self.duration_to),
            "remarks": self.remarks,
        }


@dataclass(frozen=True)
class CadetRecords:
    achievements: list[Achievement] = field(default_factory=list)
    disciplinary: list[DisciplinaryAction] = field(default_factory=list)
    training_camps: list[TrainingCamp] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "achievements": [a.to_dict() for a in self.achievements],
            "disciplinary": [d.to_dict() for d in self.disciplinary],
            "training_camps": [t.to_dict() for t in self.training_camps],
        }


@dataclass(frozen=True)
class AchievementReportRow:
    """Read-model for the achievements export (record joined with its cadet)."""

    achievement: Achievement
    cadet_name: str
    application_number: str
    platoon: Optional[str]


@dataclass(frozen=True)
class TrainingCampReportRow:
    camp: TrainingCamp
    cadet_name: str
    application_number: str
    platoon: Optional[str]
