from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Optional


def _iso(value: Optional[date]) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if value else None


@dataclass(frozen=True)
class Cadet:
    cadet_id: int
    application_number: str
    name_full: str
    name_with_initials: str
    date_of_birth: date
    age: Optional[int] = None
    platoon: Optional[str] = None
    rank: str = "Cadet"
    regiment_no: Optional[str] = None
    school_admission_no: Optional[str] = None
    blood_group: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date_of_birth"] = _iso(self.date_of_birth)
        data["created_at"] = self.created_at.isoformat(sep=" ") if self.created_at else None
        return data


@dataclass(frozen=True)
class NewCadet:
    """Registration form input, validated by CadetService."""

    application_number: str
    name_full: str
    date_of_birth: Optional[date]
    name_with_initials: Optional[str] = None
    platoon: Optional[str] = None
    rank: str = "Cadet"
    regiment_no: Optional[str] = None
    school_admission_no: Optional[str] = None
    blood_group: Optional[str] = None


@dataclass(frozen=True)
class FamilyContact:
    father_name: Optional[str] = None
    father_occupation: Optional[str] = None
    father_contact: Optional[str] = None
    mother_name: Optional[str] = None
    mother_occupation: Optional[str] = None
    mother_contact: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_contact: Optional[str] = None

    def is_empty(self) -> bool:
        return not any(asdict(self).values())

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MedicalRecord:
    issuance_party: Optional[str] = None
    date_of_issue: Optional[date] = None
    validity_end_date: Optional[date] = None
    medical_certificate_url: Optional[str] = None

    def is_empty(self) -> bool:
        return not any(asdict(self).values())

    def to_dict(self) -> dict:
        return {
            "issuance_party": self.issuance_party,
            "date_of_issue": _iso(self.date_of_issue),
            "validity_end_date": _iso(self.validity_end_date),
            "medical_certificate_url": self.medical_certificate_url,
        }


@dataclass(frozen=True)
class CadetProfile:
    cadet: Cadet
    family: Optional[FamilyContact] = None
    medical: Optional[MedicalRecord] = None

    def to_dict(self) -> dict:
        return {
            "cadet": self.cadet.to_dict(),
            "family": self.family.to_dict() if self.family else None,
            "medical": self.medical.to_dict() if self.medical else None,
        }


@dataclass(frozen=True)
class RegistrationResult:
    cadet: Cadet
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CadetStats:
    total: int
    junior: int
    senior: int
    recent: int
