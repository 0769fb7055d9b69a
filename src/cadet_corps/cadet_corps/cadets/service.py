from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import age_on
from ..common.validators import optional_text, require_admin, require_non_empty
from ..core.constants import JUNIOR_MIN_AGE, RECENT_JOIN_DAYS, SENIOR_MAX_AGE, SENIOR_MIN_AGE
from ..core.enums import Platoon, Role
from ..core.exceptions import NotFoundError, StorageError, ValidationError
from ..database.mysql_base import DuplicateKeyError
from .model import Cadet, CadetProfile, CadetStats, FamilyContact, MedicalRecord, NewCadet, RegistrationResult
from .repository import CadetRepository

logger = logging.getLogger(__name__)


def suggest_platoon(age: Optional[int]) -> Optional[Platoon]:
    """Junior below 14, Senior from 14 to 20, nothing outside 12-20."""
    if age is None or age < JUNIOR_MIN_AGE or age > SENIOR_MAX_AGE:
        return None
    if age < SENIOR_MIN_AGE:
        return Platoon.JUNIOR
    return Platoon.SENIOR


def _normalize_platoon(value: Optional[str]) -> Optional[str]:
    value = optional_text(value)
    if value is None:
        return None
    try:
        return Platoon(value.capitalize()).value
    except ValueError:
        raise ValidationError("Platoon must be Junior or Senior")


class CadetService:
    def __init__(self, cadets: CadetRepository):
        self._cadets = cadets

    def register_cadet(
        self,
        *,
        current_role: Role,
        cadet: NewCadet,
        family: Optional[FamilyContact] = None,
        medical: Optional[MedicalRecord] = None,
        today: Optional[date] = None,
    ) -> RegistrationResult:
        """Create a cadet, then attach family contacts and medical record.

        The cadet row is committed on its own. Failures on the follow-up
        inserts come back as warnings and leave the cadet in place.
        """
        require_admin(current_role)

        application_number = require_non_empty(cadet.application_number, "Application number")
        name_full = require_non_empty(cadet.name_full, "Full name")
        if cadet.date_of_birth is None:
            raise ValidationError("Date of birth is required")

        today = today or date.today()
        age = age_on(cadet.date_of_birth, today)
        if age < 0:
            raise ValidationError("Date of birth cannot be in the future")

        platoon = _normalize_platoon(cadet.platoon)
        if platoon is None:
            suggested = suggest_platoon(age)
            platoon = suggested.value if suggested else None

        cadet = replace(
            cadet,
            application_number=application_number,
            name_full=name_full,
            name_with_initials=optional_text(cadet.name_with_initials) or name_full,
            rank=optional_text(cadet.rank) or "Cadet",
            regiment_no=optional_text(cadet.regiment_no),
            school_admission_no=optional_text(cadet.school_admission_no),
            blood_group=optional_text(cadet.blood_group),
        )

        if self._cadets.get_by_application_number(application_number):
            raise ValidationError("A cadet with this application number already exists")
        try:
            cadet_id = self._cadets.create(cadet, age=age, platoon=platoon)
        except DuplicateKeyError:
            raise ValidationError("A cadet with this application number already exists")

        logger.info("Cadet %s registered (%s, platoon=%s)", cadet_id, application_number, platoon)

        warnings: list[str] = []
        if family and not family.is_empty():
            try:
                self._cadets.add_family_contact(cadet_id, family)
            except StorageError:
                logger.warning("Family contacts for cadet %s were not saved", cadet_id, exc_info=True)
                warnings.append("Cadet saved, but family contacts could not be stored")
        if medical and not medical.is_empty():
            try:
                self._cadets.add_medical_record(cadet_id, medical)
            except StorageError:
                logger.warning("Medical record for cadet %s was not saved", cadet_id, exc_info=True)
                warnings.append("Cadet saved, but the medical record could not be stored")

        stored = self._cadets.get_by_id(cadet_id) or Cadet(
            cadet_id=cadet_id,
            application_number=cadet.application_number,
            name_full=cadet.name_full,
            name_with_initials=cadet.name_with_initials or cadet.name_full,
            date_of_birth=cadet.date_of_birth,
            age=age,
            platoon=platoon,
            rank=cadet.rank,
            regiment_no=cadet.regiment_no,
            school_admission_no=cadet.school_admission_no,
            blood_group=cadet.blood_group,
        )
        return RegistrationResult(cadet=stored, warnings=warnings)

    def list_cadets(self, *, platoon: Optional[str] = None) -> Sequence[Cadet]:
        return self._cadets.list_all(platoon=_normalize_platoon(platoon))

    def get_cadet(self, cadet_id: int) -> Cadet:
        cadet = self._cadets.get_by_id(int(cadet_id))
        if not cadet:
            raise NotFoundError("Cadet not found")
        return cadet

    def get_profile(self, cadet_id: int) -> CadetProfile:
        cadet = self.get_cadet(cadet_id)
        return CadetProfile(
            cadet=cadet,
            family=self._cadets.get_family_contact(cadet.cadet_id),
            medical=self._cadets.get_medical_record(cadet.cadet_id),
        )

    def stats(self, *, today: date) -> CadetStats:
        cadets = self._cadets.list_all()
        cutoff = today - timedelta(days=RECENT_JOIN_DAYS)
        return CadetStats(
            total=len(cadets),
            junior=sum(1 for c in cadets if c.platoon == Platoon.JUNIOR.value),
            senior=sum(1 for c in cadets if c.platoon == Platoon.SENIOR.value),
            recent=sum(1 for c in cadets if c.created_at and c.created_at.date() >= cutoff),
        )

    def delete_cadet(self, *, current_role: Role, cadet_id: int) -> None:
        require_admin(current_role)
        if not self._cadets.delete(int(cadet_id)):
            raise NotFoundError("Cadet not found")
        logger.info("Cadet %s deleted", cadet_id)
