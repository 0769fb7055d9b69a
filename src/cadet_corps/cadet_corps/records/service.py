from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from ..cadets.repository import CadetRepository
from ..common.csv_export import write_csv
from ..common.validators import optional_text, require_admin, require_non_empty
from ..core.enums import RecordKind, Role
from ..core.exceptions import NotFoundError, ValidationError
from .model import Achievement, CadetRecords, DisciplinaryAction, TrainingCamp
from .repository import RecordRepository

logger = logging.getLogger(__name__)

ACHIEVEMENT_CSV_FIELDS = [
    "Cadet Name",
    "App No",
    "Platoon",
    "Achievement Type",
    "Description",
    "Date Achieved",
    "Camp/Event Name",
    "Certificate No",
]

TRAINING_CAMP_CSV_FIELDS = [
    "Camp Name",
    "Level",
    "Location",
    "Duration From",
    "Duration To",
    "Cadet Name",
    "Application Number",
    "Platoon",
    "Remarks",
]


def _iso(value: Optional[date]) -> str:
    return value.strftime("%Y-%m-%d") if value else ""


def parse_record_kind(value: str) -> RecordKind:
    try:
        return RecordKind(value)
    except ValueError:
        raise ValidationError(f"Unknown record type: {value}")


class RecordService:
    def __init__(self, records: RecordRepository, cadets: CadetRepository):
        self._records = records
        self._cadets = cadets

    def _require_cadet(self, cadet_id: int) -> int:
        if not self._cadets.get_by_id(int(cadet_id)):
            raise NotFoundError("Cadet not found")
        return int(cadet_id)

    def add_achievement(
        self,
        *,
        current_role: Role,
        cadet_id: int,
        achievement_type: str,
        achievement_description: Optional[str] = None,
        date_achieved: Optional[date] = None,
        camp_name: Optional[str] = None,
        certificate_no: Optional[str] = None,
    ) -> Achievement:
        require_admin(current_role)
        achievement_type = require_non_empty(achievement_type, "Achievement type")
        cadet_id = self._require_cadet(cadet_id)

        record = Achievement(
            achievement_id=0,
            cadet_id=cadet_id,
            achievement_type=achievement_type,
            achievement_description=optional_text(achievement_description),
            date_achieved=date_achieved,
            camp_name=optional_text(camp_name),
            certificate_no=optional_text(certificate_no),
        )
        new_id = self._records.add_achievement(
            cadet_id=cadet_id,
            achievement_type=record.achievement_type,
            achievement_description=record.achievement_description,
            date_achieved=record.date_achieved,
            camp_name=record.camp_name,
            certificate_no=record.certificate_no,
        )
        logger.info("Achievement %s added for cadet %s", new_id, cadet_id)
        return replace(record, achievement_id=new_id)

    def add_disciplinary_action(
        self,
        *,
        current_role: Role,
        cadet_id: int,
        offence: str,
        punishment: Optional[str] = None,
        date_of_action: Optional[date] = None,
    ) -> DisciplinaryAction:
        require_admin(current_role)
        offence = require_non_empty(offence, "Offence")
        cadet_id = self._require_cadet(cadet_id)

        new_id = self._records.add_disciplinary_action(
            cadet_id=cadet_id,
            date_of_action=date_of_action,
            offence=offence,
            punishment=optional_text(punishment),
        )
        logger.info("Disciplinary action %s added for cadet %s", new_id, cadet_id)
        return DisciplinaryAction(
            action_id=new_id,
            cadet_id=cadet_id,
            date_of_action=date_of_action,
            offence=offence,
            punishment=optional_text(punishment),
        )

    def add_training_camp(
        self,
        *,
        current_role: Role,
        cadet_id: int,
        camp_name: str,
        camp_level: Optional[str] = None,
        location: Optional[str] = None,
        duration_from: Optional[date] = None,
        duration_to: Optional[date] = None,
        remarks: Optional[str] = None,
    ) -> TrainingCamp:
        require_admin(current_role)
        camp_name = require_non_empty(camp_name, "Camp name")
        if duration_from and duration_to and duration_to < duration_from:
            raise ValidationError("Camp end date must not be before its start date")
        cadet_id = self._require_cadet(cadet_id)

        camp = TrainingCamp(
            camp_id=0,
            cadet_id=cadet_id,
            camp_name=camp_name,
            camp_level=optional_text(camp_level),
            location=optional_text(location),
            duration_from=duration_from,
            duration_to=duration_to,
            remarks=optional_text(remarks),
        )
        new_id = self._records.add_training_camp(
            cadet_id=cadet_id,
            camp_name=camp.camp_name,
            camp_level=camp.camp_level,
            location=camp.location,
            duration_from=camp.duration_from,
            duration_to=camp.duration_to,
            remarks=camp.remarks,
        )
        logger.info("Training camp %s added for cadet %s", new_id, cadet_id)
        return replace(camp, camp_id=new_id)

    def list_for_cadet(self, cadet_id: int) -> CadetRecords:
        cadet_id = self._require_cadet(cadet_id)
        return CadetRecords(
            achievements=list(self._records.list_achievements(cadet_id)),
            disciplinary=list(self._records.list_disciplinary_actions(cadet_id)),
            training_camps=list(self._records.list_training_camps(cadet_id)),
        )

    def delete_record(self, *, current_role: Role, kind: RecordKind | str, record_id: int) -> None:
        require_admin(current_role)
        kind = parse_record_kind(kind) if isinstance(kind, str) else kind
        if not self._records.delete(kind, int(record_id)):
            raise NotFoundError("Record not found")
        logger.info("Deleted %s record %s", kind.value, record_id)

    def export_achievements_csv(self, *, platoon: Optional[str] = None, cadet_id: Optional[int] = None) -> tuple[str, str]:
        rows = self._records.achievement_report_rows(platoon=platoon, cadet_id=cadet_id)
        text = write_csv(
            ACHIEVEMENT_CSV_FIELDS,
            (
                {
                    "Cadet Name": r.cadet_name,
                    "App No": r.application_number,
                    "Platoon": r.platoon or "",
                    "Achievement Type": r.achievement.achievement_type,
                    "Description": r.achievement.achievement_description or "",
                    "Date Achieved": _iso(r.achievement.date_achieved),
                    "Camp/Event Name": r.achievement.camp_name or "",
                    "Certificate No": r.achievement.certificate_no or "",
                }
                for r in rows
            ),
        )
        return f"achievements_{(platoon or 'all').lower()}.csv", text

    def export_training_camps_csv(self, *, platoon: Optional[str] = None, cadet_id: Optional[int] = None) -> tuple[str, str]:
        rows = self._records.training_camp_report_rows(platoon=platoon, cadet_id=cadet_id)
        text = write_csv(
            TRAINING_CAMP_CSV_FIELDS,
            (
                {
                    "Camp Name": r.camp.camp_name,
                    "Level": r.camp.camp_level or "",
                    "Location": r.camp.location or "",
                    "Duration From": _iso(r.camp.duration_from),
                    "Duration To": _iso(r.camp.duration_to),
                    "Cadet Name": r.cadet_name,
                    "Application Number": r.application_number,
                    "Platoon": r.platoon or "",
                    "Remarks": r.camp.remarks or "",
                }
                for r in rows
            ),
        )
        return f"training_camps_{(platoon or 'all').lower()}.csv", text
