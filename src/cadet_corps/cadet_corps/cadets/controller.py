from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text
from ..common.web import admin_required, current_role, ok, request_data
from ..container import Container
from .model import FamilyContact, MedicalRecord, NewCadet

_FAMILY_FIELDS = (
    "father_name",
    "father_occupation",
    "father_contact",
    "mother_name",
    "mother_occupation",
    "mother_contact",
    "guardian_name",
    "guardian_contact",
)


def _family_from(data: dict) -> FamilyContact:
    return FamilyContact(**{f: optional_text(data.get(f)) for f in _FAMILY_FIELDS})


def _medical_from(data: dict) -> MedicalRecord:
    return MedicalRecord(
        issuance_party=optional_text(data.get("issuance_party")),
        date_of_issue=parse_iso_date(data.get("date_of_issue"), "Date of issue"),
        validity_end_date=parse_iso_date(data.get("validity_end_date"), "Validity end date"),
        medical_certificate_url=optional_text(data.get("medical_certificate_url")),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/cadets", methods=["GET"], endpoint="list_cadets")
    @admin_required
    def list_cadets():
        cadets = container.cadet_service.list_cadets(platoon=request.args.get("platoon"))
        return ok(cadets=[c.to_dict() for c in cadets])

    @app.route("/admin/cadets", methods=["POST"], endpoint="register_cadet")
    @admin_required
    def register_cadet():
        data = request_data()
        new_cadet = NewCadet(
            application_number=data.get("application_number", ""),
            name_full=data.get("name_full", ""),
            name_with_initials=data.get("name_with_initials"),
            date_of_birth=parse_iso_date(data.get("date_of_birth"), "Date of birth"),
            platoon=data.get("platoon"),
            rank=data.get("rank") or "Cadet",
            regiment_no=data.get("regiment_no"),
            school_admission_no=data.get("school_admission_no"),
            blood_group=data.get("blood_group"),
        )
        result = container.cadet_service.register_cadet(
            current_role=current_role(),
            cadet=new_cadet,
            family=_family_from(data.get("family") or {}),
            medical=_medical_from(data.get("medical") or {}),
        )
        message = "Cadet registered" if not result.warnings else "Cadet registered with warnings"
        return ok(message, status=201, cadet=result.cadet.to_dict(), warnings=result.warnings)

    @app.route("/admin/cadets/stats", methods=["GET"], endpoint="cadet_stats")
    @admin_required
    def cadet_stats():
        stats = container.cadet_service.stats(today=date.today())
        return ok(total=stats.total, junior=stats.junior, senior=stats.senior, recent=stats.recent)

    @app.route("/admin/cadets/<int:cadet_id>", methods=["GET"], endpoint="get_cadet")
    @admin_required
    def get_cadet(cadet_id: int):
        return ok(profile=container.cadet_service.get_profile(cadet_id).to_dict())

    @app.route("/admin/cadets/<int:cadet_id>", methods=["DELETE"], endpoint="delete_cadet")
    @admin_required
    def delete_cadet(cadet_id: int):
        container.cadet_service.delete_cadet(current_role=current_role(), cadet_id=cadet_id)
        return ok("Cadet deleted")
