from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, current_role, download, ok, optional_int, request_data
from ..container import Container
from ..core.enums import RecordKind
from .service import parse_record_kind


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/cadets/<int:cadet_id>/records/<kind>", methods=["GET"], endpoint="list_cadet_records")
    @admin_required
    def list_cadet_records(cadet_id: int, kind: str):
        kind = parse_record_kind(kind)
        records = container.record_service.list_for_cadet(cadet_id).to_dict()
        key = {
            RecordKind.ACHIEVEMENT: "achievements",
            RecordKind.DISCIPLINARY: "disciplinary",
            RecordKind.TRAINING_CAMP: "training_camps",
        }[kind]
        return ok(records=records[key])

    @app.route("/admin/cadets/<int:cadet_id>/records/<kind>", methods=["POST"], endpoint="add_cadet_record")
    @admin_required
    def add_cadet_record(cadet_id: int, kind: str):
        kind = parse_record_kind(kind)
        data = request_data()
        service = container.record_service

        if kind == RecordKind.ACHIEVEMENT:
            record = service.add_achievement(
                current_role=current_role(),
                cadet_id=cadet_id,
                achievement_type=data.get("achievement_type", ""),
                achievement_description=data.get("achievement_description"),
                date_achieved=parse_iso_date(data.get("date_achieved"), "Date achieved"),
                camp_name=data.get("camp_name"),
                certificate_no=data.get("certificate_no"),
            )
        elif kind == RecordKind.DISCIPLINARY:
            record = service.add_disciplinary_action(
                current_role=current_role(),
                cadet_id=cadet_id,
                offence=data.get("offence", ""),
                punishment=data.get("punishment"),
                date_of_action=parse_iso_date(data.get("date_of_action"), "Date of action"),
            )
        else:
            record = service.add_training_camp(
                current_role=current_role(),
                cadet_id=cadet_id,
                camp_name=data.get("camp_name", ""),
                camp_level=data.get("camp_level"),
                location=data.get("location"),
                duration_from=parse_iso_date(data.get("duration_from"), "Duration from"),
                duration_to=parse_iso_date(data.get("duration_to"), "Duration to"),
                remarks=data.get("remarks"),
            )
        return ok("Record added", status=201, record=record.to_dict())

    @app.route("/admin/records/<kind>/<int:record_id>", methods=["DELETE"], endpoint="delete_cadet_record")
    @admin_required
    def delete_cadet_record(kind: str, record_id: int):
        container.record_service.delete_record(current_role=current_role(), kind=kind, record_id=record_id)
        return ok("Record deleted")

    @app.route("/admin/achievements.csv", methods=["GET"], endpoint="achievements_csv")
    @admin_required
    def achievements_csv():
        filename, text = container.record_service.export_achievements_csv(
            platoon=request.args.get("platoon") or None,
            cadet_id=optional_int(request.args.get("cadet_id"), "Cadet"),
        )
        return download(text, filename=filename, mimetype="text/csv")

    @app.route("/admin/training-camps.csv", methods=["GET"], endpoint="training_camps_csv")
    @admin_required
    def training_camps_csv():
        filename, text = container.record_service.export_training_camps_csv(
            platoon=request.args.get("platoon") or None,
            cadet_id=optional_int(request.args.get("cadet_id"), "Cadet"),
        )
        return download(text, filename=filename, mimetype="text/csv")
