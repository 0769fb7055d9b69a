from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_hhmm
from ..common.web import admin_required, current_role, current_user_id, login_required, ok, optional_int, request_data
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    def _target_cadet_id(data: dict):
        """Students always mark themselves; admins name the cadet."""
        if current_role() == Role.ADMIN:
            cadet_id = optional_int(data.get("cadet_id"), "Cadet")
            if cadet_id is not None:
                return cadet_id
        return container.auth_service.current_user(current_user_id()).cadet_id

    @app.route("/sessions/<int:session_id>/entry", methods=["POST"], endpoint="mark_entry")
    @login_required
    def mark_entry(session_id: int):
        record = container.attendance_service.mark_entry(_target_cadet_id(request_data()), session_id)
        return ok("Entry time recorded", attendance=record.to_dict())

    @app.route("/sessions/<int:session_id>/exit", methods=["POST"], endpoint="mark_exit")
    @login_required
    def mark_exit(session_id: int):
        record = container.attendance_service.mark_exit(_target_cadet_id(request_data()), session_id)
        return ok("Exit time recorded", attendance=record.to_dict())

    @app.route("/sessions/<int:session_id>/manual", methods=["POST"], endpoint="manual_mark")
    @login_required
    def manual_mark(session_id: int):
        data = request_data()
        record = container.attendance_service.manual_mark(
            _target_cadet_id(data),
            session_id,
            parse_hhmm(data.get("entry_time"), "Entry time"),
            parse_hhmm(data.get("exit_time"), "Exit time"),
        )
        return ok("Attendance marked successfully", attendance=record.to_dict())

    @app.route("/me/attendance", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        cadet_id = container.auth_service.current_user(current_user_id()).cadet_id
        history = container.attendance_service.get_my_history(cadet_id)
        average = container.attendance_service.average_percentage(cadet_id)
        return ok(
            linked=cadet_id is not None,
            history=[h.to_dict() for h in history],
            average_percentage=round(average, 1),
        )

    @app.route("/admin/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="delete_attendance")
    @admin_required
    def delete_attendance(attendance_id: int):
        container.attendance_service.delete_record(current_role=current_role(), attendance_id=attendance_id)
        return ok("Attendance record deleted")
