from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_hhmm, parse_iso_date
from ..common.web import admin_required, current_role, current_user_id, login_required, ok, request_data
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/sessions", methods=["GET"], endpoint="list_sessions")
    @login_required
    def list_sessions():
        sessions = container.session_service.list_sessions(
            start=parse_iso_date(request.args.get("start"), "Start date"),
            end=parse_iso_date(request.args.get("end"), "End date"),
        )
        return ok(sessions=[s.to_dict() for s in sessions])

    @app.route("/sessions/upcoming", methods=["GET"], endpoint="upcoming_sessions")
    @login_required
    def upcoming_sessions():
        sessions = container.session_service.list_upcoming(today=date.today())
        return ok(sessions=[s.to_dict() for s in sessions])

    @app.route("/sessions", methods=["POST"], endpoint="create_session")
    @admin_required
    def create_session():
        data = request_data()
        practice = container.session_service.create_session(
            current_role=current_role(),
            title=data.get("title", ""),
            description=data.get("description"),
            practice_date=parse_iso_date(data.get("practice_date"), "Practice date"),
            start_time=parse_hhmm(data.get("start_time"), "Start time"),
            end_time=parse_hhmm(data.get("end_time"), "End time"),
            created_by=current_user_id(),
        )
        return ok("Practice session created", status=201, session=practice.to_dict())

    @app.route("/sessions/<int:session_id>", methods=["GET"], endpoint="get_session")
    @login_required
    def get_session(session_id: int):
        return ok(session=container.session_service.get_session(session_id).to_dict())

    @app.route("/sessions/<int:session_id>", methods=["DELETE"], endpoint="delete_session")
    @admin_required
    def delete_session(session_id: int):
        container.session_service.delete_session(current_role=current_role(), session_id=session_id)
        return ok("Practice session deleted")
