from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, current_role, current_user_id, login_required, ok, request_data
from ..container import Container
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/linking", methods=["GET"], endpoint="my_linking_request")
    @login_required
    def my_linking_request():
        latest = container.linking_service.latest_for_user(current_user_id())
        return ok(request=latest.to_dict() if latest else None)

    @app.route("/linking", methods=["POST"], endpoint="submit_linking_request")
    @login_required
    def submit_linking_request():
        data = request_data()
        request_id = container.linking_service.submit(
            user_id=current_user_id(),
            application_number=data.get("application_number", ""),
            full_name=data.get("full_name", ""),
            date_of_birth=parse_iso_date(data.get("date_of_birth"), "Date of birth"),
            additional_info=data.get("additional_info"),
        )
        return ok("Linking request submitted", status=201, request_id=request_id)

    @app.route("/admin/linking", methods=["GET"], endpoint="list_linking_requests")
    @admin_required
    def list_linking_requests():
        status_s = request.args.get("status")
        try:
            status = RequestStatus(status_s) if status_s else None
        except ValueError:
            raise ValidationError("Unknown request status")
        requests = container.linking_service.list_all(status=status)
        return ok(requests=[r.to_dict() for r in requests])

    @app.route("/admin/linking/<int:request_id>/approve", methods=["POST"], endpoint="approve_linking_request")
    @admin_required
    def approve_linking_request(request_id: int):
        container.linking_service.approve(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            request_id=request_id,
            admin_notes=request_data().get("admin_notes", ""),
        )
        return ok("Linking request approved")

    @app.route("/admin/linking/<int:request_id>/reject", methods=["POST"], endpoint="reject_linking_request")
    @admin_required
    def reject_linking_request(request_id: int):
        container.linking_service.reject(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            request_id=request_id,
            admin_notes=request_data().get("admin_notes", ""),
        )
        return ok("Linking request rejected")
