from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, download, ok, optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/sessions/<int:session_id>/report", methods=["GET"], endpoint="session_report")
    @admin_required
    def session_report(session_id: int):
        report = container.report_service.build_session_report(session_id)
        return ok(report=report.to_dict())

    @app.route("/admin/sessions/<int:session_id>/report.txt", methods=["GET"], endpoint="session_report_txt")
    @admin_required
    def session_report_txt(session_id: int):
        filename, text = container.report_service.download_session_report(session_id)
        return download(text, filename=filename, mimetype="text/plain")

    @app.route("/admin/attendance.csv", methods=["GET"], endpoint="attendance_csv")
    @admin_required
    def attendance_csv():
        filename, text = container.report_service.export_attendance_csv(
            start=parse_iso_date(request.args.get("start"), "Start date"),
            end=parse_iso_date(request.args.get("end"), "End date"),
            platoon=request.args.get("platoon") or None,
            cadet_id=optional_int(request.args.get("cadet_id"), "Cadet"),
        )
        return download(text, filename=filename, mimetype="text/csv")
