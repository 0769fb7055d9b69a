from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from ...attendance.model import AttendanceReportRow
from ...common.datetime_utils import format_hhmm
from ...core.constants import REPORT_COLUMN_WIDTHS
from .base import ReportFormatter

if TYPE_CHECKING:
    from ..service import SessionReport

_HEADERS = {
    "name": "Name",
    "app_no": "App No",
    "platoon": "Platoon",
    "entry": "Entry",
    "exit": "Exit",
    "percentage": "Att %",
}


def _cell(value: object, width: int, gutter: int = 1) -> str:
    # keep a one-space gutter so adjacent columns never touch
    return str(value)[: width - gutter].ljust(width)


def _line(values: dict) -> str:
    last = len(REPORT_COLUMN_WIDTHS) - 1
    cells = [
        _cell(values[key], width, gutter=0 if i == last else 1)
        for i, (key, width) in enumerate(REPORT_COLUMN_WIDTHS.items())
    ]
    return "".join(cells).rstrip()


class PlainTextReportFormatter(ReportFormatter):
    """Fixed-width text: header, summary, then present / left early / absent."""

    def _row(self, row: AttendanceReportRow) -> str:
        return _line(
            {
                "name": row.cadet_name,
                "app_no": row.application_number,
                "platoon": row.platoon or "-",
                "entry": format_hhmm(row.entry_time),
                "exit": format_hhmm(row.exit_time),
                "percentage": f"{row.attendance_percentage:.1f}%",
            }
        )

    def _section(self, label: str, rows: Sequence[AttendanceReportRow]) -> list[str]:
        header = _line(_HEADERS)
        lines = [f"{label} ({len(rows)})", header, "-" * len(header)]
        if rows:
            lines.extend(self._row(r) for r in rows)
        else:
            lines.append("(none)")
        lines.append("")
        return lines

    def render(self, report: "SessionReport") -> str:
        session = report.session
        lines = ["ATTENDANCE REPORT", "=" * 17]
        if session is not None:
            lines += [
                f"Session:  {session.title}",
                f"Date:     {session.practice_date.strftime('%Y-%m-%d')}",
                f"Time:     {format_hhmm(session.start_time)} - {format_hhmm(session.end_time)}",
                f"Duration: {session.duration_minutes} minutes",
            ]
        lines += [
            "",
            "SUMMARY",
            f"Present:    {report.present_count}",
            f"Left Early: {report.leave_early_count}",
            f"Absent:     {report.absent_count}",
            f"Total:      {report.total}",
            "",
        ]
        lines += self._section("PRESENT", report.present)
        lines += self._section("LEFT EARLY", report.leave_early)
        lines += self._section("ABSENT", report.absent)
        return "\n".join(lines)
