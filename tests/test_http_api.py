from __future__ import annotations

from datetime import time

from src.cadet_corps.cadet_corps.core.enums import Role

BOM = "\ufeff".encode("utf-8")


def _login(client, users_repo, *, role=Role.STUDENT, email="cadet@school.lk", cadet_id=None):
    users_repo.add(email=email, password="secret1", role=role, cadet_id=cadet_id)
    resp = client.post("/login", json={"email": email, "password": "secret1"})
    assert resp.status_code == 200
    return resp.get_json()["user"]


def test_login_rejects_bad_password(client, users_repo):
    users_repo.add(password="secret1")

    resp = client.post("/login", json={"email": "cadet@school.lk", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Invalid email or password"}


def test_protected_routes_need_login(client):
    assert client.get("/me").status_code == 401
    assert client.post("/sessions/1/entry").status_code == 401


def test_student_cannot_reach_admin_routes(client, users_repo):
    _login(client, users_repo)

    resp = client.get("/admin/cadets")

    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Administrator access required"


def test_student_marks_entry_and_exit_for_linked_cadet(client, users_repo, cadets_repo, sessions_repo, attendance_repo):
    cadet = cadets_repo.add()
    practice = sessions_repo.add()
    _login(client, users_repo, cadet_id=cadet.cadet_id)

    entry = client.post(f"/sessions/{practice.session_id}/entry")
    exit_ = client.post(f"/sessions/{practice.session_id}/exit")

    assert entry.status_code == 200
    assert exit_.status_code == 200
    record = attendance_repo.get(practice.session_id, cadet.cadet_id)
    assert record.entry_time is not None
    assert record.exit_time is not None


def test_unlinked_student_cannot_mark(client, users_repo, sessions_repo):
    practice = sessions_repo.add()
    _login(client, users_repo)

    resp = client.post(f"/sessions/{practice.session_id}/entry")

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Your account is not linked to a cadet profile"


def test_admin_manual_mark(client, users_repo, cadets_repo, sessions_repo):
    cadet = cadets_repo.add()
    practice = sessions_repo.add(start=time(9, 0), end=time(11, 0))
    _login(client, users_repo, role=Role.ADMIN, email="admin@cadets.local")

    bad = client.post(
        f"/sessions/{practice.session_id}/manual",
        json={"cadet_id": cadet.cadet_id, "entry_time": "10:00", "exit_time": "09:00"},
    )
    good = client.post(
        f"/sessions/{practice.session_id}/manual",
        json={"cadet_id": cadet.cadet_id, "entry_time": "09:00", "exit_time": "10:00"},
    )

    assert bad.status_code == 400
    assert bad.get_json()["message"] == "Exit time must be after entry time"
    assert good.status_code == 200
    body = good.get_json()["attendance"]
    assert body["participation_minutes"] == 60
    assert body["attendance_status"] == "leave_early"


def test_session_report_download(client, users_repo, cadets_repo, sessions_repo):
    cadet = cadets_repo.add(name="Kamal Perera")
    practice = sessions_repo.add(title="Morning Drill")
    _login(client, users_repo, role=Role.ADMIN, email="admin@cadets.local")
    client.post(
        f"/sessions/{practice.session_id}/manual",
        json={"cadet_id": cadet.cadet_id, "entry_time": "09:00", "exit_time": "11:00"},
    )

    resp = client.get(f"/admin/sessions/{practice.session_id}/report.txt")

    assert resp.status_code == 200
    assert resp.mimetype == "text/plain"
    assert "attendance-report-2026-03-01-Morning-Drill.txt" in resp.headers["Content-Disposition"]
    assert resp.data.startswith(BOM)
    text = resp.data[len(BOM):].decode("utf-8")
    assert text.startswith("ATTENDANCE REPORT")
    assert "PRESENT (1)" in text
    assert "Kamal Perera" in text


def test_session_report_unknown_session_is_404(client, users_repo):
    _login(client, users_repo, role=Role.ADMIN, email="admin@cadets.local")

    assert client.get("/admin/sessions/99/report.txt").status_code == 404


def test_attendance_csv_export(client, users_repo):
    _login(client, users_repo, role=Role.ADMIN, email="admin@cadets.local")

    resp = client.get("/admin/attendance.csv")
    bad = client.get("/admin/attendance.csv?start=01-03-2026")

    assert resp.status_code == 200
    assert "attendance_all.csv" in resp.headers["Content-Disposition"]
    assert resp.data[len(BOM):].decode("utf-8").startswith("Regiment No.,Name,Platoon")
    assert bad.status_code == 400


def test_linking_flow_over_http(client, users_repo, cadets_repo):
    cadet = cadets_repo.add(application_number="A001")
    student = _login(client, users_repo)
    submitted = client.post("/linking", json={"application_number": "A001", "full_name": "Cadet One"})
    request_id = submitted.get_json()["request_id"]
    client.post("/logout")

    _login(client, users_repo, role=Role.ADMIN, email="admin@cadets.local")
    approved = client.post(f"/admin/linking/{request_id}/approve", json={"admin_notes": "ok"})

    assert submitted.status_code == 201
    assert approved.status_code == 200
    assert users_repo.get_by_id(student["user_id"]).cadet_id == cadet.cadet_id


def test_sub_minute_session_window_is_rejected(client, users_repo, sessions_repo):
    _login(client, users_repo, role=Role.ADMIN, email="admin@cadets.local")

    resp = client.post(
        "/sessions",
        json={"title": "Drill", "practice_date": "2026-03-01", "start_time": "09:00:10", "end_time": "09:00:50"},
    )

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "End time must be after start time"
    assert sessions_repo.sessions == {}


def test_report_download_with_non_ascii_title(client, users_repo, sessions_repo):
    practice = sessions_repo.add(title="පෙළපාළිය Drill")
    _login(client, users_repo, role=Role.ADMIN, email="admin@cadets.local")

    resp = client.get(f"/admin/sessions/{practice.session_id}/report.txt")

    assert resp.status_code == 200
    disposition = resp.headers["Content-Disposition"]
    disposition.encode("latin-1")
    assert disposition.startswith("attachment")
    assert "filename*=UTF-8''attendance-report-2026-03-01-" in disposition
    assert "Session:  පෙළපාළිය Drill" in resp.data[len(BOM):].decode("utf-8")


def test_report_download_quotes_title_with_separator(client, users_repo, sessions_repo):
    practice = sessions_repo.add(title="Drill; Parade")
    _login(client, users_repo, role=Role.ADMIN, email="admin@cadets.local")

    resp = client.get(f"/admin/sessions/{practice.session_id}/report.txt")

    assert resp.status_code == 200
    assert '"attendance-report-2026-03-01-Drill;-Parade.txt"' in resp.headers["Content-Disposition"]
