from __future__ import annotations

from datetime import date

import pytest

from src.cadet_corps.cadet_corps.core.enums import RecordKind, Role
from src.cadet_corps.cadet_corps.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.cadet_corps.cadet_corps.records.service import RecordService


@pytest.fixture
def svc(records_repo, cadets_repo):
    return RecordService(records_repo, cadets_repo)


def test_add_and_list_all_three_kinds(svc, cadets_repo):
    cadet = cadets_repo.add()

    svc.add_achievement(current_role=Role.ADMIN, cadet_id=cadet.cadet_id, achievement_type="Best Cadet", date_achieved=date(2026, 1, 10))
    svc.add_disciplinary_action(current_role=Role.ADMIN, cadet_id=cadet.cadet_id, offence="Late for parade", punishment="Warning")
    svc.add_training_camp(
        current_role=Role.ADMIN,
        cadet_id=cadet.cadet_id,
        camp_name="Annual Camp",
        duration_from=date(2026, 1, 1),
        duration_to=date(2026, 1, 7),
    )

    records = svc.list_for_cadet(cadet.cadet_id)
    assert [a.achievement_type for a in records.achievements] == ["Best Cadet"]
    assert [d.offence for d in records.disciplinary] == ["Late for parade"]
    assert [t.camp_name for t in records.training_camps] == ["Annual Camp"]


def test_add_requires_admin_cadet_and_fields(svc, cadets_repo):
    cadet = cadets_repo.add()

    with pytest.raises(AuthorizationError):
        svc.add_achievement(current_role=Role.STUDENT, cadet_id=cadet.cadet_id, achievement_type="X")
    with pytest.raises(NotFoundError):
        svc.add_achievement(current_role=Role.ADMIN, cadet_id=999, achievement_type="X")
    with pytest.raises(ValidationError):
        svc.add_disciplinary_action(current_role=Role.ADMIN, cadet_id=cadet.cadet_id, offence="")
    with pytest.raises(ValidationError):
        svc.add_training_camp(
            current_role=Role.ADMIN,
            cadet_id=cadet.cadet_id,
            camp_name="Camp",
            duration_from=date(2026, 1, 7),
            duration_to=date(2026, 1, 1),
        )


def test_delete_by_kind(svc, records_repo, cadets_repo):
    cadet = cadets_repo.add()
    achievement = svc.add_achievement(current_role=Role.ADMIN, cadet_id=cadet.cadet_id, achievement_type="Drill")

    svc.delete_record(current_role=Role.ADMIN, kind="achievements", record_id=achievement.achievement_id)
    assert records_repo.achievements == {}

    with pytest.raises(NotFoundError):
        svc.delete_record(current_role=Role.ADMIN, kind=RecordKind.ACHIEVEMENT, record_id=achievement.achievement_id)
    with pytest.raises(ValidationError):
        svc.delete_record(current_role=Role.ADMIN, kind="medals", record_id=1)


def test_achievement_export_columns_and_platoon_filter(svc, cadets_repo):
    junior = cadets_repo.add(name="Kamal", application_number="J1", platoon="Junior")
    senior = cadets_repo.add(name="Ruwan", application_number="S1", platoon="Senior")
    svc.add_achievement(current_role=Role.ADMIN, cadet_id=junior.cadet_id, achievement_type="Shooting", certificate_no="C-1")
    svc.add_achievement(current_role=Role.ADMIN, cadet_id=senior.cadet_id, achievement_type="Drill")

    filename, text = svc.export_achievements_csv(platoon="Junior")

    lines = text.strip().splitlines()
    assert lines[0] == "Cadet Name,App No,Platoon,Achievement Type,Description,Date Achieved,Camp/Event Name,Certificate No"
    assert lines[1:] == ["Kamal,J1,Junior,Shooting,,,,C-1"]
    assert filename == "achievements_junior.csv"


def test_training_camp_export(svc, cadets_repo):
    cadet = cadets_repo.add(name="Kamal", application_number="J1")
    svc.add_training_camp(
        current_role=Role.ADMIN,
        cadet_id=cadet.cadet_id,
        camp_name="Annual Camp",
        camp_level="National",
        location="Diyatalawa",
        duration_from=date(2026, 1, 1),
        duration_to=date(2026, 1, 7),
    )

    _, text = svc.export_training_camps_csv(cadet_id=cadet.cadet_id)

    assert text.splitlines()[1] == "Annual Camp,National,Diyatalawa,2026-01-01,2026-01-07,Kamal,J1,Junior,"
