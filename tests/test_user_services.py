from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from src.cadet_corps.cadet_corps.core.enums import Role
from src.cadet_corps.cadet_corps.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from src.cadet_corps.cadet_corps.users.service import AuthService, UserService


def test_auth_returns_session_user(users_repo):
    user = users_repo.add(email="cadet@school.lk", password="secret1", cadet_id=7)

    s_user = AuthService(users_repo).authenticate(" Cadet@School.lk ", "secret1")

    assert s_user.user_id == user.user_id
    assert s_user.role == Role.STUDENT
    assert s_user.cadet_id == 7


def test_auth_wrong_password_raises(users_repo):
    users_repo.add(password="right-one")

    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("cadet@school.lk", "wrong")


def test_auth_inactive_or_unknown_raises(users_repo):
    users_repo.add(email="gone@school.lk", is_active=False)

    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("gone@school.lk", "secret1")
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("nobody@school.lk", "secret1")


def test_create_student_account(users_repo):
    svc = UserService(users_repo)

    user_id = svc.create_student_account(current_role=Role.ADMIN, email="New@School.lk", full_name="New", password="abcdef")

    user = users_repo.get_by_id(user_id)
    assert user.email == "new@school.lk"
    assert user.role == Role.STUDENT
    assert check_password_hash(user.password_hash, "abcdef")


def test_create_student_account_rules(users_repo):
    svc = UserService(users_repo)
    users_repo.add(email="taken@school.lk")

    with pytest.raises(AuthorizationError):
        svc.create_student_account(current_role=Role.STUDENT, email="x@school.lk", full_name=None, password="abcdef")
    with pytest.raises(ValidationError):
        svc.create_student_account(current_role=Role.ADMIN, email="x@school.lk", full_name=None, password="abc")
    with pytest.raises(ValidationError):
        svc.create_student_account(current_role=Role.ADMIN, email="taken@school.lk", full_name=None, password="abcdef")
    with pytest.raises(ValidationError):
        svc.create_student_account(current_role=Role.ADMIN, email="not-an-email", full_name=None, password="abcdef")


def test_change_password(users_repo):
    user = users_repo.add()
    svc = UserService(users_repo)

    with pytest.raises(ValidationError):
        svc.change_password(user_id=user.user_id, new_password="abcdef", confirm_password="abcdeg")
    with pytest.raises(ValidationError):
        svc.change_password(user_id=user.user_id, new_password="abc", confirm_password="abc")

    svc.change_password(user_id=user.user_id, new_password="newpass", confirm_password="newpass")
    AuthService(users_repo).authenticate(user.email, "newpass")
