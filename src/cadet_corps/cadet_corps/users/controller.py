from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, session

from ..common.web import admin_required, current_role, current_user_id, login_required, ok, optional_int, request_data
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request_data()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name or s_user.email
        session["role"] = s_user.role.value

        logger.info("User %s logged in as %s", s_user.user_id, s_user.role.value)
        return ok("Logged in", user=s_user.to_dict())

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok("Logged out")

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        s_user = container.auth_service.current_user(current_user_id())
        latest = container.linking_service.latest_for_user(s_user.user_id)
        return ok(user=s_user.to_dict(), linking_request=latest.to_dict() if latest else None)

    @app.route("/me/password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = request_data()
        container.user_service.change_password(
            user_id=current_user_id(),
            new_password=data.get("new_password", ""),
            confirm_password=data.get("confirm_password", ""),
        )
        return ok("Password updated")

    @app.route("/admin/users", methods=["POST"], endpoint="create_student_account")
    @admin_required
    def create_student_account():
        data = request_data()
        user_id = container.user_service.create_student_account(
            current_role=current_role(),
            email=data.get("email", ""),
            full_name=data.get("full_name"),
            password=data.get("password", ""),
            cadet_id=optional_int(data.get("cadet_id"), "Cadet"),
        )
        return ok("Student account created", status=201, user_id=user_id)
