"""Flask helpers shared by the controllers: auth guards, JSON replies, downloads."""

from __future__ import annotations

import io
import logging
from functools import wraps
from typing import Optional

from flask import Flask, Response, jsonify, request, send_file, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_CODES = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
]

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Please log in to continue")
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Please log in to continue")
        if session.get("role") != Role.ADMIN.value:
            raise AuthorizationError("Administrator access required")
        return view(*args, **kwargs)

    return wrapper


def current_role() -> Role:
    return Role(session.get("role", Role.STUDENT.value))


def current_user_id() -> int:
    return int(session["user_id"])


def request_data() -> dict:
    """JSON body, falling back to form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def optional_int(value, field_name: str) -> Optional[int]:
    if value is None or str(value).strip() == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def ok(message: Optional[str] = None, status: int = 200, **payload):
    body = {"success": True}
    if message:
        body["message"] = message
    body.update(payload)
    return jsonify(body), status


def download(text: str, *, filename: str, mimetype: str) -> Response:
    # utf-8-sig so spreadsheet apps pick up the encoding
    return send_file(
        io.BytesIO(text.encode("utf-8-sig")),
        mimetype=mimetype,
        as_attachment=True,
        download_name=filename,
    )


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        for exc_type, status in _STATUS_CODES:
            if isinstance(error, exc_type):
                logger.warning("%s %s -> %s: %s", request.method, request.path, status, error)
                return jsonify({"success": False, "message": str(error)}), status

        logger.error("%s %s failed: %s", request.method, request.path, error)
        return jsonify({"success": False, "message": GENERIC_ERROR_MESSAGE}), 500

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        if isinstance(error, HTTPException):
            return jsonify({"success": False, "message": error.description}), error.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "message": GENERIC_ERROR_MESSAGE}), 500
