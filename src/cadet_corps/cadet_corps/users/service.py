from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, require_admin, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..database.mysql_base import DuplicateKeyError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    email: str
    full_name: Optional[str]
    role: Role
    cadet_id: Optional[int]

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role.value,
            "cadet_id": self.cadet_id,
        }


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hash values
            ok = False

        if not ok:
            logger.warning("Failed login for %s", email)
            raise AuthenticationError("Invalid email or password")

        return SessionUser(
            user_id=user.user_id,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            cadet_id=user.cadet_id,
        )

    def current_user(self, user_id: int) -> SessionUser:
        """Reload the session user so a freshly approved link shows up."""
        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active:
            raise AuthenticationError("Please log in to continue")
        return SessionUser(
            user_id=user.user_id,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            cadet_id=user.cadet_id,
        )


class UserService:
    """Use case: manage accounts (admin) and passwords (everyone)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_student_account(
        self,
        *,
        current_role: Role,
        email: str,
        full_name: Optional[str],
        password: str,
        cadet_id: Optional[int] = None,
    ) -> int:
        require_admin(current_role)
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email address is not valid")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        try:
            user_id = self._users.create_user(
                email=email,
                full_name=optional_text(full_name),
                password_hash=generate_password_hash(password),
                role=Role.STUDENT,
                cadet_id=cadet_id,
            )
        except DuplicateKeyError:
            raise ValidationError("An account with this email already exists")

        logger.info("Student account %s created for %s", user_id, email)
        return user_id

    def change_password(self, *, user_id: int, new_password: str, confirm_password: str) -> None:
        if new_password != confirm_password:
            raise ValidationError("Passwords do not match")
        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)

        if not self._users.update_password(int(user_id), generate_password_hash(new_password)):
            raise NotFoundError("Account not found")
        logger.info("Password changed for user %s", user_id)
