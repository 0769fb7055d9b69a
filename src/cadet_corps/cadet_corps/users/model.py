from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a login account.

    Plain data object; no DB access here. A student account may be linked to
    one cadet profile through cadet_id.
    """

    user_id: int
    email: str
    full_name: Optional[str]
    password_hash: str
    role: Role
    cadet_id: Optional[int] = None
    is_active: bool = True
