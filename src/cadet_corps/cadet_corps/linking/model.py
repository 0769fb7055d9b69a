from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class LinkingRequest:
    """A student's request to attach their login to an existing cadet profile."""

    request_id: int
    user_id: int
    application_number: str
    full_name: str
    status: RequestStatus
    created_at: Optional[datetime] = None
    date_of_birth: Optional[date] = None
    additional_info: Optional[str] = None
    admin_notes: Optional[str] = None
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "user_id": self.user_id,
            "application_number": self.application_number,
            "full_name": self.full_name,
            "date_of_birth": self.date_of_birth.strftime("%Y-%m-%d") if self.date_of_birth else None,
            "additional_info": self.additional_info,
            "status": self.status.value,
            "admin_notes": self.admin_notes,
            "created_at": self.created_at.isoformat(sep=" ") if self.created_at else None,
            "decided_at": self.decided_at.isoformat(sep=" ") if self.decided_at else None,
        }
