from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import LinkingRequest


class LinkingRequestRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        application_number: str,
        full_name: str,
        date_of_birth: Optional[date],
        additional_info: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[LinkingRequest]:
        raise NotImplementedError

    def latest_for_user(self, user_id: int) -> Optional[LinkingRequest]:
        raise NotImplementedError

    def list_all(self, *, status: Optional[RequestStatus] = None, limit: int = 200) -> Sequence[LinkingRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        admin_notes: Optional[str] = None,
    ) -> bool:
        """Set the final status; only pending requests are updated."""

        raise NotImplementedError
