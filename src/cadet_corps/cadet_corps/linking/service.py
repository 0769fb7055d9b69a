from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..cadets.repository import CadetRepository
from ..common.validators import optional_text, require_admin, require_non_empty
from ..core.enums import RequestStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import LinkingRequest
from .repository import LinkingRequestRepository

logger = logging.getLogger(__name__)


class LinkingService:
    def __init__(self, requests: LinkingRequestRepository, cadets: CadetRepository, users: UserRepository):
        self._requests = requests
        self._cadets = cadets
        self._users = users

    def submit(
        self,
        *,
        user_id: int,
        application_number: str,
        full_name: str,
        date_of_birth: Optional[date] = None,
        additional_info: Optional[str] = None,
    ) -> int:
        application_number = require_non_empty(application_number, "Application number")
        full_name = require_non_empty(full_name, "Full name")

        latest = self._requests.latest_for_user(int(user_id))
        if latest and latest.status == RequestStatus.PENDING:
            raise ValidationError("You already have a pending linking request")

        request_id = self._requests.create(
            user_id=int(user_id),
            application_number=application_number,
            full_name=full_name,
            date_of_birth=date_of_birth,
            additional_info=optional_text(additional_info),
        )
        logger.info("Linking request %s submitted by user %s for %s", request_id, user_id, application_number)
        return request_id

    def latest_for_user(self, user_id: int) -> Optional[LinkingRequest]:
        return self._requests.latest_for_user(int(user_id))

    def list_all(self, *, status: Optional[RequestStatus] = None) -> Sequence[LinkingRequest]:
        return self._requests.list_all(status=status)

    def _require_pending(self, request_id: int) -> LinkingRequest:
        req = self._requests.get(int(request_id))
        if not req:
            raise NotFoundError("Linking request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("This request has already been processed")
        return req

    def approve(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        request_id: int,
        admin_notes: str = "",
    ) -> None:
        require_admin(current_role)
        req = self._require_pending(request_id)

        cadet = self._cadets.get_by_application_number(req.application_number)
        if not cadet:
            raise ValidationError(f"No cadet found with application number {req.application_number}")

        if not self._users.link_cadet(req.user_id, cadet.cadet_id):
            raise ValidationError("Linking the account failed")

        decided = self._requests.decide(
            request_id=req.request_id,
            status=RequestStatus.APPROVED,
            decided_by=int(admin_user_id),
            admin_notes=optional_text(admin_notes),
        )
        if not decided:
            raise ValidationError("This request has already been processed")
        logger.info("Linking request %s approved: user %s -> cadet %s", req.request_id, req.user_id, cadet.cadet_id)

    def reject(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        request_id: int,
        admin_notes: str = "",
    ) -> None:
        require_admin(current_role)
        req = self._require_pending(request_id)

        decided = self._requests.decide(
            request_id=req.request_id,
            status=RequestStatus.REJECTED,
            decided_by=int(admin_user_id),
            admin_notes=optional_text(admin_notes),
        )
        if not decided:
            raise ValidationError("This request has already been processed")
        logger.info("Linking request %s rejected", req.request_id)
