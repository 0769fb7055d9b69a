from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LinkingRequest
from .repository import LinkingRequestRepository

_COLUMNS = (
    "request_id, user_id, application_number, full_name, date_of_birth, additional_info, "
    "status, admin_notes, created_at, decided_by, decided_at"
)


def _to_request(r: dict) -> LinkingRequest:
    return LinkingRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        application_number=r["application_number"],
        full_name=r["full_name"],
        date_of_birth=r.get("date_of_birth"),
        additional_info=r.get("additional_info"),
        status=RequestStatus(r["status"]),
        admin_notes=r.get("admin_notes"),
        created_at=r.get("created_at"),
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
    )


class MySQLLinkingRequestRepository(LinkingRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        application_number: str,
        full_name: str,
        date_of_birth: Optional[date],
        additional_info: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO cadet_linking_requests(user_id, application_number, full_name, date_of_birth, additional_info, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    application_number,
                    full_name,
                    date_of_birth,
                    additional_info,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get(self, request_id: int) -> Optional[LinkingRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM cadet_linking_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def latest_for_user(self, user_id: int) -> Optional[LinkingRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM cadet_linking_requests
                WHERE user_id=%s
                ORDER BY created_at DESC, request_id DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_all(self, *, status: Optional[RequestStatus] = None, limit: int = 200) -> Sequence[LinkingRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            if status is not None:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS} FROM cadet_linking_requests
                    WHERE status=%s
                    ORDER BY created_at DESC, request_id DESC
                    LIMIT %s
                    """,
                    (status.value, int(limit)),
                )
            else:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS} FROM cadet_linking_requests
                    ORDER BY created_at DESC, request_id DESC
                    LIMIT %s
                    """,
                    (int(limit),),
                )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        admin_notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE cadet_linking_requests
                SET status=%s, decided_by=%s, decided_at=NOW(), admin_notes=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(decided_by),
                    admin_notes,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0
