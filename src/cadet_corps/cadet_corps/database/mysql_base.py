from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StorageError
from .connection import DatabaseConnection


class DuplicateKeyError(StorageError):
    """A UNIQUE constraint rejected an insert."""


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise StorageError("Database unavailable") from e
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise DuplicateKeyError(str(e)) from e
        raise StorageError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def to_float(value: Any, default: float = 0.0) -> float:
    """DECIMAL columns come back as ``Decimal``; services work with floats."""
    return default if value is None else float(value)


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Turn a TIME column into ``datetime.time`` at minute precision.

    Depending on the connector build the value arrives as ``time``,
    ``timedelta`` (offset from midnight) or an ``'HH:MM[:SS]'`` string.
    Seconds are dropped: participation is counted in whole minutes.
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    if isinstance(value, timedelta):
        minutes = (int(value.total_seconds()) % 86400) // 60
        return time(hour=minutes // 60, minute=minutes % 60)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise StorageError(f"Unexpected TIME value {value!r}")
        return time(hour=int(parts[0]), minute=int(parts[1]))

    raise StorageError(f"Unsupported TIME value type: {type(value)!r}")
