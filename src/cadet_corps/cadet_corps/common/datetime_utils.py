from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: Optional[str], field_name: str = "Date") -> Optional[date]:
    """Parse YYYY-MM-DD string into date; blank gives None."""
    v = (value or "").strip()
    if not v:
        return None
    try:
        return datetime.strptime(v, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")


def parse_hhmm(value: Optional[str], field_name: str = "Time") -> Optional[time]:
    """Parse 'HH:MM' into a time; blank gives None.

    A trailing ':SS' is accepted and dropped.
    """
    v = (value or "").strip()
    if not v:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time().replace(second=0)
        except ValueError:
            continue
    raise ValidationError(f"{field_name} must be in HH:MM format")


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def format_hhmm(value: Optional[time], empty: str = "-") -> str:
    return value.strftime("%H:%M") if value else empty


def age_on(date_of_birth: date, today: date) -> int:
    """Whole years between date_of_birth and today."""
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
