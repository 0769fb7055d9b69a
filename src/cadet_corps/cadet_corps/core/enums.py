from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Derived attendance classification stored with each record."""

    PRESENT = "present"
    LEAVE_EARLY = "leave_early"
    ABSENT = "absent"


class MarkKind(str, Enum):
    ENTRY = "entry"
    EXIT = "exit"


class Platoon(str, Enum):
    """Age-banded cohort."""

    JUNIOR = "Junior"
    SENIOR = "Senior"


class RequestStatus(str, Enum):
    """Approval state of an account linking request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RecordKind(str, Enum):
    ACHIEVEMENT = "achievements"
    DISCIPLINARY = "disciplinary"
    TRAINING_CAMP = "training-camps"
