from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role used for authorization checks."""

    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class MemberStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class ServerLevel(str, Enum):
    """Service rank stored for each member."""

    JUNIOR = "JUNIOR"
    SENIOR = "SENIOR"
    SENIOR_SERVER = "SENIOR_SERVER"


class AttendanceMark(str, Enum):
    """Monthly meeting attendance. Exactly one mark per member per month."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    EXCUSED = "EXCUSED"
    UNMARKED = "UNMARKED"


class DuesStatus(str, Enum):
    """Standing of a member's paid dues against what is owed so far."""

    FULLY_PAID = "FULLY_PAID"
    PAID_ADVANCE = "PAID_ADVANCE"
    HAS_DUES = "HAS_DUES"
