from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Hashable, Optional

from ..core.enums import MemberStatus, ServerLevel


@dataclass(frozen=True)
class Member:
    """Domain entity: a person eligible for dues.

    Plain data object; no database access code lives here.
    """

    id: Hashable
    surname: str
    given_name: str
    membership_status: MemberStatus = MemberStatus.ACTIVE
    email: Optional[str] = None
    server_level: ServerLevel = ServerLevel.JUNIOR
    date_joined: Optional[date] = None
    birthdate: Optional[date] = None
    contact_number: Optional[str] = None
    school: Optional[str] = None
    password_hash: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.membership_status == MemberStatus.ACTIVE


@dataclass(frozen=True)
class MemberProfile:
    """Member plus the values derived for display."""

    member: Member
    age: Optional[int]
    years_of_service: Optional[int]
    service_level: str

    def to_dict(self) -> dict:
        m = self.member
        return {
            "id": m.id,
            "surname": m.surname,
            "given_name": m.given_name,
            "email": m.email,
            "member_status": m.membership_status.value,
            "server_level": m.server_level.value,
            "date_joined": m.date_joined.isoformat() if m.date_joined else None,
            "birthdate": m.birthdate.isoformat() if m.birthdate else None,
            "contact_number": m.contact_number,
            "school": m.school,
            "age": self.age,
            "years_of_service": self.years_of_service,
            "service_level": self.service_level,
        }
