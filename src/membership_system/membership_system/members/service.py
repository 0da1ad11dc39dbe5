from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import MemberStatus, Role, ServerLevel
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Member, MemberProfile
from .repository import MemberRepository

logger = logging.getLogger(__name__)

_SERVICE_LEVEL_LABELS = {
    ServerLevel.JUNIOR: "Neophyte",
    ServerLevel.SENIOR: "Junior",
}


def full_years_between(start: date, today: date) -> int:
    """Whole years elapsed, counting a year only once its anniversary has passed."""
    years = today.year - start.year
    if (today.month, today.day) < (start.month, start.day):
        years -= 1
    return years


def service_level_label(level: ServerLevel) -> str:
    return _SERVICE_LEVEL_LABELS.get(level, "Senior Server")


class MemberService:
    """Use case: member directory (admin management + member profile)."""

    def __init__(self, members: MemberRepository):
        self._members = members

    def list_members(self, *, status: Optional[MemberStatus] = None) -> Sequence[Member]:
        return self._members.list_members(status=status)

    def get_member(self, member_id) -> Member:
        if member_id in (None, ""):
            raise ValidationError("Member ID is required")
        try:
            member_id = int(member_id)
        except (TypeError, ValueError):
            raise ValidationError("Member ID is invalid")

        member = self._members.get_by_id(member_id)
        if not member:
            raise NotFoundError("Member not found")
        return member

    def get_profile(self, member_id, *, today: Optional[date] = None) -> MemberProfile:
        today = today or date.today()
        member = self.get_member(member_id)

        age = full_years_between(member.birthdate, today) if member.birthdate else None
        years_of_service = max(0, full_years_between(member.date_joined, today)) if member.date_joined else None

        return MemberProfile(
            member=member,
            age=age,
            years_of_service=years_of_service,
            service_level=service_level_label(member.server_level),
        )

    def create_member(
        self,
        *,
        current_role: Role,
        surname: str,
        given_name: str,
        email: Optional[str] = None,
        password: Optional[str] = None,
        server_level: ServerLevel = ServerLevel.JUNIOR,
        date_joined: Optional[date] = None,
        birthdate: Optional[date] = None,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        surname = require_non_empty(surname, "Surname")
        given_name = require_non_empty(given_name, "Given name")

        email = email.strip().lower() if email and email.strip() else None
        if email and self._members.get_by_email(email):
            raise ValidationError("Email is already registered")

        password_hash = None
        if password:
            require_min_length(password, "Password", 6)
            password_hash = generate_password_hash(password)

        member_id = self._members.create_member(
            surname=surname,
            given_name=given_name,
            email=email,
            password_hash=password_hash,
            server_level=server_level,
            date_joined=date_joined,
            birthdate=birthdate,
        )
        logger.info("Created member %s (%s, %s)", member_id, surname, given_name)
        return member_id

    def delete_member(self, *, current_role: Role, member_id) -> Member:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        member = self.get_member(member_id)
        if not self._members.delete_by_id(member.id):
            raise NotFoundError("Member not found")

        logger.info("Deleted member %s (%s, %s)", member.id, member.surname, member.given_name)
        return member

    def set_status(self, *, current_role: Role, member_id, status: MemberStatus) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        member = self.get_member(member_id)
        if not self._members.set_status(member.id, status=status):
            raise ValidationError("Failed to update member status")
        logger.info("Member %s status set to %s", member.id, status.value)
