from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import MemberStatus, ServerLevel
from .model import Member


class MemberRepository(Protocol):
    """Repository interface for the member directory.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Member]:
        raise NotImplementedError

    def list_members(self, *, status: Optional[MemberStatus] = None) -> Sequence[Member]:
        raise NotImplementedError

    def create_member(
        self,
        *,
        surname: str,
        given_name: str,
        email: Optional[str],
        password_hash: Optional[str],
        server_level: ServerLevel,
        date_joined: Optional[date],
        birthdate: Optional[date],
    ) -> int:
        raise NotImplementedError

    def delete_by_id(self, member_id: int) -> bool:
        raise NotImplementedError

    def set_status(self, member_id: int, *, status: MemberStatus) -> bool:
        raise NotImplementedError
