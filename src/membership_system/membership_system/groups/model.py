from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional

from ..members.model import Member


def _member_summary(member: Member) -> dict:
    return {
        "id": member.id,
        "surname": member.surname,
        "given_name": member.given_name,
        "server_level": member.server_level.value,
    }


@dataclass(frozen=True)
class MemberGroup:
    """A serving team: an optional leader plus its members."""

    group_id: int
    name: str
    leader: Optional[Member] = None
    members: tuple[Member, ...] = ()

    def includes(self, member_id: Hashable) -> bool:
        if self.leader is not None and self.leader.id == member_id:
            return True
        return any(m.id == member_id for m in self.members)

    def to_dict(self, *, is_my_group: bool = False) -> dict:
        return {
            "id": self.group_id,
            "name": self.name,
            "leader": _member_summary(self.leader) if self.leader else None,
            "members": [_member_summary(m) for m in self.members],
            "is_my_group": is_my_group,
        }


@dataclass(frozen=True)
class MemberGroups:
    """Groups as seen by one member: their own team and everyone else's."""

    my_group: Optional[MemberGroup]
    other_groups: tuple[MemberGroup, ...]

    def to_dict(self) -> dict:
        return {
            "my_group": self.my_group.to_dict(is_my_group=True) if self.my_group else None,
            "other_groups": [g.to_dict() for g in self.other_groups],
        }
