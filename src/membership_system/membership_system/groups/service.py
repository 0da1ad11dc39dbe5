from __future__ import annotations

from typing import Hashable

from .model import MemberGroups
from .repository import GroupRepository


class GroupService:
    def __init__(self, groups: GroupRepository):
        self._groups = groups

    def groups_for_member(self, member_id: Hashable) -> MemberGroups:
        """Split the groups into the member's own (leader or member) and the rest.

        A member sits in at most one group; if the data says otherwise the first
        group by name wins.
        """
        my_group = None
        others = []
        for group in self._groups.list_groups():
            if my_group is None and group.includes(member_id):
                my_group = group
            else:
                others.append(group)
        return MemberGroups(my_group=my_group, other_groups=tuple(others))
