from __future__ import annotations

from src.membership_system.membership_system.core.enums import ServerLevel
from src.membership_system.membership_system.groups.model import MemberGroup
from src.membership_system.membership_system.groups.service import GroupService
from tests.fakes import InMemoryGroups, member

JUAN = member(1, "Dela Cruz", "Juan Carlos", server_level=ServerLevel.SENIOR)
MARIA = member(2, "Santos", "Maria Luisa")
PAOLO = member(3, "Reyes", "Paolo")
ANA = member(4, "Garcia", "Ana")

MORNING = MemberGroup(group_id=1, name="Morning Team", leader=JUAN, members=(MARIA,))
EVENING = MemberGroup(group_id=2, name="Evening Team", leader=None, members=(PAOLO,))
YOUTH = MemberGroup(group_id=3, name="Youth Group", leader=ANA, members=())


def _service():
    return GroupService(InMemoryGroups([YOUTH, MORNING, EVENING]))


def test_member_sees_own_group_and_the_rest():
    groups = _service().groups_for_member(2)

    assert groups.my_group == MORNING
    assert [g.name for g in groups.other_groups] == ["Evening Team", "Youth Group"]


def test_leader_belongs_to_the_group_they_lead():
    groups = _service().groups_for_member(1)

    assert groups.my_group.name == "Morning Team"
    assert MORNING not in groups.other_groups


def test_member_without_group():
    groups = _service().groups_for_member(99)

    assert groups.my_group is None
    assert len(groups.other_groups) == 3
    assert groups.to_dict()["my_group"] is None


def test_serialised_view_marks_my_group():
    body = _service().groups_for_member(3).to_dict()

    assert body["my_group"]["name"] == "Evening Team"
    assert body["my_group"]["is_my_group"] is True
    assert body["my_group"]["leader"] is None
    assert body["my_group"]["members"] == [
        {"id": 3, "surname": "Reyes", "given_name": "Paolo", "server_level": "JUNIOR"}
    ]
    morning = body["other_groups"][0]
    assert morning["is_my_group"] is False
    assert morning["leader"] == {"id": 1, "surname": "Dela Cruz", "given_name": "Juan Carlos", "server_level": "SENIOR"}


def test_no_groups_at_all():
    groups = GroupService(InMemoryGroups()).groups_for_member(1)

    assert groups.my_group is None
    assert groups.other_groups == ()
