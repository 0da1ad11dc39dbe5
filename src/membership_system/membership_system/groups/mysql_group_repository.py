from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from ..core.enums import MemberStatus, ServerLevel
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..members.model import Member
from .model import MemberGroup
from .repository import GroupRepository


def _row_to_member(r: dict, prefix: str = "") -> Member:
    return Member(
        id=int(r[f"{prefix}member_id"]),
        surname=r[f"{prefix}surname"],
        given_name=r[f"{prefix}given_name"],
        membership_status=MemberStatus(r[f"{prefix}member_status"]),
        server_level=ServerLevel(r.get(f"{prefix}server_level") or ServerLevel.JUNIOR.value),
    )


class MySQLGroupRepository(GroupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_groups(self) -> Sequence[MemberGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT g.group_id, g.name,
                       l.member_id AS leader_member_id, l.surname AS leader_surname,
                       l.given_name AS leader_given_name, l.member_status AS leader_member_status,
                       l.server_level AS leader_server_level
                FROM member_groups g
                LEFT JOIN members l ON l.member_id = g.leader_id
                ORDER BY g.name ASC
                """
            )
            group_rows = fetchall(cur)

            cur.execute(
                """
                SELECT gm.group_id, m.member_id, m.surname, m.given_name, m.member_status, m.server_level
                FROM group_members gm
                JOIN members m ON m.member_id = gm.member_id
                ORDER BY m.surname ASC, m.given_name ASC
                """
            )
            member_rows = fetchall(cur)

        members_by_group: dict[int, list[Member]] = defaultdict(list)
        for r in member_rows:
            members_by_group[int(r["group_id"])].append(_row_to_member(r))

        return [
            MemberGroup(
                group_id=int(r["group_id"]),
                name=r["name"],
                leader=_row_to_member(r, "leader_") if r.get("leader_member_id") is not None else None,
                members=tuple(members_by_group.get(int(r["group_id"]), ())),
            )
            for r in group_rows
        ]
