from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import MemberStatus, ServerLevel
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Member
from .repository import MemberRepository

_MEMBER_COLUMNS = """
    member_id, surname, given_name, email, password_hash, member_status,
    server_level, date_joined, birthdate, contact_number, school
"""


def _row_to_member(r: dict) -> Member:
    return Member(
        id=int(r["member_id"]),
        surname=r["surname"],
        given_name=r["given_name"],
        membership_status=MemberStatus(r["member_status"]),
        email=r.get("email"),
        server_level=ServerLevel(r.get("server_level") or ServerLevel.JUNIOR.value),
        date_joined=r.get("date_joined"),
        birthdate=r.get("birthdate"),
        contact_number=r.get("contact_number"),
        school=r.get("school"),
        password_hash=r.get("password_hash"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_MEMBER_COLUMNS} FROM members WHERE member_id=%s", (int(member_id),))
            row = fetchone(cur)
            return _row_to_member(row) if row else None

    def get_by_email(self, email: str) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_MEMBER_COLUMNS} FROM members WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_member(row) if row else None

    def list_members(self, *, status: Optional[MemberStatus] = None) -> Sequence[Member]:
        sql = f"SELECT {_MEMBER_COLUMNS} FROM members"
        params: tuple = ()
        if status is not None:
            sql += " WHERE member_status=%s"
            params = (status.value,)
        sql += " ORDER BY surname ASC, given_name ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_member(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO members(surname, given_name, email, password_hash, member_status,
                                    server_level, date_joined, birthdate)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    surname,
                    given_name,
                    email,
                    password_hash,
                    MemberStatus.ACTIVE.value,
                    server_level.value,
                    date_joined,
                    birthdate,
                ),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM members WHERE member_id=%s", (int(member_id),))
            return cur.rowcount > 0

    def set_status(self, member_id: int, *, status: MemberStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE members SET member_status=%s WHERE member_id=%s",
                (status.value, int(member_id)),
            )
            return cur.rowcount > 0
