from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AdminIdentity, Identity, MemberIdentity, UnknownIdentity
from .repository import IdentityRepository


class MySQLIdentityRepository(IdentityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_email(self, email: str, role: Optional[Role] = None) -> Identity:
        sql = """
            SELECT user_type, identity_id, display_name, email, password_hash, is_active
            FROM identities
            WHERE email=%s
        """
        params: tuple = (email,)
        if role is not None:
            sql += " AND user_type=%s"
            params = (email, role.value)
        # Admin rows win when the same email is registered twice.
        sql += " ORDER BY user_type = 'ADMIN' DESC LIMIT 1"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            row = fetchone(cur)

        if not row:
            return UnknownIdentity(email=email)

        cls = AdminIdentity if row["user_type"] == "ADMIN" else MemberIdentity
        return cls(
            identity_id=int(row["identity_id"]),
            name=row["display_name"],
            email=row["email"],
            is_active=bool(row.get("is_active")),
            password_hash=row.get("password_hash"),
        )

    def admin_exists(self) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM admin_users LIMIT 1")
            return fetchone(cur) is not None
