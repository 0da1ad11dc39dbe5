from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AttendanceMark
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import MonthlyAttendance
from .repository import AttendanceRepository


def _row_to_record(r: dict) -> MonthlyAttendance:
    return MonthlyAttendance(
        member_id=int(r["member_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        mark=AttendanceMark(r.get("mark") or AttendanceMark.UNMARKED.value),
        excuse_letter=r.get("excuse_letter") or "",
        due_checked=bool(r.get("due_checked")),
        due_amount=to_decimal(r.get("due_amount")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_month(self, *, month: int, year: int) -> Sequence[MonthlyAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT member_id, month, year, mark, excuse_letter, due_checked, due_amount
                FROM monthly_attendance
                WHERE month=%s AND year=%s
                """,
                (int(month), int(year)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def get(self, *, member_id: int, month: int, year: int) -> Optional[MonthlyAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT member_id, month, year, mark, excuse_letter, due_checked, due_amount
                FROM monthly_attendance
                WHERE member_id=%s AND month=%s AND year=%s
                """,
                (int(member_id), int(month), int(year)),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def upsert(self, record: MonthlyAttendance) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO monthly_attendance(member_id, month, year, mark, excuse_letter, due_checked, due_amount)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    mark=VALUES(mark),
                    excuse_letter=VALUES(excuse_letter),
                    due_checked=VALUES(due_checked),
                    due_amount=VALUES(due_amount)
                """,
                (
                    int(record.member_id),
                    int(record.month),
                    int(record.year),
                    record.mark.value,
                    record.excuse_letter or None,
                    1 if record.due_checked else 0,
                    record.due_amount,
                ),
            )
