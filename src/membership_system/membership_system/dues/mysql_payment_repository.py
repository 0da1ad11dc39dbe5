from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Hashable, Mapping, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_decimal
from .model import PaymentEvent
from .repository import PaymentRepository


def _row_to_event(r: dict) -> PaymentEvent:
    return PaymentEvent(
        payment_id=int(r["payment_id"]),
        member_id=int(r["member_id"]),
        amount=to_decimal(r["amount"]),
        date=r["paid_on"],
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_year(self, *, year: int) -> Mapping[Hashable, Sequence[PaymentEvent]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT payment_id, member_id, amount, paid_on
                FROM dues_payments
                WHERE paid_on BETWEEN %s AND %s
                ORDER BY payment_id ASC
                """,
                (date(int(year), 1, 1), date(int(year), 12, 31)),
            )
            rows = fetchall(cur)

        grouped: dict[Hashable, list[PaymentEvent]] = defaultdict(list)
        for r in rows:
            event = _row_to_event(r)
            grouped[event.member_id].append(event)
        return dict(grouped)

    def list_for_member(self, *, member_id: int, year: int) -> Sequence[PaymentEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT payment_id, member_id, amount, paid_on
                FROM dues_payments
                WHERE member_id=%s AND paid_on BETWEEN %s AND %s
                ORDER BY payment_id ASC
                """,
                (int(member_id), date(int(year), 1, 1), date(int(year), 12, 31)),
            )
            return [_row_to_event(r) for r in fetchall(cur)]

    def create_payment(self, *, member_id: int, amount: Decimal, paid_on: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO dues_payments(member_id, amount, paid_on) VALUES(%s,%s,%s)",
                (int(member_id), amount, paid_on),
            )
            return int(cur.lastrowid)
