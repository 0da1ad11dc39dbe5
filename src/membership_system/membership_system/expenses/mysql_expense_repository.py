from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Expense
from .repository import ExpenseRepository


def _row_to_expense(r: dict) -> Expense:
    return Expense(
        expense_id=int(r["expense_id"]),
        expended_on=r["expended_on"],
        amount=to_decimal(r["amount"]),
        date=r["expense_date"],
        spent_by=r["spent_by"],
        month=int(r["month"]),
        year=int(r["year"]),
    )


class MySQLExpenseRepository(ExpenseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_month(self, *, month: int, year: int) -> Sequence[Expense]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT expense_id, expended_on, amount, expense_date, spent_by, month, year
                FROM expenses
                WHERE month=%s AND year=%s
                ORDER BY expense_date ASC, expense_id ASC
                """,
                (int(month), int(year)),
            )
            return [_row_to_expense(r) for r in fetchall(cur)]

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT expense_id, expended_on, amount, expense_date, spent_by, month, year
                FROM expenses
                WHERE expense_id=%s
                """,
                (int(expense_id),),
            )
            r = fetchone(cur)
            return _row_to_expense(r) if r else None

    def create_expense(
        self,
        *,
        expended_on: str,
        amount: Decimal,
        expense_date: date,
        spent_by: str,
        month: int,
        year: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO expenses(expended_on, amount, expense_date, spent_by, month, year)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (expended_on, amount, expense_date, spent_by, int(month), int(year)),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, expense_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM expenses WHERE expense_id=%s", (int(expense_id),))
            return cur.rowcount > 0
