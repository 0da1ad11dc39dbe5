from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Expense


class ExpenseRepository(Protocol):
    def list_for_month(self, *, month: int, year: int) -> Sequence[Expense]:
        raise NotImplementedError

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        raise NotImplementedError

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
        raise NotImplementedError

    def delete_by_id(self, expense_id: int) -> bool:
        raise NotImplementedError
