from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ..common.formatting import format_currency
from ..core.constants import DEFAULT_CURRENCY_SYMBOL


@dataclass(frozen=True)
class Expense:
    """Domain entity: money spent from the group's funds."""

    expense_id: int
    expended_on: str
    amount: Decimal
    date: date
    spent_by: str
    month: int
    year: int

    def to_dict(self, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> dict:
        return {
            "id": self.expense_id,
            "expended_on": self.expended_on,
            "amount": str(self.amount),
            "amount_display": format_currency(self.amount, symbol),
            "date": self.date.isoformat(),
            "spent_by": self.spent_by,
            "month": self.month,
            "year": self.year,
        }
