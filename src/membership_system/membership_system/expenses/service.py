from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..common.validators import require_month_index, require_positive_amount, require_year
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Expense
from .repository import ExpenseRepository

logger = logging.getLogger(__name__)


class ExpenseService:
    def __init__(self, expenses: ExpenseRepository):
        self._expenses = expenses

    def list_for_month(self, *, month: int, year: int) -> Sequence[Expense]:
        return self._expenses.list_for_month(month=require_month_index(month), year=require_year(year))

    @staticmethod
    def total(expenses: Sequence[Expense]) -> Decimal:
        return sum((e.amount for e in expenses), Decimal("0"))

    def add_expense(
        self,
        *,
        current_role: Role,
        expended_on: Optional[str],
        amount,
        expense_date,
        spent_by: Optional[str],
        month: int,
        year: int,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        if not all(
            [
                expended_on and expended_on.strip(),
                amount not in (None, ""),
                expense_date,
                spent_by and spent_by.strip(),
            ]
        ):
            raise ValidationError("Please fill in all fields")

        value = require_positive_amount(amount)
        try:
            spent_on = coerce_date(expense_date)
        except (TypeError, ValueError):
            raise ValidationError("Expense date is invalid")

        expense_id = self._expenses.create_expense(
            expended_on=expended_on.strip(),
            amount=value,
            expense_date=spent_on,
            spent_by=spent_by.strip(),
            month=require_month_index(month),
            year=require_year(year),
        )
        logger.info("Added expense %s: %s %s", expense_id, expended_on.strip(), value)
        return expense_id

    def delete_expense(self, *, current_role: Role, expense_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        if not self._expenses.get_by_id(int(expense_id)):
            raise NotFoundError("Expense not found")
        if not self._expenses.delete_by_id(int(expense_id)):
            raise ValidationError("Failed to delete expense")
        logger.info("Deleted expense %s", expense_id)
