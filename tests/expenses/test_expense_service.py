from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.membership_system.membership_system.core.enums import Role
from src.membership_system.membership_system.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.membership_system.membership_system.expenses.service import ExpenseService
from tests.fakes import InMemoryExpenses


@pytest.fixture
def svc():
    return ExpenseService(InMemoryExpenses())


def _add(svc, **overrides):
    fields = {
        "current_role": Role.ADMIN,
        "expended_on": "Snacks",
        "amount": "150.75",
        "expense_date": "2025-06-01",
        "spent_by": "Maria",
        "month": 5,
        "year": 2025,
    }
    fields.update(overrides)
    return svc.add_expense(**fields)


def test_add_and_list_expenses(svc):
    _add(svc)
    _add(svc, expended_on="Candles", amount="49.25")
    _add(svc, month=4, expense_date="2025-05-04")

    june = svc.list_for_month(month=5, year=2025)

    assert [e.expended_on for e in june] == ["Snacks", "Candles"]
    assert june[0].date == date(2025, 6, 1)
    assert ExpenseService.total(june) == Decimal("200.00")
    assert june[0].to_dict()["amount_display"] == "₱150.75"


@pytest.mark.parametrize("field", ["expended_on", "amount", "expense_date", "spent_by"])
def test_every_field_is_required(svc, field):
    with pytest.raises(ValidationError, match="Please fill in all fields"):
        _add(svc, **{field: ""})


@pytest.mark.parametrize("amount", ["0", "-3", "lots"])
def test_amount_must_be_positive_number(svc, amount):
    with pytest.raises(ValidationError):
        _add(svc, amount=amount)


def test_members_cannot_add_or_delete(svc):
    with pytest.raises(AuthorizationError):
        _add(svc, current_role=Role.MEMBER)

    expense_id = _add(svc)
    with pytest.raises(AuthorizationError):
        svc.delete_expense(current_role=Role.MEMBER, expense_id=expense_id)


def test_delete_expense(svc):
    expense_id = _add(svc)

    svc.delete_expense(current_role=Role.ADMIN, expense_id=expense_id)

    assert svc.list_for_month(month=5, year=2025) == []
    with pytest.raises(NotFoundError):
        svc.delete_expense(current_role=Role.ADMIN, expense_id=expense_id)
