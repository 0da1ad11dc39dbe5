from __future__ import annotations

import copy
from datetime import date, datetime
from decimal import Decimal

import pytest

from src.membership_system.membership_system.core.enums import DuesStatus
from src.membership_system.membership_system.core.exceptions import InvalidConfigurationError, ValidationError
from src.membership_system.membership_system.dues.model import PaymentEvent
from src.membership_system.membership_system.dues.reconciler import DuesReconciler, classify, reconcile
from tests.fakes import member

JUAN = member(1, "Dela Cruz", "Juan Carlos")
MARIA = member(2, "Santos", "Maria Luisa")


def _pay(member_id, amount, when) -> PaymentEvent:
    return PaymentEvent(member_id=member_id, amount=amount, date=when)


def _june_scenario_payments():
    return {
        1: [
            _pay(1, 20, date(2025, 1, 10)),
            _pay(1, 20, date(2025, 1, 20)),
            _pay(1, 40, date(2025, 3, 5)),
        ]
    }


def test_june_scenario_has_dues():
    records = reconcile(2025, 5, Decimal("20"), [JUAN], _june_scenario_payments())

    assert len(records) == 1
    rec = records[0]
    assert rec.monthly_dues[0].amount_paid == 40
    assert rec.monthly_dues[2].amount_paid == 40
    assert all(m.amount_paid == 0 for i, m in enumerate(rec.monthly_dues) if i not in (0, 2))
    assert rec.total_paid == 80
    assert rec.total_due == 120
    assert rec.status == DuesStatus.HAS_DUES


def test_exact_payment_is_fully_paid_and_overpayment_is_advance():
    exact = {1: [_pay(1, 120, date(2025, 2, 1))]}
    over = {1: [_pay(1, 100, date(2025, 2, 1)), _pay(1, 30, date(2025, 11, 1))]}

    assert reconcile(2025, 5, Decimal("20"), [JUAN], exact)[0].status == DuesStatus.FULLY_PAID
    advance = reconcile(2025, 5, Decimal("20"), [JUAN], over)[0]
    assert advance.total_paid == 130
    assert advance.status == DuesStatus.PAID_ADVANCE


def test_empty_members_gives_empty_result():
    assert reconcile(2025, 5, Decimal("20"), [], {}) == []


def test_member_without_payments_gets_zero_ledger():
    rec = reconcile(2025, 0, Decimal("20"), [MARIA], {})[0]

    assert len(rec.monthly_dues) == 12
    assert [m.month for m in rec.monthly_dues] == list(range(12))
    assert all(m.amount_paid == 0 and m.date_paid is None and m.year == 2025 for m in rec.monthly_dues)
    assert rec.total_due == 20
    assert rec.status == DuesStatus.HAS_DUES


def test_total_due_ignores_payment_history():
    payments = {1: [_pay(1, 500, date(2025, 4, 4))]}
    records = reconcile(2025, 8, Decimal("20"), [JUAN, MARIA], payments)

    assert [r.total_due for r in records] == [Decimal("180"), Decimal("180")]


def test_output_follows_member_order_and_sum_invariant():
    payments = {
        2: [_pay(2, "15.50", date(2025, 7, 1)), _pay(2, 4.5, date(2025, 7, 2))],
        1: [_pay(1, 20, date(2025, 1, 3))],
    }
    records = reconcile(2025, 6, Decimal("20"), [MARIA, JUAN], payments)

    assert [r.member_id for r in records] == [2, 1]
    for rec in records:
        assert rec.total_paid == sum(m.amount_paid for m in rec.monthly_dues)
    assert records[0].monthly_dues[6].amount_paid == Decimal("20.00")


def test_status_matches_comparison_for_every_record():
    payments = {1: [_pay(1, 60, date(2025, 1, 1))], 2: [_pay(2, 61, date(2025, 1, 1))]}
    third = member(3, "Reyes", "Paolo")
    for rec in reconcile(2025, 2, Decimal("20"), [JUAN, MARIA, third], payments):
        assert rec.status == classify(rec.total_paid, rec.total_due)
    assert classify(Decimal("60"), Decimal("60")) == DuesStatus.FULLY_PAID
    assert classify(Decimal("61"), Decimal("60")) == DuesStatus.PAID_ADVANCE
    assert classify(Decimal("59"), Decimal("60")) == DuesStatus.HAS_DUES


def test_date_paid_is_first_event_in_list_order_not_earliest():
    payments = {1: [_pay(1, 10, date(2025, 3, 20)), _pay(1, 10, date(2025, 3, 2))]}
    rec = reconcile(2025, 5, Decimal("20"), [JUAN], payments)[0]

    assert rec.monthly_dues[2].date_paid == date(2025, 3, 20)


def test_payments_from_other_years_are_ignored():
    payments = {1: [_pay(1, 20, date(2024, 12, 31)), _pay(1, 20, date(2025, 12, 31))]}
    rec = reconcile(2025, 11, Decimal("20"), [JUAN], payments)[0]

    assert rec.total_paid == 20
    assert rec.monthly_dues[11].amount_paid == 20


def test_string_and_datetime_dates_are_accepted():
    payments = {
        1: [
            _pay(1, 20, "2025-02-14"),
            _pay(1, 20, "2025-04-01T09:30:00Z"),
            _pay(1, 20, datetime(2025, 5, 5, 18, 0)),
        ]
    }
    rec = reconcile(2025, 5, Decimal("20"), [JUAN], payments)[0]

    assert rec.monthly_dues[1].date_paid == date(2025, 2, 14)
    assert rec.monthly_dues[3].amount_paid == 20
    assert rec.monthly_dues[4].amount_paid == 20


def test_malformed_events_are_skipped_and_counted():
    payments = {
        1: [
            _pay(1, 20, "not-a-date"),
            _pay(1, "abc", date(2025, 1, 1)),
            _pay(1, -5, date(2025, 1, 1)),
            _pay(1, 20, None),
            _pay(1, 20, date(2025, 1, 1)),
        ]
    }
    report = DuesReconciler().reconcile_report(2025, 0, Decimal("20"), [JUAN], payments)

    assert report.excluded_events == 4
    assert report.records[0].total_paid == 20
    assert report.records[0].status == DuesStatus.FULLY_PAID


@pytest.mark.parametrize("amount", [0, -20, "0", "oops"])
def test_non_positive_monthly_due_is_rejected(amount):
    with pytest.raises(InvalidConfigurationError):
        reconcile(2025, 5, amount, [JUAN], {})


@pytest.mark.parametrize("month", [-1, 12, "x", None])
def test_current_month_outside_range_is_rejected(month):
    with pytest.raises(ValidationError):
        reconcile(2025, month, Decimal("20"), [JUAN], {})


def test_reconcile_is_idempotent_and_leaves_inputs_untouched():
    members = [JUAN, MARIA]
    payments = _june_scenario_payments()
    snapshot = copy.deepcopy(payments)

    first = reconcile(2025, 5, Decimal("20"), members, payments)
    second = reconcile(2025, 5, Decimal("20"), members, payments)

    assert first == second
    assert [r.to_dict() for r in first] == [r.to_dict() for r in second]
    assert payments == snapshot
    assert members == [JUAN, MARIA]


def test_member_name_uses_surname_and_initials():
    records = reconcile(2025, 0, Decimal("20"), [MARIA, JUAN], {})

    assert records[0].member_name == "Santos, M.L."
    assert records[1].member_name == "Dela Cruz, J.C."


def test_past_year_still_priced_with_current_month():
    """Known discrepancy: a 2023 ledger viewed in June is owed six months, not twelve."""
    payments = {1: [_pay(1, 20 * 12, date(2023, 1, 15))]}
    rec = reconcile(2023, 5, Decimal("20"), [JUAN], payments)[0]

    assert rec.total_due == 120
    assert rec.status == DuesStatus.PAID_ADVANCE
