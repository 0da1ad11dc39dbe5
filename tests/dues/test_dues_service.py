from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal

import mysql.connector
import pytest

from src.membership_system.membership_system.core.enums import DuesStatus, MemberStatus, Role
from src.membership_system.membership_system.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.membership_system.membership_system.dues.model import PaymentEvent
from src.membership_system.membership_system.dues.service import DuesService
from tests.fakes import InMemoryMembers, InMemoryPayments, member

JUNE_2025 = datetime(2025, 6, 15, 10, 0)


def _service(events=(), members=None):
    members = members or InMemoryMembers(
        [
            member(1, "Dela Cruz", "Juan Carlos"),
            member(2, "Santos", "Maria Luisa"),
            member(3, "Reyes", "Paolo", membership_status=MemberStatus.INACTIVE),
        ]
    )
    payments = InMemoryPayments(events)
    return DuesService(payments, members, monthly_due_amount=Decimal("20")), payments


def test_year_report_covers_active_members_only():
    svc, _ = _service(
        [
            PaymentEvent(1, Decimal("40"), date(2025, 1, 10)),
            PaymentEvent(1, Decimal("40"), date(2025, 3, 5)),
            PaymentEvent(3, Decimal("500"), date(2025, 2, 1)),
        ]
    )

    report = svc.build_year_report(year=2025, now=JUNE_2025)

    assert [r.member_id for r in report.records] == [1, 2]
    juan, maria = report.records
    assert (juan.total_paid, juan.total_due, juan.status) == (Decimal("80"), Decimal("120"), DuesStatus.HAS_DUES)
    assert maria.total_paid == 0
    assert report.excluded_events == 0


def test_year_report_falls_back_to_no_payments_on_database_error(caplog):
    svc, payments = _service([PaymentEvent(1, Decimal("120"), date(2025, 1, 10))])
    payments.fail_with = mysql.connector.Error("connection refused")

    with caplog.at_level(logging.ERROR):
        report = svc.build_year_report(year=2025, now=JUNE_2025)

    assert all(r.total_paid == 0 for r in report.records)
    assert all(r.status == DuesStatus.HAS_DUES for r in report.records)
    assert "Failed to load dues payments" in caplog.text


def test_year_report_does_not_hide_other_errors():
    svc, payments = _service()
    payments.fail_with = RuntimeError("bug")

    with pytest.raises(RuntimeError):
        svc.build_year_report(year=2025, now=JUNE_2025)


def test_member_dues_for_single_member():
    svc, _ = _service([PaymentEvent(2, Decimal("120"), date(2025, 4, 1))])

    record = svc.get_member_dues(member_id=2, year=2025, now=JUNE_2025)

    assert record.member_name == "Santos, M.L."
    assert record.status == DuesStatus.FULLY_PAID
    assert record.monthly_dues[3].date_paid == date(2025, 4, 1)


def test_member_dues_unknown_member():
    svc, _ = _service()

    with pytest.raises(NotFoundError):
        svc.get_member_dues(member_id=99, year=2025, now=JUNE_2025)


def test_record_payment_appends_event():
    svc, payments = _service()

    payment_id = svc.record_payment(current_role=Role.ADMIN, member_id="1", amount="20.00", paid_on="2025-06-01")

    assert payment_id == 1
    assert payments.events[-1] == PaymentEvent(1, Decimal("20.00"), date(2025, 6, 1), payment_id=1)
    report = svc.build_year_report(year=2025, now=JUNE_2025)
    assert report.records[0].monthly_dues[5].amount_paid == Decimal("20.00")


def test_record_payment_requires_admin():
    svc, payments = _service()

    with pytest.raises(AuthorizationError):
        svc.record_payment(current_role=Role.MEMBER, member_id=1, amount="20", paid_on="2025-06-01")
    assert payments.events == []


@pytest.mark.parametrize(
    "member_id, amount, paid_on",
    [
        ("abc", "20", "2025-06-01"),
        (1, "0", "2025-06-01"),
        (1, "-5", "2025-06-01"),
        (1, "twenty", "2025-06-01"),
        (1, "20", "06/01/2025"),
    ],
)
def test_record_payment_rejects_bad_input(member_id, amount, paid_on):
    svc, _ = _service()

    with pytest.raises(ValidationError):
        svc.record_payment(current_role=Role.ADMIN, member_id=member_id, amount=amount, paid_on=paid_on)


def test_record_payment_unknown_member():
    svc, _ = _service()

    with pytest.raises(NotFoundError):
        svc.record_payment(current_role=Role.ADMIN, member_id=42, amount="20", paid_on="2025-06-01")


def test_member_dues_fall_back_to_no_payments_on_database_error(caplog):
    svc, payments = _service([PaymentEvent(2, Decimal("120"), date(2025, 4, 1))])
    payments.fail_with = mysql.connector.Error("connection refused")

    with caplog.at_level(logging.ERROR):
        record = svc.get_member_dues(member_id=2, year=2025, now=JUNE_2025)

    assert record.total_paid == 0
    assert record.status == DuesStatus.HAS_DUES
    assert "Failed to load dues payments for member 2" in caplog.text
