"""Dues reconciliation: payments in, per-member yearly ledger and status out.

The computation is pure. It never touches the database, never logs and never
mutates its arguments, so it can be called from any request thread.

Malformed payment events (a date that cannot be parsed, an amount that is not
a non-negative number) are skipped and counted rather than failing the call.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Hashable, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..common.formatting import format_member_name
from ..common.validators import require_month_index
from ..core.enums import DuesStatus
from ..core.exceptions import InvalidConfigurationError
from ..members.model import Member
from .model import MemberDuesRecord, MonthlyDue, PaymentEvent, ReconciliationReport

MONTHS_PER_YEAR = 12


def classify(total_paid: Decimal, total_due: Decimal) -> DuesStatus:
    if total_paid == total_due:
        return DuesStatus.FULLY_PAID
    if total_paid > total_due:
        return DuesStatus.PAID_ADVANCE
    return DuesStatus.HAS_DUES


def _parse_event(event: PaymentEvent) -> Optional[tuple[date, Decimal]]:
    try:
        paid_on = coerce_date(event.date)
    except (TypeError, ValueError):
        return None

    if isinstance(event.amount, bool):
        return None
    try:
        amount = Decimal(str(event.amount))
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return paid_on, amount


class DuesReconciler:
    """Builds ``MemberDuesRecord`` views from members and their payments."""

    def reconcile(
        self,
        year: int,
        current_month_index: int,
        monthly_due_amount: Decimal,
        members: Sequence[Member],
        payments_by_member: Mapping[Hashable, Sequence[PaymentEvent]],
    ) -> list[MemberDuesRecord]:
        report = self.reconcile_report(year, current_month_index, monthly_due_amount, members, payments_by_member)
        return list(report.records)

    def reconcile_report(
        self,
        year: int,
        current_month_index: int,
        monthly_due_amount: Decimal,
        members: Sequence[Member],
        payments_by_member: Mapping[Hashable, Sequence[PaymentEvent]],
    ) -> ReconciliationReport:
        try:
            monthly_due_amount = Decimal(str(monthly_due_amount))
        except InvalidOperation:
            raise InvalidConfigurationError(f"Monthly due amount is not a number: {monthly_due_amount!r}")
        if not monthly_due_amount.is_finite() or monthly_due_amount <= 0:
            raise InvalidConfigurationError("Monthly due amount must be greater than zero")
        month_index = require_month_index(current_month_index, "Current month")

        # Dues accrue from January through the current month, whatever the year.
        total_due = (month_index + 1) * monthly_due_amount

        records: list[MemberDuesRecord] = []
        excluded = 0
        for member in members:
            events = payments_by_member.get(member.id) or ()
            record, skipped = self._build_record(int(year), member, events, total_due)
            records.append(record)
            excluded += skipped

        return ReconciliationReport(records=tuple(records), excluded_events=excluded)

    def _build_record(
        self,
        year: int,
        member: Member,
        events: Sequence[PaymentEvent],
        total_due: Decimal,
    ) -> tuple[MemberDuesRecord, int]:
        paid = [Decimal("0")] * MONTHS_PER_YEAR
        first_date: list[Optional[date]] = [None] * MONTHS_PER_YEAR
        skipped = 0

        for event in events:
            parsed = _parse_event(event)
            if parsed is None:
                skipped += 1
                continue
            paid_on, amount = parsed
            if paid_on.year != year:
                continue
            month = paid_on.month - 1
            paid[month] += amount
            if first_date[month] is None:
                first_date[month] = paid_on

        monthly_dues = tuple(
            MonthlyDue(month=i, year=year, amount_paid=paid[i], date_paid=first_date[i])
            for i in range(MONTHS_PER_YEAR)
        )
        total_paid = sum((m.amount_paid for m in monthly_dues), Decimal("0"))

        record = MemberDuesRecord(
            member_id=member.id,
            member_name=format_member_name(member.surname, member.given_name),
            monthly_dues=monthly_dues,
            total_paid=total_paid,
            total_due=total_due,
            status=classify(total_paid, total_due),
        )
        return record, skipped


def reconcile(
    year: int,
    current_month_index: int,
    monthly_due_amount: Decimal,
    members: Sequence[Member],
    payments_by_member: Mapping[Hashable, Sequence[PaymentEvent]],
) -> list[MemberDuesRecord]:
    return DuesReconciler().reconcile(year, current_month_index, monthly_due_amount, members, payments_by_member)
