from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Hashable, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_date, now_local
from ..common.validators import require_positive_amount, require_year
from ..core.constants import DEFAULT_MONTHLY_DUE_AMOUNT
from ..core.enums import MemberStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..database.mysql_base import DatabaseError
from ..members.repository import MemberRepository
from .model import MemberDuesRecord, PaymentEvent, ReconciliationReport
from .reconciler import DuesReconciler
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


class DuesService:
    """Use cases: yearly dues ledger for admins and members, recording payments."""

    def __init__(
        self,
        payments: PaymentRepository,
        members: MemberRepository,
        *,
        reconciler: Optional[DuesReconciler] = None,
        monthly_due_amount: Decimal = DEFAULT_MONTHLY_DUE_AMOUNT,
    ):
        self._payments = payments
        self._members = members
        self._reconciler = reconciler or DuesReconciler()
        self._monthly_due_amount = Decimal(monthly_due_amount)

    @property
    def monthly_due_amount(self) -> Decimal:
        return self._monthly_due_amount

    def build_year_report(self, *, year: int, now: Optional[datetime] = None) -> ReconciliationReport:
        year = require_year(year)
        now = now or now_local()

        members = self._members.list_members(status=MemberStatus.ACTIVE)
        try:
            payments = self._payments.list_for_year(year=year)
        except DatabaseError:
            # Ledger still renders with zero payments when the payment table is unreachable.
            logger.exception("Failed to load dues payments for %s; reporting without payments", year)
            payments = {}

        report = self._reconcile(year, now, members, payments)
        if report.excluded_events:
            logger.warning("Skipped %s malformed payment events while reconciling %s", report.excluded_events, year)
        return report

    def get_member_dues(self, *, member_id: int, year: int, now: Optional[datetime] = None) -> MemberDuesRecord:
        year = require_year(year)
        now = now or now_local()

        member = self._members.get_by_id(int(member_id))
        if not member:
            raise NotFoundError("Member not found")

        try:
            events = self._payments.list_for_member(member_id=member.id, year=year)
        except DatabaseError:
            logger.exception("Failed to load dues payments for member %s in %s; reporting without payments", member.id, year)
            events = []

        payments = {member.id: events}
        report = self._reconcile(year, now, [member], payments)
        return report.records[0]

    def record_payment(self, *, current_role: Role, member_id, amount, paid_on) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        try:
            member_id = int(member_id)
        except (TypeError, ValueError):
            raise ValidationError("Member ID is invalid")
        value = require_positive_amount(amount)
        try:
            paid_date: date = coerce_date(paid_on)
        except (TypeError, ValueError):
            raise ValidationError("Payment date is invalid")

        if not self._members.get_by_id(member_id):
            raise NotFoundError("Member not found")

        payment_id = self._payments.create_payment(member_id=member_id, amount=value, paid_on=paid_date)
        logger.info("Recorded dues payment %s: member=%s amount=%s date=%s", payment_id, member_id, value, paid_date)
        return payment_id

    def _reconcile(
        self,
        year: int,
        now: datetime,
        members: Sequence,
        payments: Mapping[Hashable, Sequence[PaymentEvent]],
    ) -> ReconciliationReport:
        # TODO: price past years against December once the owed-months rule is confirmed;
        # today every year uses the live month, see DESIGN.md "Open questions".
        return self._reconciler.reconcile_report(year, now.month - 1, self._monthly_due_amount, members, payments)
