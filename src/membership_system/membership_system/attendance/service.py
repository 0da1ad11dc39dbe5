from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import first_sunday, now_local
from ..common.validators import parse_amount, require_month_index, require_year
from ..core.constants import DEFAULT_MEETING_TIME, DEFAULT_MONTHLY_DUE_AMOUNT
from ..core.enums import AttendanceMark, MemberStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..members.repository import MemberRepository
from .model import AttendanceTotals, MeetingSchedule, MonthlyAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Monthly meeting sheet: attendance marks, excuse letters and dues collected at the meeting."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberRepository,
        *,
        monthly_due_amount: Decimal = DEFAULT_MONTHLY_DUE_AMOUNT,
    ):
        self._attendance = attendance
        self._members = members
        self._monthly_due_amount = Decimal(monthly_due_amount)

    def get_month_sheet(self, *, month: int, year: int) -> list[MonthlyAttendance]:
        month = require_month_index(month)
        year = require_year(year)

        stored = {r.member_id: r for r in self._attendance.list_for_month(month=month, year=year)}
        members = self._members.list_members(status=MemberStatus.ACTIVE)
        return [stored.get(m.id) or MonthlyAttendance(member_id=m.id, month=month, year=year) for m in members]

    def meeting_schedule(self, *, month: int, year: int) -> MeetingSchedule:
        return MeetingSchedule(
            meeting_date=first_sunday(require_year(year), require_month_index(month)),
            meeting_time=DEFAULT_MEETING_TIME,
        )

    def toggle_mark(
        self,
        *,
        member_id: int,
        month: int,
        year: int,
        mark: AttendanceMark,
        now: Optional[datetime] = None,
    ) -> MonthlyAttendance:
        record = self._load_for_edit(member_id=member_id, month=month, year=year, now=now)
        return self._save(record.toggled(mark))

    def save_excuse(
        self,
        *,
        member_id: int,
        month: int,
        year: int,
        text: str,
        now: Optional[datetime] = None,
    ) -> MonthlyAttendance:
        record = self._load_for_edit(member_id=member_id, month=month, year=year, now=now)
        return self._save(replace(record, excuse_letter=(text or "").strip()))

    def toggle_due(self, *, member_id: int, month: int, year: int, now: Optional[datetime] = None) -> MonthlyAttendance:
        record = self._load_for_edit(member_id=member_id, month=month, year=year, now=now)
        checked = not record.due_checked
        return self._save(
            replace(record, due_checked=checked, due_amount=self._monthly_due_amount if checked else Decimal("0"))
        )

    def set_due_amount(
        self,
        *,
        member_id: int,
        month: int,
        year: int,
        amount,
        now: Optional[datetime] = None,
    ) -> MonthlyAttendance:
        record = self._load_for_edit(member_id=member_id, month=month, year=year, now=now)
        try:
            value = parse_amount(amount)
        except ValidationError:
            value = Decimal("0")
        checked = True if value >= self._monthly_due_amount else record.due_checked
        return self._save(replace(record, due_amount=value, due_checked=checked))

    def save_month(
        self,
        *,
        month: int,
        year: int,
        entries: Iterable[MonthlyAttendance],
        now: Optional[datetime] = None,
    ) -> int:
        month = require_month_index(month)
        year = require_year(year)
        self._require_editable(month=month, year=year, now=now)

        entries = list(entries)
        for entry in entries:
            if entry.month != month or entry.year != year:
                raise ValidationError("Attendance entries must belong to the selected month")
            if entry.due_amount < 0:
                raise ValidationError("Due amount cannot be negative")

        for entry in entries:
            self._attendance.upsert(entry)

        logger.info("Saved %s attendance rows for %s-%02d", len(entries), year, month + 1)
        return len(entries)

    @staticmethod
    def totals(sheet: Sequence[MonthlyAttendance]) -> AttendanceTotals:
        return AttendanceTotals(
            present=sum(1 for r in sheet if r.mark == AttendanceMark.PRESENT),
            absent=sum(1 for r in sheet if r.mark == AttendanceMark.ABSENT),
            excused=sum(1 for r in sheet if r.mark == AttendanceMark.EXCUSED),
            dues_paid=sum(1 for r in sheet if r.due_checked),
            total_amount=sum((r.due_amount for r in sheet), Decimal("0")),
        )

    @staticmethod
    def is_editable(*, month: int, year: int, now: Optional[datetime] = None) -> bool:
        """Only the running month's sheet accepts changes."""
        now = now or now_local()
        return (int(month), int(year)) == (now.month - 1, now.year)

    def _require_editable(self, *, month: int, year: int, now: Optional[datetime]) -> None:
        if not self.is_editable(month=month, year=year, now=now):
            raise ValidationError("Only the current month's attendance can be edited")

    def _load_for_edit(self, *, member_id: int, month: int, year: int, now: Optional[datetime]) -> MonthlyAttendance:
        month = require_month_index(month)
        year = require_year(year)
        self._require_editable(month=month, year=year, now=now)

        try:
            member_id = int(member_id)
        except (TypeError, ValueError):
            raise ValidationError("Member ID is invalid")

        member = self._members.get_by_id(member_id)
        if not member:
            raise NotFoundError("Member not found")

        existing = self._attendance.get(member_id=member.id, month=month, year=year)
        return existing or MonthlyAttendance(member_id=member.id, month=month, year=year)

    def _save(self, record: MonthlyAttendance) -> MonthlyAttendance:
        self._attendance.upsert(record)
        return record
