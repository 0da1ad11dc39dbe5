from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Hashable

from ..core.enums import AttendanceMark


@dataclass(frozen=True)
class MonthlyAttendance:
    """Domain entity: one member's monthly-meeting sheet row."""

    member_id: Hashable
    month: int
    year: int
    mark: AttendanceMark = AttendanceMark.UNMARKED
    excuse_letter: str = ""
    due_checked: bool = False
    due_amount: Decimal = Decimal("0")

    def toggled(self, mark: AttendanceMark) -> "MonthlyAttendance":
        """Select ``mark``; selecting the current mark again clears it."""
        if mark == AttendanceMark.UNMARKED or mark == self.mark:
            return replace(self, mark=AttendanceMark.UNMARKED)
        return replace(self, mark=mark)

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "month": self.month,
            "year": self.year,
            "mark": self.mark.value,
            "excuse_letter": self.excuse_letter,
            "due_checked": self.due_checked,
            "due_amount": str(self.due_amount),
        }


@dataclass(frozen=True)
class AttendanceTotals:
    present: int
    absent: int
    excused: int
    dues_paid: int
    total_amount: Decimal

    def to_dict(self) -> dict:
        return {
            "present": self.present,
            "absent": self.absent,
            "excused": self.excused,
            "dues_paid": self.dues_paid,
            "total_amount": str(self.total_amount),
        }


@dataclass(frozen=True)
class MeetingSchedule:
    meeting_date: date
    meeting_time: str

    def to_dict(self) -> dict:
        return {"meeting_date": self.meeting_date.isoformat(), "meeting_time": self.meeting_time}
