from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import MonthlyAttendance


class AttendanceRepository(Protocol):
    def list_for_month(self, *, month: int, year: int) -> Sequence[MonthlyAttendance]:
        raise NotImplementedError

    def get(self, *, member_id: int, month: int, year: int) -> Optional[MonthlyAttendance]:
        raise NotImplementedError

    def upsert(self, record: MonthlyAttendance) -> None:
        """Insert or overwrite the row for (member, month, year)."""

        raise NotImplementedError
