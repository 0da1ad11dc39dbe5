from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Hashable, Optional

from ..common.formatting import format_currency
from ..core.constants import DEFAULT_CURRENCY_SYMBOL
from ..core.enums import DuesStatus


@dataclass(frozen=True)
class PaymentEvent:
    """A single recorded dues payment.

    ``amount`` and ``date`` are kept as received; the reconciler decides
    whether they are usable.
    """

    member_id: Hashable
    amount: Any
    date: Any
    payment_id: Optional[int] = None


@dataclass(frozen=True)
class MonthlyDue:
    month: int
    year: int
    amount_paid: Decimal
    date_paid: Optional[date] = None

    def to_dict(self, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> dict:
        return {
            "month": self.month,
            "year": self.year,
            "amount_paid": str(self.amount_paid),
            "amount_paid_display": format_currency(self.amount_paid, symbol),
            "date_paid": self.date_paid.isoformat() if self.date_paid else None,
        }


@dataclass(frozen=True)
class MemberDuesRecord:
    """Read-model: one member's ledger for one year. Never persisted."""

    member_id: Hashable
    member_name: str
    monthly_dues: tuple[MonthlyDue, ...]
    total_paid: Decimal
    total_due: Decimal
    status: DuesStatus

    @property
    def balance(self) -> Decimal:
        return self.total_paid - self.total_due

    def to_dict(self, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> dict:
        return {
            "member_id": self.member_id,
            "member_name": self.member_name,
            "monthly_dues": [m.to_dict(symbol) for m in self.monthly_dues],
            "total_paid": str(self.total_paid),
            "total_due": str(self.total_due),
            "balance": str(self.balance),
            "total_paid_display": format_currency(self.total_paid, symbol),
            "total_due_display": format_currency(self.total_due, symbol),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class ReconciliationReport:
    records: tuple[MemberDuesRecord, ...]
    excluded_events: int = 0
