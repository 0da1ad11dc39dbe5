from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Hashable, Mapping, Protocol, Sequence

from .model import PaymentEvent


class PaymentRepository(Protocol):
    def list_for_year(self, *, year: int) -> Mapping[Hashable, Sequence[PaymentEvent]]:
        """Payments dated in ``year`` grouped by member, each list in recording order."""

        raise NotImplementedError

    def list_for_member(self, *, member_id: int, year: int) -> Sequence[PaymentEvent]:
        raise NotImplementedError

    def create_payment(self, *, member_id: int, amount: Decimal, paid_on: date) -> int:
        raise NotImplementedError
