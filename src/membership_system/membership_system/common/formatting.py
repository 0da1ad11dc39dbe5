from __future__ import annotations

from decimal import Decimal

from ..core.constants import DEFAULT_CURRENCY_SYMBOL


def format_initials(given_name: str) -> str:
    """'Juan Carlos' -> 'J.C.'"""
    tokens = given_name.split()
    return ".".join(token[0].upper() for token in tokens) + "."


def format_member_name(surname: str, given_name: str) -> str:
    """Render a member as 'Surname, I.' (one initial per given-name token)."""
    return f"{surname}, {format_initials(given_name)}"


def format_currency(amount: Decimal, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    return f"{symbol}{Decimal(amount):.2f}"
