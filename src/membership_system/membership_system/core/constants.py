"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_SESSION_DAYS = 30
DEFAULT_MONTHLY_DUE_AMOUNT = Decimal("20")
DEFAULT_CURRENCY_SYMBOL = "₱"
DEFAULT_MEETING_TIME = "12:00"

MONTHS = (
    "JANUARY",
    "FEBRUARY",
    "MARCH",
    "APRIL",
    "MAY",
    "JUNE",
    "JULY",
    "AUGUST",
    "SEPTEMBER",
    "OCTOBER",
    "NOVEMBER",
    "DECEMBER",
)
