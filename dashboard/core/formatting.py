"""Money & Date Formatting — pure conversions between stored and display values.

Invariants:
    - Stored money is always an integer count of minor units (cents), at most MAX_MINOR_UNITS
    - Half a cent rounds away from zero (0.125 → 13 cents), never to even
    - to_minor_units(from_minor_units(c)) == c for every integer c
    - Display strings are en-US: "$1,234.56", "Oct 19, 2026"
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from dashboard.core.domain_types import MinorUnits

# invoices.amount is a 32-bit INTEGER column
MAX_MINOR_UNITS = 2**31 - 1
MAX_AMOUNT = MAX_MINOR_UNITS / 100


def to_minor_units(amount: float) -> MinorUnits:
    """Scale a major-unit form amount to stored cents, half-cents rounding up."""
    cents = Decimal(str(amount)).scaleb(2).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return MinorUnits(int(cents))


def from_minor_units(cents: int) -> float:
    return cents / 100


def format_currency(cents: int | None) -> str:
    """Format cents as a USD display string. None formats as $0.00."""
    cents = cents or 0
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents) / 100:,.2f}"


def normalize_date(value: date | datetime | str) -> date:
    """Coerce a datetime or ISO-8601 string to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(value).date()


def format_date_to_local(value: date | datetime | str) -> str:
    d = normalize_date(value)
    return f"{d:%b} {d.day}, {d.year}"
