"""Local (D/M/YY) date parsing and calendar arithmetic.

Grant, vest and sell dates arrive as day-first strings, e.g. "15/3/24" or
"15/03/2024". Two-digit years are 2000+yy. Everything downstream works on
datetime.date values produced by parse_local_date().

Out-of-range days and months roll forward the way spreadsheet dates do:
31/2/24 is 2/3/24 and 1/13/24 is 1/1/25.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Union

DateInput = Union[str, date, None]


def _rolled_date(year: int, month: int, day: int) -> date:
    """Build a date, carrying month and day overflow into the following units.

    Raises:
        ValueError, OverflowError: If the result is outside date.min..date.max
    """
    months = month - 1
    year += months // 12
    month = months % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def parse_local_date(value: DateInput) -> Optional[date]:
    """Parse a D/M/YY or D/M/YYYY date string.

    Args:
        value: Date string, or an existing date/datetime (returned as date)

    Returns:
        The calendar date, or None if the value is empty, has the wrong
        shape or non-numeric parts, or lands outside the representable range

    Example:
        parse_local_date("5/1/24")     # -> date(2024, 1, 5)
        parse_local_date("05/01/2024") # -> date(2024, 1, 5)
        parse_local_date("31/2/24")    # -> date(2024, 3, 2)
        parse_local_date("2024-01-05") # -> None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    parts = str(value).strip().split("/")
    if len(parts) != 3:
        return None
    try:
        day, month, year = (int(p.strip()) for p in parts)
    except ValueError:
        return None
    if year < 100:
        year += 2000
    try:
        return _rolled_date(year, month, day)
    except (ValueError, OverflowError):
        return None


def add_months(d: date, months: int) -> date:
    """Add calendar months, rolling an out-of-range day into the next month.

    31/1 + 1 month is 3/3 (or 2/3 in a leap year) and 29/2/2024 + 24 months
    is 1/3/2026: the day-of-month is kept and any overflow carries forward.

    Raises:
        ValueError, OverflowError: If the result is past date.max
    """
    return _rolled_date(d.year, d.month + months, d.day)


def format_local_date(d: date) -> str:
    """Format as D/M/YY without zero padding (e.g., 5/1/24)."""
    return f"{d.day}/{d.month}/{d.year % 100}"


def to_local_date_string(iso_date: str) -> str:
    """Convert an ISO date (YYYY-MM-DD) to DD/MM/YY; "" if unparseable."""
    try:
        d = datetime.strptime(str(iso_date).strip(), "%Y-%m-%d").date()
    except ValueError:
        return ""
    return f"{d.day:02d}/{d.month:02d}/{d.year % 100:02d}"


def from_local_date_string(value: str) -> str:
    """Convert a D/M/YY(YY) date to ISO (YYYY-MM-DD); "" if unparseable."""
    d = parse_local_date(value)
    if d is None:
        return ""
    return d.isoformat()


def is_future_date(value: DateInput, today: Optional[date] = None) -> bool:
    """True if the date is after today. Unparseable dates are not in the future."""
    d = parse_local_date(value)
    if d is None:
        return False
    return d > (today or date.today())
