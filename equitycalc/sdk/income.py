"""Annual baseline income projection.

The tax on equity income depends on what else is earned in the year. The
baseline is projected as gross earned so far plus the monthly salary for
every month still left, counting the current month.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .amounts import to_amount

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class YearlyGross:
    """Projected annual gross income (ILS)."""

    earned_so_far: float
    monthly_salary: float
    months_remaining: int
    yearly_gross: float


def months_remaining_in_year(today: Optional[date] = None) -> int:
    """Months left in the year including the current one (January -> 12)."""
    today = today or date.today()
    return MONTHS_PER_YEAR - (today.month - 1)


def project_yearly_gross(
    earned_so_far: float,
    monthly_salary: float,
    today: Optional[date] = None,
) -> YearlyGross:
    """Project the year's gross income from YTD earnings and salary.

    Example:
        # In October (3 months left incl. October), 300k earned, 30k/month
        project_yearly_gross(300000, 30000, date(2026, 10, 19)).yearly_gross  # -> 390000.0
    """
    earned = to_amount(earned_so_far)
    salary = to_amount(monthly_salary)
    months = months_remaining_in_year(today)
    return YearlyGross(
        earned_so_far=earned,
        monthly_salary=salary,
        months_remaining=months,
        yearly_gross=earned + salary * months,
    )
