"""Section 102 maturation (holding period) policy.

Shares sold at least `maturation_months` after the grant date are on the
capital-gains track; anything earlier is taxed as ordinary income. The
boundary is inclusive: selling exactly on the maturation date counts.

is_matured() keeps the two-date call form and defaults to the shipped
configuration; the timing helpers take the configuration first, like the
tax calculators.
"""

import logging
from datetime import date
from typing import Optional

from .dates import DateInput, add_months, parse_local_date
from .taxes.schemas import DEFAULT_TAX_CONFIGURATION, TaxConfiguration

logger = logging.getLogger(__name__)

# Window for "coming soon" badges on vests and maturations
COMING_SOON_MONTHS = 1


def get_maturation_date(config: TaxConfiguration, grant_date: DateInput) -> Optional[date]:
    """Grant date + the configured maturation period.

    Returns None if the grant date is unparseable or the maturation date
    falls past the last representable date.
    """
    grant = parse_local_date(grant_date)
    if grant is None:
        return None
    try:
        return add_months(grant, config.maturation_months)
    except (ValueError, OverflowError):
        logger.debug(f"Maturation date of grant {grant_date!r} is out of range")
        return None


def is_matured(
    grant_date: DateInput,
    sell_date: DateInput,
    config: TaxConfiguration = DEFAULT_TAX_CONFIGURATION,
) -> bool:
    """True if a sale on sell_date is on or after the maturation date.

    Example:
        is_matured("15/3/22", "15/3/24")  # -> True  (exactly 24 months)
        is_matured("15/3/22", "14/3/24")  # -> False (one day short)
        is_matured("15/3/22", "garbage")  # -> False
    """
    maturation = get_maturation_date(config, grant_date)
    sell = parse_local_date(sell_date)
    if maturation is None or sell is None:
        if grant_date and sell_date:
            logger.debug(f"Unusable maturation dates grant={grant_date!r} sell={sell_date!r}; not matured")
        return False
    return sell >= maturation


def is_grant_matured(
    config: TaxConfiguration,
    grant_date: DateInput,
    today: Optional[date] = None,
) -> bool:
    """True if the grant has passed its maturation period as of today."""
    return is_matured(grant_date, today or date.today(), config)


def days_until_maturation(
    config: TaxConfiguration,
    grant_date: DateInput,
    today: Optional[date] = None,
) -> Optional[int]:
    """Days left until maturation (0 once matured), or None if unknown."""
    maturation = get_maturation_date(config, grant_date)
    if maturation is None:
        return None
    return max(0, (maturation - (today or date.today())).days)


def _within_next_month(d: date, today: date) -> bool:
    try:
        horizon = add_months(today, COMING_SOON_MONTHS)
    except (ValueError, OverflowError):
        return today < d
    return today < d <= horizon


def is_maturation_coming_soon(
    config: TaxConfiguration,
    grant_date: DateInput,
    today: Optional[date] = None,
) -> bool:
    """True if the grant matures after today but within the next month."""
    maturation = get_maturation_date(config, grant_date)
    if maturation is None:
        return False
    return _within_next_month(maturation, today or date.today())


def is_vest_coming_soon(vest_date: DateInput, today: Optional[date] = None) -> bool:
    """True if the vest date is after today but within the next month."""
    vest = parse_local_date(vest_date)
    if vest is None:
        return False
    return _within_next_month(vest, today or date.today())
