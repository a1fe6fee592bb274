"""Numeric input normalization shared by the calculators."""

import math
from typing import Any


def to_amount(value: Any) -> float:
    """Coerce a user-supplied number to float, degrading to 0.

    Missing (None), empty, non-numeric and NaN inputs all become 0.0 so the
    calculators produce neutral results instead of raising. Numeric strings
    such as "1,250.5" are accepted.

    Example:
        to_amount(None)      # -> 0.0
        to_amount("12,000")  # -> 12000.0
        to_amount("abc")     # -> 0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.replace(",", "").strip()
        if not value:
            return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount):
        return 0.0
    return amount


def to_optional_amount(value: Any) -> "float | None":
    """Like to_amount, but keeps "not supplied" distinct from zero.

    Used for optional prices where absence selects a different branch
    (e.g., no sell price means proceeds equal the vest value).
    """
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return to_amount(value)
