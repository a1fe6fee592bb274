"""Surtax (mas yasaf) on income that pushes the year above the threshold."""

from ..amounts import to_amount
from .schemas import TaxConfiguration


def calc_surtax(
    config: TaxConfiguration,
    base_yearly_gross: float,
    income_subject_to_surtax: float,
) -> float:
    """Surtax on the part of the income above the annual threshold.

    The taxed amount is capped both by the income itself and by how far
    baseline + income exceeds the threshold:

        max(0, min(income, baseline + income - threshold)) x rate

    Example:
        # Baseline exactly at the 721,560 threshold: all 10,000 is surtaxed
        calc_surtax(config, 721560, 10000)  # -> 500.0
        # Baseline 700,000: combined 710,000 stays below the threshold
        calc_surtax(config, 700000, 10000)  # -> 0.0
    """
    base = to_amount(base_yearly_gross)
    income = to_amount(income_subject_to_surtax)
    above_threshold = base + income - config.surtax.threshold
    return max(0.0, min(income, above_threshold)) * config.surtax.rate
