"""Progressive income tax on an incremental slice of annual income.

Equity income (an RSU vest, an ESPP discount, an unmatured sale) lands on
top of the salary already earned in the year. The tax owed on it is the
difference between the cumulative bracket tax with and without it.
"""

from dataclasses import dataclass
from typing import List

from ..amounts import to_amount
from .schemas import TaxConfiguration


@dataclass(frozen=True)
class BracketTax:
    """Tax assessed within one bracket for display."""

    rate: float
    taxable: float
    tax: float


def calc_income_tax(config: TaxConfiguration, income: float) -> float:
    """Cumulative progressive income tax on an annual income.

    Walks brackets ascending from zero. Each bracket taxes the part of the
    income between the previous upper bound and its own. Tax on zero (or
    negative) income is zero.
    """
    income = to_amount(income)
    tax_owed = 0.0
    previous_bracket_max = 0.0

    for bracket in config.income_tax_brackets:
        if income <= previous_bracket_max:
            break
        income_in_this_bracket = min(income, bracket.upper_bound) - previous_bracket_max
        tax_owed += max(0.0, income_in_this_bracket) * bracket.rate
        previous_bracket_max = bracket.upper_bound

    return tax_owed


def calc_marginal_income_tax(
    config: TaxConfiguration,
    base_yearly_gross: float,
    additional_income: float,
) -> float:
    """Income tax owed on additional income given the year's baseline.

    Args:
        config: Tax configuration for the year
        base_yearly_gross: Income already earned/projected for the year
        additional_income: The incremental slice being taxed

    Returns:
        tax_on(baseline + additional) - tax_on(baseline)

    Example:
        # Baseline at the 10%/14% edge: every extra shekel is taxed at 14%
        calc_marginal_income_tax(config, 84120, 1000)  # -> 140.0
    """
    base = max(0.0, to_amount(base_yearly_gross))
    additional = to_amount(additional_income)
    if additional <= 0:
        return 0.0
    return calc_income_tax(config, base + additional) - calc_income_tax(config, base)


def calc_income_tax_brackets(
    config: TaxConfiguration,
    base_yearly_gross: float,
    additional_income: float,
) -> List[BracketTax]:
    """Bracket-by-bracket breakdown of the tax on additional income.

    Walks only the band [baseline, baseline + additional], so brackets the
    baseline has already filled are skipped and untouched brackets above
    the band are omitted. The taxes sum to calc_marginal_income_tax().
    """
    result: List[BracketTax] = []
    remaining = to_amount(additional_income)
    previous = max(0.0, to_amount(base_yearly_gross))

    for bracket in config.income_tax_brackets:
        if remaining <= 0:
            break
        if previous >= bracket.upper_bound:
            continue
        available = bracket.upper_bound - previous
        taxable = min(remaining, available)
        if taxable > 0:
            result.append(BracketTax(rate=bracket.rate, taxable=taxable, tax=taxable * bracket.rate))
        remaining -= taxable
        previous = bracket.upper_bound

    return result
