"""National Insurance (Bituach Leumi) and health tax on additional income.

Thresholds are monthly. The annual baseline is flattened to an average
month (baseline / 12) and the whole additional income is charged as if it
landed in that single month (the vest or sale month). No annual ceiling is
tracked across the twelve months.
"""

from dataclasses import dataclass

from ..amounts import to_amount
from .income_tax import calc_marginal_income_tax
from .schemas import SocialInsuranceRules, TaxConfiguration

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class SocialContributions:
    """NI and health tax owed on an incremental slice of income."""

    national_insurance: float
    health_tax: float

    @property
    def total(self) -> float:
        return self.national_insurance + self.health_tax


@dataclass(frozen=True)
class MarginalTax:
    """Ordinary ("mas avoda") tax on additional employment income."""

    income_tax: float
    national_insurance: float
    health_tax: float

    @property
    def total(self) -> float:
        return self.income_tax + self.national_insurance + self.health_tax


def _tiered_charge(rules: SocialInsuranceRules, monthly: float, low_rate: float, high_rate: float) -> float:
    """Two-tier monthly charge: low rate up to the threshold, high rate up to the max."""
    if monthly <= 0:
        return 0.0
    low = min(monthly, rules.low_threshold_monthly)
    high = min(
        max(monthly - rules.low_threshold_monthly, 0.0),
        rules.max_monthly - rules.low_threshold_monthly,
    )
    return low * low_rate + high * high_rate


def calc_monthly_national_insurance(config: TaxConfiguration, base_monthly: float, additional_monthly: float) -> float:
    """NI on additional income in a month with the given base income."""
    rules = config.social_insurance
    total = base_monthly + additional_monthly
    return (
        _tiered_charge(rules, total, rules.ni_low_rate, rules.ni_high_rate)
        - _tiered_charge(rules, base_monthly, rules.ni_low_rate, rules.ni_high_rate)
    )


def calc_monthly_health_tax(config: TaxConfiguration, base_monthly: float, additional_monthly: float) -> float:
    """Health tax on additional income in a month with the given base income."""
    rules = config.social_insurance
    total = base_monthly + additional_monthly
    return (
        _tiered_charge(rules, total, rules.health_low_rate, rules.health_high_rate)
        - _tiered_charge(rules, base_monthly, rules.health_low_rate, rules.health_high_rate)
    )


def calc_social_contributions(
    config: TaxConfiguration,
    base_yearly_gross: float,
    additional_income: float,
) -> SocialContributions:
    """NI and health tax on additional income given the annual baseline.

    Example:
        # Salary of 120,000/year = 10,000/month, already above the low tier.
        # 5,000 more in one month is all charged at the high rates.
        c = calc_social_contributions(config, 120000, 5000)
        c.national_insurance  # -> 350.0  (5000 x 7%)
        c.health_tax          # -> 258.5  (5000 x 5.17%)
    """
    base_monthly = max(0.0, to_amount(base_yearly_gross)) / MONTHS_PER_YEAR
    additional = max(0.0, to_amount(additional_income))
    return SocialContributions(
        national_insurance=calc_monthly_national_insurance(config, base_monthly, additional),
        health_tax=calc_monthly_health_tax(config, base_monthly, additional),
    )


def calc_marginal_tax(
    config: TaxConfiguration,
    base_yearly_gross: float,
    additional_income: float,
) -> MarginalTax:
    """Full ordinary tax on additional employment income: income tax + NI + health."""
    contributions = calc_social_contributions(config, base_yearly_gross, additional_income)
    return MarginalTax(
        income_tax=calc_marginal_income_tax(config, base_yearly_gross, additional_income),
        national_insurance=contributions.national_insurance,
        health_tax=contributions.health_tax,
    )
