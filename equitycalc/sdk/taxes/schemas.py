"""Pydantic schemas for tax configuration.

These schemas validate the tax_rules/*.yaml files and give the engine a
single immutable value holding every bracket, rate and threshold for a
tax year. A TaxConfiguration is frozen: it is built once and shared
read-only by every calculation.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TaxBracket(BaseModel):
    """Single progressive income-tax bracket."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    up_to: Optional[float] = Field(default=None, gt=0, description="Upper bound (None for the top bracket)")
    rate: float = Field(..., ge=0, le=1, description="Tax rate as decimal")

    @property
    def upper_bound(self) -> float:
        """Upper bound as a number; the top bracket is unbounded."""
        return float("inf") if self.up_to is None else self.up_to


class SocialInsuranceRules(BaseModel):
    """National Insurance (Bituach Leumi) and health tax, monthly two-tier."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    low_threshold_monthly: float = Field(..., gt=0, description="Monthly income taxed at the low rates")
    max_monthly: float = Field(..., gt=0, description="Monthly income above which nothing is charged")
    ni_low_rate: float = Field(..., ge=0, le=1)
    ni_high_rate: float = Field(..., ge=0, le=1)
    health_low_rate: float = Field(..., ge=0, le=1)
    health_high_rate: float = Field(..., ge=0, le=1)

    @model_validator(mode="after")
    def _check_thresholds(self) -> "SocialInsuranceRules":
        if self.max_monthly < self.low_threshold_monthly:
            raise ValueError("max_monthly must not be below low_threshold_monthly")
        return self

    @property
    def combined_low_rate(self) -> float:
        return self.ni_low_rate + self.health_low_rate

    @property
    def combined_high_rate(self) -> float:
        return self.ni_high_rate + self.health_high_rate


class SurtaxRules(BaseModel):
    """Surtax (mas yasaf) on annual income above a threshold."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: float = Field(..., ge=0, le=1)
    threshold: float = Field(..., ge=0, description="Annual income above which surtax applies")


class TaxConfiguration(BaseModel):
    """Complete tax rules for a year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    tax_year: int
    income_tax_brackets: tuple[TaxBracket, ...]
    social_insurance: SocialInsuranceRules
    capital_gains_rate: float = Field(..., ge=0, le=1)
    surtax: SurtaxRules
    maturation_months: int = Field(default=24, ge=0, description="Section 102 holding period from grant")

    @field_validator("income_tax_brackets")
    @classmethod
    def _check_brackets(cls, brackets: tuple[TaxBracket, ...]) -> tuple[TaxBracket, ...]:
        if not brackets:
            raise ValueError("at least one income tax bracket is required")
        if brackets[-1].up_to is not None:
            raise ValueError("the last income tax bracket must be unbounded (omit up_to)")
        previous = 0.0
        for bracket in brackets[:-1]:
            if bracket.up_to is None:
                raise ValueError("only the last income tax bracket may be unbounded")
            if bracket.up_to <= previous:
                raise ValueError(f"brackets must ascend by up_to: {bracket.up_to} after {previous}")
            previous = bracket.up_to
        return brackets

    @property
    def top_rate(self) -> float:
        return self.income_tax_brackets[-1].rate


# Shipped 2026 Israeli tax year. Mirrors tax_rules/2026.yaml.
DEFAULT_TAX_CONFIGURATION = TaxConfiguration(
    tax_year=2026,
    income_tax_brackets=(
        TaxBracket(up_to=84_120, rate=0.10),
        TaxBracket(up_to=120_720, rate=0.14),
        TaxBracket(up_to=193_800, rate=0.20),
        TaxBracket(up_to=269_280, rate=0.31),
        TaxBracket(up_to=560_280, rate=0.35),
        TaxBracket(up_to=721_560, rate=0.47),
        TaxBracket(rate=0.50),
    ),
    social_insurance=SocialInsuranceRules(
        low_threshold_monthly=7_703,
        max_monthly=51_910,
        ni_low_rate=0.0104,
        ni_high_rate=0.07,
        health_low_rate=0.0323,
        health_high_rate=0.0517,
    ),
    capital_gains_rate=0.25,
    surtax=SurtaxRules(rate=0.05, threshold=721_560),
    maturation_months=24,
)
