"""Net proceeds of RSU and ESPP sales under Section 102.

Each calculation selects one of two tax tracks:

- Matured: sold at least the maturation period after grant. The
  appreciation beyond the income-taxed value is taxed as a capital gain.
- Unmatured: sold earlier. The equity income is taxed as ordinary
  employment income (income tax + NI + health).

The result is a Matured or Unmatured TaxBreakdown so callers can present
the two tracks distinctly. Prices are in USD; every amount in the
breakdown is in ILS (price x shares x exchange rate).

Inputs never raise: missing prices count as 0 and unparseable dates fall
back to the unmatured track.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Union

from .amounts import to_amount, to_optional_amount
from .dates import DateInput
from .maturation import is_matured
from .taxes.capital_gains import calc_capital_gains_tax
from .taxes.income_tax import calc_marginal_income_tax
from .taxes.schemas import TaxConfiguration
from .taxes.social import MarginalTax, calc_marginal_tax
from .taxes.surtax import calc_surtax

logger = logging.getLogger(__name__)

# ESPP offering period used to estimate the share count from contributions
ESPP_OFFERING_MONTHS = 6


@dataclass(frozen=True)
class VestEvent:
    """One RSU vest as recorded for a grant."""

    shares: float
    vest_price: Optional[float]
    exchange_rate: float
    grant_date: DateInput
    vest_date: DateInput
    sell_price: Optional[float] = None
    sell_date: DateInput = None
    sold: bool = False
    grant_name: str = ""
    total_shares_in_grant: float = 0


@dataclass(frozen=True)
class EsppEvent:
    """One ESPP purchase."""

    shares: float
    market_price: float
    purchase_price: float
    contribution: float
    exchange_rate: float
    grant_date: DateInput
    sell_price: Optional[float] = None
    sell_date: DateInput = None


@dataclass(frozen=True)
class TaxBreakdown:
    """Full tax breakdown of one sale (ILS).

    income is the income-taxable value: the vest value for RSUs, the
    discount spread for ESPP. cost is what the employee paid (ESPP only).
    """

    income: float
    proceeds: float
    cost: float
    income_tax: float
    national_insurance: float
    health_tax: float
    capital_gains_tax: float
    surtax: float
    total_tax: float
    net: float

    @property
    def matured(self) -> bool:
        return isinstance(self, Matured)

    @property
    def ordinary_tax(self) -> float:
        """Income tax + NI + health."""
        return self.income_tax + self.national_insurance + self.health_tax

    @property
    def effective_rate(self) -> float:
        """Total tax as a share of proceeds (0 when there are no proceeds)."""
        return self.total_tax / self.proceeds if self.proceeds else 0.0

    def to_dict(self) -> dict:
        return {
            "track": "matured" if self.matured else "unmatured",
            "matured": self.matured,
            "income": self.income,
            "proceeds": self.proceeds,
            "cost": self.cost,
            "income_tax": self.income_tax,
            "national_insurance": self.national_insurance,
            "health_tax": self.health_tax,
            "capital_gains_tax": self.capital_gains_tax,
            "surtax": self.surtax,
            "total_tax": self.total_tax,
            "net": self.net,
        }


@dataclass(frozen=True)
class Matured(TaxBreakdown):
    """Sale after the maturation period (capital-gains track)."""


@dataclass(frozen=True)
class Unmatured(TaxBreakdown):
    """Sale before the maturation period (ordinary-income track)."""


TaxResult = Union[Matured, Unmatured]

_NO_ORDINARY_TAX = MarginalTax(income_tax=0.0, national_insurance=0.0, health_tax=0.0)


def _select_track(config: TaxConfiguration, grant_date: DateInput, sell_date: DateInput) -> bool:
    """Matured only when both dates are given and the sale is past maturation."""
    if not grant_date or not sell_date:
        return False
    return is_matured(grant_date, sell_date, config)


def calc_rsu_net(
    config: TaxConfiguration,
    shares: float,
    vest_price: Optional[float],
    exchange_rate: float,
    fees: float,
    base_yearly_gross: float,
    sell_price: Optional[float] = None,
    grant_date: DateInput = None,
    sell_date: DateInput = None,
) -> TaxResult:
    """Calculate RSU net proceeds for a single vest.

    Matured track:
        - income tax + NI + health on the vest value
        - capital gains on (sell - vest) x shares x rate if positive
        - surtax on the vest value
    Unmatured track:
        - income tax + NI + health on the whole proceeds
        - no capital gains split
        - surtax on the whole proceeds

    Without a sell price, proceeds equal the vest value.

    Args:
        config: Tax configuration for the year
        shares: Number of shares sold
        vest_price: Share price on the vest date (USD)
        exchange_rate: USD -> ILS
        fees: Broker/bank fees (ILS)
        base_yearly_gross: Annual income excluding this sale (ILS)
        sell_price: Sale price (USD), None if not selling yet
        grant_date: Grant date (D/M/YY)
        sell_date: Sale date (D/M/YY)

    Returns:
        Matured or Unmatured TaxBreakdown

    Example:
        r = calc_rsu_net(config, 100, 50, 3.7, 0, 400000,
                         sell_price=60, grant_date="1/1/22", sell_date="1/6/24")
        r.income             # -> 18500.0
        r.capital_gains_tax  # -> 925.0
    """
    shares = to_amount(shares)
    vest_price = to_amount(vest_price)
    rate = to_amount(exchange_rate)
    fees = to_amount(fees)
    baseline = to_amount(base_yearly_gross)
    sell_price = to_optional_amount(sell_price)

    vest_income = shares * vest_price * rate
    matured = _select_track(config, grant_date, sell_date)
    proceeds = shares * sell_price * rate if sell_price is not None else vest_income

    capital_gains_tax = 0.0
    if matured:
        # Vest value is work income; appreciation after vest is a capital gain
        marginal = calc_marginal_tax(config, baseline, vest_income)
        if sell_price is not None:
            capital_gains_tax = calc_capital_gains_tax(config, (sell_price - vest_price) * shares * rate)
        surtax_base = vest_income
    else:
        # Entire proceeds are work income, no capital gains benefit
        marginal = calc_marginal_tax(config, baseline, proceeds)
        surtax_base = proceeds

    surtax = calc_surtax(config, baseline, surtax_base)
    total_tax = marginal.total + capital_gains_tax + surtax
    net = proceeds - total_tax - fees

    logger.debug(
        f"RSU {shares:g} shares: track={'matured' if matured else 'unmatured'} "
        f"proceeds={proceeds:.2f} tax={total_tax:.2f} net={net:.2f}"
    )

    variant = Matured if matured else Unmatured
    return variant(
        income=vest_income,
        proceeds=proceeds,
        cost=0.0,
        income_tax=marginal.income_tax,
        national_insurance=marginal.national_insurance,
        health_tax=marginal.health_tax,
        capital_gains_tax=capital_gains_tax,
        surtax=surtax,
        total_tax=total_tax,
        net=net,
    )


def calc_espp_net(
    config: TaxConfiguration,
    shares: float,
    market_price: float,
    purchase_price: float,
    contribution: float,
    exchange_rate: float,
    fees: float,
    base_yearly_gross: float,
    sell_price: Optional[float] = None,
    grant_date: DateInput = None,
    sell_date: DateInput = None,
) -> TaxResult:
    """Calculate ESPP net proceeds for a single purchase.

    Matured track:
        - capital gains on (proceeds - cost)
        - no ordinary tax, no surtax
    Unmatured track:
        - income tax + NI + health on the discount income
          ((market - purchase) x shares x rate)
        - capital gains on (sell - market) x shares x rate if positive
        - no surtax

    Proceeds use the market price when no sell price is given.
    Net = proceeds - cost - total tax - fees, where cost = contribution x rate.
    """
    shares = to_amount(shares)
    market_price = to_amount(market_price)
    purchase_price = to_amount(purchase_price)
    rate = to_amount(exchange_rate)
    fees = to_amount(fees)
    baseline = to_amount(base_yearly_gross)
    sell_price = to_optional_amount(sell_price)

    discount_income = (market_price - purchase_price) * shares * rate
    matured = _select_track(config, grant_date, sell_date)
    effective_sell = sell_price if sell_price is not None else market_price
    proceeds = shares * effective_sell * rate
    cost = to_amount(contribution) * rate

    if matured:
        marginal = _NO_ORDINARY_TAX
        capital_gains_tax = calc_capital_gains_tax(config, proceeds - cost)
    else:
        marginal = calc_marginal_tax(config, baseline, discount_income)
        capital_gains_tax = 0.0
        if sell_price is not None:
            capital_gains_tax = calc_capital_gains_tax(config, (sell_price - market_price) * shares * rate)

    total_tax = marginal.total + capital_gains_tax
    net = proceeds - cost - total_tax - fees

    logger.debug(
        f"ESPP {shares:g} shares: track={'matured' if matured else 'unmatured'} "
        f"proceeds={proceeds:.2f} cost={cost:.2f} tax={total_tax:.2f} net={net:.2f}"
    )

    variant = Matured if matured else Unmatured
    return variant(
        income=discount_income,
        proceeds=proceeds,
        cost=cost,
        income_tax=marginal.income_tax,
        national_insurance=marginal.national_insurance,
        health_tax=marginal.health_tax,
        capital_gains_tax=capital_gains_tax,
        surtax=0.0,
        total_tax=total_tax,
        net=net,
    )


def calc_rsu_net_for_event(
    config: TaxConfiguration,
    event: VestEvent,
    fees: float,
    base_yearly_gross: float,
) -> TaxResult:
    """calc_rsu_net() for a VestEvent."""
    return calc_rsu_net(
        config,
        shares=event.shares,
        vest_price=event.vest_price,
        exchange_rate=event.exchange_rate,
        fees=fees,
        base_yearly_gross=base_yearly_gross,
        sell_price=event.sell_price,
        grant_date=event.grant_date,
        sell_date=event.sell_date,
    )


def calc_espp_net_for_event(
    config: TaxConfiguration,
    event: EsppEvent,
    fees: float,
    base_yearly_gross: float,
) -> TaxResult:
    """calc_espp_net() for an EsppEvent."""
    return calc_espp_net(
        config,
        shares=event.shares,
        market_price=event.market_price,
        purchase_price=event.purchase_price,
        contribution=event.contribution,
        exchange_rate=event.exchange_rate,
        fees=fees,
        base_yearly_gross=base_yearly_gross,
        sell_price=event.sell_price,
        grant_date=event.grant_date,
        sell_date=event.sell_date,
    )


# =============================================================================
# ESPP SELL FORM HELPERS
# =============================================================================


def estimate_espp_shares(
    monthly_contribution: float,
    purchase_price: float,
    exchange_rate: float,
    months: int = ESPP_OFFERING_MONTHS,
) -> int:
    """Estimate shares bought in an offering from monthly contributions.

    Contributions are in ILS, the purchase price in USD. Returns 0 when any
    input is missing.
    """
    contribution = to_amount(monthly_contribution)
    price = to_amount(purchase_price)
    rate = to_amount(exchange_rate)
    if not contribution or not price or not rate:
        return 0
    return max(0, math.floor((contribution * months) / (price * rate)))


@dataclass(frozen=True)
class EsppSaleEstimate:
    """Quick estimate of an ESPP sale taxed entirely as work income."""

    proceeds: float
    cost: float
    gain: float
    income_tax: float
    ni_and_health: float
    surtax: float
    total_tax: float
    net: float


def estimate_espp_sale(
    config: TaxConfiguration,
    shares: float,
    purchase_price: float,
    sell_price: float,
    exchange_rate: float,
    base_yearly_gross: float,
) -> Optional[EsppSaleEstimate]:
    """Estimate tax on selling ESPP shares with the whole gain as work income.

    Unlike calc_espp_net(), NI + health here use the annual ceiling
    (max_monthly x 12) at the combined high rate, and surtax applies to the
    gain. Returns None when shares, prices or the exchange rate are missing.
    """
    shares = to_amount(shares)
    purchase_price = to_amount(purchase_price)
    sell_price = to_amount(sell_price)
    rate = to_amount(exchange_rate)
    baseline = to_amount(base_yearly_gross)
    if not shares or not purchase_price or not sell_price or not rate:
        return None

    rules = config.social_insurance
    proceeds = shares * sell_price * rate
    cost = shares * purchase_price * rate
    gain = proceeds - cost

    income_tax = calc_marginal_income_tax(config, baseline, gain)
    ni_ceiling = rules.max_monthly * 12
    ni_base = min(baseline, ni_ceiling)
    ni_and_health = max(0.0, min(gain, ni_ceiling - ni_base)) * rules.combined_high_rate
    surtax = calc_surtax(config, baseline, gain)
    total_tax = income_tax + ni_and_health + surtax

    return EsppSaleEstimate(
        proceeds=proceeds,
        cost=cost,
        gain=gain,
        income_tax=income_tax,
        ni_and_health=ni_and_health,
        surtax=surtax,
        total_tax=total_tax,
        net=proceeds - total_tax,
    )
