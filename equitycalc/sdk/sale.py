"""Multi-vest RSU sale planning.

Selling several vests at once mixes tax tracks: vests whose grant has
matured go on the capital-gains track, the rest are ordinary income. The
plan aggregates each track separately, the combined total, and a "wait"
scenario: the same sale re-run on the date the last unmatured grant
matures, to show what waiting would save.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from .amounts import to_amount
from .dates import DateInput, is_future_date, parse_local_date
from .equity import TaxResult, VestEvent, calc_rsu_net
from .maturation import (
    get_maturation_date,
    is_matured,
    is_maturation_coming_soon,
    is_vest_coming_soon,
)
from .taxes.schemas import TaxConfiguration

logger = logging.getLogger(__name__)


@dataclass
class SaleAggregate:
    """Summed tax breakdown over a group of vests (ILS)."""

    shares: float = 0.0
    proceeds: float = 0.0
    income_tax: float = 0.0
    national_insurance: float = 0.0
    health_tax: float = 0.0
    capital_gains_tax: float = 0.0
    surtax: float = 0.0
    total_tax: float = 0.0
    net: float = 0.0

    def add(self, shares: float, result: TaxResult) -> None:
        self.shares += shares
        self.proceeds += result.proceeds
        self.income_tax += result.income_tax
        self.national_insurance += result.national_insurance
        self.health_tax += result.health_tax
        self.capital_gains_tax += result.capital_gains_tax
        self.surtax += result.surtax
        self.total_tax += result.total_tax
        self.net += result.net

    def merged(self, other: "SaleAggregate") -> "SaleAggregate":
        return SaleAggregate(
            shares=self.shares + other.shares,
            proceeds=self.proceeds + other.proceeds,
            income_tax=self.income_tax + other.income_tax,
            national_insurance=self.national_insurance + other.national_insurance,
            health_tax=self.health_tax + other.health_tax,
            capital_gains_tax=self.capital_gains_tax + other.capital_gains_tax,
            surtax=self.surtax + other.surtax,
            total_tax=self.total_tax + other.total_tax,
            net=self.net + other.net,
        )

    @property
    def is_empty(self) -> bool:
        return self.proceeds <= 0


@dataclass
class WaitScenario:
    """The same sale on the date the last unmatured grant matures."""

    sell_date: date
    aggregate: SaleAggregate

    @property
    def date_display(self) -> str:
        return self.sell_date.strftime("%d/%m/%Y")


@dataclass
class SalePlan:
    """Result of plan_rsu_sale()."""

    sell_date: date
    matured: SaleAggregate
    unmatured: SaleAggregate
    combined: SaleAggregate
    wait_scenario: Optional[WaitScenario] = None
    results: List[TaxResult] = field(default_factory=list)

    @property
    def any_matured(self) -> bool:
        return not self.matured.is_empty

    @property
    def any_unmatured(self) -> bool:
        return not self.unmatured.is_empty

    @property
    def wait_savings(self) -> float:
        """Extra net from waiting for maturation (0 without a wait scenario)."""
        if self.wait_scenario is None:
            return 0.0
        return self.wait_scenario.aggregate.net - self.combined.net


def _is_vest_matured(config: TaxConfiguration, vest: VestEvent, on: date) -> bool:
    """A vest is sellable on the matured track if vested and its grant matured."""
    if is_future_date(vest.vest_date, on):
        return False
    return is_matured(vest.grant_date, on, config)


def plan_rsu_sale(
    config: TaxConfiguration,
    vests: Iterable[VestEvent],
    sell_price: float,
    exchange_rate: float,
    base_yearly_gross: float,
    sell_date: DateInput = None,
) -> Optional[SalePlan]:
    """Plan selling a set of vests at one price on one date.

    Each vest is priced through calc_rsu_net() without fees. Vests missing a
    vest price use the sell price (no appreciation). Returns None when the
    price, exchange rate or vest list is missing.

    Args:
        config: Tax configuration for the year
        vests: Vests to sell
        sell_price: Sale price (USD)
        exchange_rate: USD -> ILS
        base_yearly_gross: Projected annual income excluding the sale (ILS)
        sell_date: Sale date (default: today)

    Returns:
        SalePlan with matured/unmatured/combined aggregates and, if any vest
        is unmatured, the wait-for-maturation scenario
    """
    vests = list(vests)
    price = to_amount(sell_price)
    rate = to_amount(exchange_rate)
    if not price or not rate or not vests:
        return None

    on = parse_local_date(sell_date) or date.today()
    matured_agg = SaleAggregate()
    unmatured_agg = SaleAggregate()
    results: List[TaxResult] = []
    latest_maturation: Optional[date] = None

    for vest in vests:
        vest_matured = _is_vest_matured(config, vest, on)
        vest_price = vest.vest_price if vest.vest_price is not None else price
        result = calc_rsu_net(
            config,
            shares=vest.shares,
            vest_price=vest_price,
            exchange_rate=rate,
            fees=0,
            base_yearly_gross=base_yearly_gross,
            sell_price=price,
            grant_date=vest.grant_date if vest_matured else None,
            sell_date=on if vest_matured else None,
        )
        results.append(result)
        (matured_agg if vest_matured else unmatured_agg).add(to_amount(vest.shares), result)

        if not vest_matured:
            maturation = get_maturation_date(config, vest.grant_date)
            if maturation and (latest_maturation is None or maturation > latest_maturation):
                latest_maturation = maturation

    wait_scenario = None
    if latest_maturation is not None:
        logger.debug(f"Unmatured vests in sale; projecting wait until {latest_maturation}")
        wait_agg = SaleAggregate()
        for vest in vests:
            vest_price = vest.vest_price if vest.vest_price is not None else price
            result = calc_rsu_net(
                config,
                shares=vest.shares,
                vest_price=vest_price,
                exchange_rate=rate,
                fees=0,
                base_yearly_gross=base_yearly_gross,
                sell_price=price,
                grant_date=vest.grant_date,
                sell_date=latest_maturation,
            )
            wait_agg.add(to_amount(vest.shares), result)
        wait_scenario = WaitScenario(sell_date=latest_maturation, aggregate=wait_agg)

    return SalePlan(
        sell_date=on,
        matured=matured_agg,
        unmatured=unmatured_agg,
        combined=matured_agg.merged(unmatured_agg),
        wait_scenario=wait_scenario,
        results=results,
    )


def order_vests_for_sale(
    config: TaxConfiguration,
    vests: Iterable[VestEvent],
    today: Optional[date] = None,
) -> List[VestEvent]:
    """Order unsold vests as sale candidates.

    Matured vests first, then unmatured ones, then those whose grant matures
    or which vest within the next month, then future vests. Sold and empty
    vests are dropped.
    """
    today = today or date.today()
    matured, unmatured, soon, future = [], [], [], []

    for vest in vests:
        if vest.sold or to_amount(vest.shares) <= 0:
            continue
        if is_future_date(vest.vest_date, today):
            if is_vest_coming_soon(vest.vest_date, today):
                soon.append(vest)
            else:
                future.append(vest)
        elif is_matured(vest.grant_date, today, config):
            matured.append(vest)
        elif is_maturation_coming_soon(config, vest.grant_date, today):
            soon.append(vest)
        else:
            unmatured.append(vest)

    return matured + unmatured + soon + future
