"""RSU grant grouping and holdings summary."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml

from .amounts import to_amount, to_optional_amount
from .dates import format_local_date, is_future_date, parse_local_date
from .equity import VestEvent, calc_rsu_net
from .maturation import is_matured
from .taxes.schemas import TaxConfiguration

logger = logging.getLogger(__name__)

# Sort key for unparseable dates: keep them in input order at the end
_UNKNOWN_DATE = date.max


@dataclass
class Grant:
    """Vests sharing a grant date."""

    grant_date: str
    grant_name: str
    total_shares: float
    vests: List[VestEvent] = field(default_factory=list)
    vested_shares: float = 0.0
    unvested_shares: float = 0.0


@dataclass
class HoldingsSummary:
    """Value of RSU holdings at a price (ILS)."""

    unvested_value: float = 0.0
    vested_value: float = 0.0
    holdable_value: float = 0.0
    estimated_tax_if_sold_today: float = 0.0

    @property
    def total_value(self) -> float:
        return self.unvested_value + self.vested_value


def _yaml_date(value):
    """YAML turns 2023-06-15 into a date; keep it, stringify anything else."""
    if isinstance(value, date):
        return value
    return str(value)


def load_vests(path: Path) -> List[VestEvent]:
    """Load vests from a YAML file.

    Format:
        vests:
          - grant_date: 15/3/22
            vest_date: 15/6/23
            shares: 40
            vest_price: 42.5        # optional
            grant_name: "2022 refresh"  # optional
            total_shares_in_grant: 160  # optional
            sold: false             # optional

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid YAML, 'vests' is not a list,
            or an entry is missing shares or grant_date
    """
    with open(path, "r") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: invalid YAML: {e}")

    entries = raw.get("vests", []) if isinstance(raw, dict) else raw
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise ValueError(f"{path}: 'vests' must be a list")
    vests = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict) or "shares" not in entry or "grant_date" not in entry:
            raise ValueError(f"{path}: vest #{i + 1} needs at least 'shares' and 'grant_date'")
        vests.append(VestEvent(
            shares=to_amount(entry["shares"]),
            vest_price=to_optional_amount(entry.get("vest_price")),
            exchange_rate=to_amount(entry.get("exchange_rate")),
            grant_date=_yaml_date(entry["grant_date"]),
            vest_date=_yaml_date(entry.get("vest_date", entry["grant_date"])),
            sold=bool(entry.get("sold", False)),
            grant_name=str(entry.get("grant_name", "")),
            total_shares_in_grant=to_amount(entry.get("total_shares_in_grant")),
        ))
    logger.debug(f"Loaded {len(vests)} vests from {path}")
    return vests


def _date_key(value) -> date:
    return parse_local_date(value) or _UNKNOWN_DATE


def _grant_key(vest: VestEvent) -> str:
    if vest.grant_date is None or isinstance(vest.grant_date, str):
        return vest.grant_date or ""
    return format_local_date(vest.grant_date)


def group_into_grants(vests: Iterable[VestEvent], today: Optional[date] = None) -> List[Grant]:
    """Group vests by grant date.

    Vests within a grant are sorted by vest date and grants by grant date.
    Vested/unvested share counts are as of today.
    """
    today = today or date.today()
    grant_map: Dict[str, List[VestEvent]] = defaultdict(list)
    for vest in vests:
        grant_map[_grant_key(vest)].append(vest)

    grants = []
    for grant_date, grant_vests in grant_map.items():
        grant_vests.sort(key=lambda v: _date_key(v.vest_date))
        vested = sum(to_amount(v.shares) for v in grant_vests if not is_future_date(v.vest_date, today))
        unvested = sum(to_amount(v.shares) for v in grant_vests if is_future_date(v.vest_date, today))
        grants.append(Grant(
            grant_date=grant_date,
            grant_name=grant_vests[0].grant_name,
            total_shares=to_amount(grant_vests[0].total_shares_in_grant),
            vests=grant_vests,
            vested_shares=vested,
            unvested_shares=unvested,
        ))

    grants.sort(key=lambda g: _date_key(g.grant_date))
    return grants


def summarize_holdings(
    config: TaxConfiguration,
    vests: Iterable[VestEvent],
    price: float,
    exchange_rate: float,
    today: Optional[date] = None,
) -> HoldingsSummary:
    """Value RSU holdings at the current price.

    - unvested: future vests
    - vested: vested and not sold
    - holdable: vested, not sold, and past maturation (sellable on the
      capital-gains track)

    The tax estimate covers holdable vests with a known vest price, sold
    today with no other income in the year.
    """
    today = today or date.today()
    price = to_amount(price)
    rate = to_amount(exchange_rate)
    summary = HoldingsSummary()

    for vest in vests:
        value = to_amount(vest.shares) * price * rate
        if is_future_date(vest.vest_date, today):
            summary.unvested_value += value
            continue
        if vest.sold:
            continue
        summary.vested_value += value
        if not is_matured(vest.grant_date, today, config):
            continue
        summary.holdable_value += value
        if vest.vest_price is not None:
            result = calc_rsu_net(
                config,
                shares=vest.shares,
                vest_price=vest.vest_price,
                exchange_rate=rate,
                fees=0,
                base_yearly_gross=0,
                sell_price=price,
                grant_date=vest.grant_date,
                sell_date=today,
            )
            summary.estimated_tax_if_sold_today += result.total_tax

    return summary
