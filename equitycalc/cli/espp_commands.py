"""ESPP sale CLI commands."""

import json

import click
from rich.console import Console

from .common import (
    baseline_option,
    json_option,
    resolve_baseline,
    resolve_tax_config,
    validate_local_date,
    year_option,
)


@click.group("espp")
def espp():
    """ESPP sale calculations.

    Prices and the contribution are in USD, --rate converts to ILS.

    \b
    Examples:
      equity-calc espp net --shares 50 --market-price 100 --purchase-price 85 \\
          --contribution 4250 --rate 3.7 --sell-price 120
      equity-calc espp estimate --purchase-price 85 --sell-price 120 --rate 3.7
    """
    pass


@espp.command("net")
@click.option("--shares", type=float, required=True, help="Number of shares sold.")
@click.option("--market-price", type=float, required=True, help="Market price at purchase (USD).")
@click.option("--purchase-price", type=float, required=True, help="Discounted purchase price (USD).")
@click.option("--contribution", type=float, required=True, help="Amount contributed for these shares (USD).")
@click.option("--rate", "exchange_rate", type=float, required=True, help="USD -> ILS exchange rate.")
@click.option("--sell-price", type=float, default=None, help="Sale price (USD). Omit to value at market.")
@click.option("--grant-date", callback=validate_local_date, help="Offering grant date (D/M/YY).")
@click.option("--sell-date", callback=validate_local_date, help="Sale date (D/M/YY).")
@click.option("--fees", type=float, default=0.0, show_default=True, help="Fees (ILS).")
@baseline_option
@year_option
@json_option
def espp_net(shares, market_price, purchase_price, contribution, exchange_rate, sell_price,
             grant_date, sell_date, fees, baseline, year, as_json):
    """Net proceeds and tax breakdown for one ESPP purchase."""
    from equitycalc.sdk import calc_espp_net
    from .renderers.breakdown_renderer import render_breakdown

    config = resolve_tax_config(year)
    baseline = resolve_baseline(baseline)

    result = calc_espp_net(
        config,
        shares=shares,
        market_price=market_price,
        purchase_price=purchase_price,
        contribution=contribution,
        exchange_rate=exchange_rate,
        fees=fees,
        base_yearly_gross=baseline,
        sell_price=sell_price,
        grant_date=grant_date,
        sell_date=sell_date,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    render_breakdown(Console(), result, title="ESPP")


@espp.command("estimate")
@click.option("--shares", type=float, default=None,
              help="Shares to sell (default: estimated from 6 months of espp_monthly_contribution).")
@click.option("--purchase-price", type=float, default=None,
              help="Discounted purchase price (USD) (default: espp_purchase_price setting).")
@click.option("--sell-price", type=float, required=True, help="Sale price (USD).")
@click.option("--rate", "exchange_rate", type=float, required=True, help="USD -> ILS exchange rate.")
@baseline_option
@year_option
@json_option
def espp_estimate(shares, purchase_price, sell_price, exchange_rate, baseline, year, as_json):
    """Quick estimate of selling ESPP shares with the whole gain as work income."""
    from dataclasses import asdict
    from equitycalc.sdk import ConfigNotFoundError, estimate_espp_sale, estimate_espp_shares, get_setting

    config = resolve_tax_config(year)
    baseline = resolve_baseline(baseline)

    try:
        if purchase_price is None:
            purchase_price = get_setting("espp_purchase_price")
        if shares is None:
            shares = estimate_espp_shares(
                get_setting("espp_monthly_contribution", 0),
                purchase_price,
                exchange_rate,
            )
            if shares:
                click.echo(f"Estimated {shares} shares from 6 months of contributions.", err=True)
    except ConfigNotFoundError as e:
        raise click.ClickException(str(e))

    estimate = estimate_espp_sale(config, shares, purchase_price, sell_price, exchange_rate, baseline)
    if estimate is None:
        raise click.UsageError("Need --shares (or espp_monthly_contribution), --purchase-price, --sell-price and --rate")

    if as_json:
        click.echo(json.dumps(asdict(estimate), indent=2))
        return

    click.echo(f"Gross proceeds:      ₪{estimate.proceeds:>12,.2f}")
    click.echo(f"Gain:                ₪{estimate.gain:>12,.2f}")
    click.echo(f"  Income tax:        ₪{estimate.income_tax:>12,.2f}")
    click.echo(f"  NI + health:       ₪{estimate.ni_and_health:>12,.2f}")
    click.echo(f"  Surtax (yasaf):    ₪{estimate.surtax:>12,.2f}")
    click.echo(f"  ----------------------------------------")
    click.echo(f"  Total tax:         ₪{estimate.total_tax:>12,.2f}")
    click.echo(f"Net:                 ₪{estimate.net:>12,.2f}")
