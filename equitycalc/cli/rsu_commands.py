"""RSU sale CLI commands."""

import json
from datetime import date
from pathlib import Path

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


@click.group("rsu")
def rsu():
    """RSU sale calculations.

    Prices are in USD, --rate converts USD to ILS, all results are in ILS.

    \b
    Examples:
      equity-calc rsu net --shares 100 --vest-price 50 --rate 3.7 --sell-price 60 \\
          --grant-date 1/1/22 --sell-date 1/6/24 --baseline 400000
      equity-calc rsu plan vests.yaml --price 180 --rate 3.7
      equity-calc rsu holdings vests.yaml --price 180 --rate 3.7
    """
    pass


@rsu.command("net")
@click.option("--shares", type=float, required=True, help="Number of shares sold.")
@click.option("--vest-price", type=float, default=None, help="Share price on the vest date (USD).")
@click.option("--rate", "exchange_rate", type=float, required=True, help="USD -> ILS exchange rate.")
@click.option("--sell-price", type=float, default=None, help="Sale price (USD). Omit to value at vest.")
@click.option("--grant-date", callback=validate_local_date, help="Grant date (D/M/YY).")
@click.option("--sell-date", callback=validate_local_date, help="Sale date (D/M/YY).")
@click.option("--fees", type=float, default=0.0, show_default=True, help="Fees (ILS).")
@baseline_option
@year_option
@json_option
def rsu_net(shares, vest_price, exchange_rate, sell_price, grant_date, sell_date, fees, baseline, year, as_json):
    """Net proceeds and tax breakdown for one RSU vest."""
    from equitycalc.sdk import calc_rsu_net
    from .renderers.breakdown_renderer import render_breakdown

    config = resolve_tax_config(year)
    baseline = resolve_baseline(baseline)

    result = calc_rsu_net(
        config,
        shares=shares,
        vest_price=vest_price,
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

    render_breakdown(Console(), result, title="RSU")


@rsu.command("plan")
@click.argument("vests_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--price", type=float, required=True, help="Sale price (USD).")
@click.option("--rate", "exchange_rate", type=float, required=True, help="USD -> ILS exchange rate.")
@click.option("--sell-date", callback=validate_local_date, help="Sale date (D/M/YY). Defaults to today.")
@baseline_option
@year_option
@json_option
def rsu_plan(vests_file, price, exchange_rate, sell_date, baseline, year, as_json):
    """Plan selling every unsold vest in VESTS_FILE.

    Splits the sale into matured and unmatured vests and, when some are
    unmatured, shows what waiting for the last maturation would yield.
    """
    from dataclasses import asdict
    from equitycalc.sdk import is_future_date, load_vests, order_vests_for_sale, parse_local_date, plan_rsu_sale
    from .renderers.breakdown_renderer import render_sale_plan

    config = resolve_tax_config(year)
    baseline = resolve_baseline(baseline)

    try:
        vests = load_vests(vests_file)
    except ValueError as e:
        raise click.ClickException(str(e))

    today = parse_local_date(sell_date) or date.today()
    candidates = [v for v in order_vests_for_sale(config, vests, today) if not is_future_date(v.vest_date, today)]
    if not candidates:
        raise click.ClickException(f"No vested, unsold shares in {vests_file}")

    plan = plan_rsu_sale(config, candidates, price, exchange_rate, baseline, sell_date=today)
    if plan is None:
        raise click.ClickException("--price and --rate must be non-zero")

    if as_json:
        output = {
            "sell_date": plan.sell_date.isoformat(),
            "matured": asdict(plan.matured),
            "unmatured": asdict(plan.unmatured),
            "combined": asdict(plan.combined),
            "wait_scenario": None,
        }
        if plan.wait_scenario:
            output["wait_scenario"] = {
                "sell_date": plan.wait_scenario.sell_date.isoformat(),
                "aggregate": asdict(plan.wait_scenario.aggregate),
            }
        click.echo(json.dumps(output, indent=2))
        return

    render_sale_plan(Console(), plan)


@rsu.command("holdings")
@click.argument("vests_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--price", type=float, required=True, help="Current share price (USD).")
@click.option("--rate", "exchange_rate", type=float, required=True, help="USD -> ILS exchange rate.")
@year_option
def rsu_holdings(vests_file, price, exchange_rate, year):
    """Summarize grants and the value of holdings in VESTS_FILE."""
    from rich.table import Table
    from equitycalc.sdk import (
        days_until_maturation,
        get_maturation_date,
        group_into_grants,
        load_vests,
        summarize_holdings,
    )

    config = resolve_tax_config(year)
    try:
        vests = load_vests(vests_file)
    except ValueError as e:
        raise click.ClickException(str(e))

    today = date.today()
    console = Console()

    table = Table(show_header=True, header_style="bold", title="Grants")
    table.add_column("Grant", style="cyan")
    table.add_column("Name")
    table.add_column("Vested", justify="right")
    table.add_column("Unvested", justify="right")
    table.add_column("Matures", justify="right")
    for grant in group_into_grants(vests, today):
        maturation = get_maturation_date(config, grant.grant_date)
        days = days_until_maturation(config, grant.grant_date, today)
        if maturation is None:
            matures = "?"
        elif days == 0:
            matures = f"[green]{maturation:%d/%m/%Y} (matured)[/green]"
        else:
            matures = f"{maturation:%d/%m/%Y} ({days} days)"
        table.add_row(
            grant.grant_date,
            grant.grant_name,
            f"{grant.vested_shares:,.0f}",
            f"{grant.unvested_shares:,.0f}",
            matures,
        )
    console.print(table)

    summary = summarize_holdings(config, vests, price, exchange_rate, today)
    console.print(f"Unvested value:            ₪{summary.unvested_value:>14,.2f}")
    console.print(f"Vested value:              ₪{summary.vested_value:>14,.2f}")
    console.print(f"  of which matured:        ₪{summary.holdable_value:>14,.2f}")
    console.print(f"Total value:               ₪{summary.total_value:>14,.2f}")
    console.print(f"Est. tax if matured sold:  ₪{summary.estimated_tax_if_sold_today:>14,.2f}")
