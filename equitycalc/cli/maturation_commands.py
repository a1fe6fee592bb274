"""Section 102 maturation CLI commands."""

import json
from datetime import date

import click

from .common import json_option, resolve_tax_config, validate_local_date, year_option


@click.group("maturation")
def maturation():
    """Check the Section 102 holding period of a grant.

    Dates are D/M/YY or D/M/YYYY.

    \b
    Examples:
      equity-calc maturation check 15/3/22 1/6/24
      equity-calc maturation status 15/3/24
    """
    pass


@maturation.command("check")
@click.argument("grant_date", callback=validate_local_date)
@click.argument("sell_date", callback=validate_local_date)
@year_option
def maturation_check(grant_date, sell_date, year):
    """Is a sale on SELL_DATE of a grant from GRANT_DATE matured?"""
    from equitycalc.sdk import get_maturation_date, is_matured

    config = resolve_tax_config(year)
    matured = is_matured(grant_date, sell_date, config)
    maturation_date = get_maturation_date(config, grant_date)
    if maturation_date is None:
        raise click.BadParameter(f"Maturation date of {grant_date} is out of range", param_hint="GRANT_DATE")

    if matured:
        click.echo(click.style("Matured", fg="green") + " - capital gains track")
    else:
        click.echo(click.style("Not matured", fg="yellow") + " - ordinary income track")
    click.echo(f"Maturation date: {maturation_date:%d/%m/%Y}")


@maturation.command("status")
@click.argument("grant_date", callback=validate_local_date)
@click.option("--today", "today_str", callback=validate_local_date, help="Evaluate as of this date (default: today).")
@year_option
@json_option
def maturation_status(grant_date, today_str, year, as_json):
    """Maturation date, days remaining and coming-soon flag for GRANT_DATE."""
    from equitycalc.sdk import (
        days_until_maturation,
        get_maturation_date,
        is_grant_matured,
        is_maturation_coming_soon,
        parse_local_date,
    )

    config = resolve_tax_config(year)
    today = parse_local_date(today_str) if today_str else date.today()

    maturation_date = get_maturation_date(config, grant_date)
    if maturation_date is None:
        raise click.BadParameter(f"Maturation date of {grant_date} is out of range", param_hint="GRANT_DATE")
    status = {
        "grant_date": grant_date,
        "maturation_date": maturation_date.isoformat(),
        "matured": is_grant_matured(config, grant_date, today),
        "days_remaining": days_until_maturation(config, grant_date, today),
        "coming_soon": is_maturation_coming_soon(config, grant_date, today),
    }

    if as_json:
        click.echo(json.dumps(status, indent=2))
        return

    click.echo(f"Grant date:       {grant_date}")
    click.echo(f"Maturation date:  {maturation_date:%d/%m/%Y}")
    if status["matured"]:
        click.echo(click.style("Matured", fg="green"))
    else:
        line = f"{status['days_remaining']} days remaining"
        if status["coming_soon"]:
            line += click.style(" (coming soon)", fg="cyan")
        click.echo(line)
