"""Tax component CLI commands: marginal tax, brackets, rules, baseline."""

import json

import click
from rich.console import Console
from rich.table import Table

from .common import json_option, resolve_tax_config, year_option


@click.group("tax")
def tax():
    """Marginal tax on additional income.

    \b
    Examples:
      equity-calc tax marginal 400000 18500
      equity-calc tax brackets 400000 18500
      equity-calc tax rules --year 2026
    """
    pass


@tax.command("marginal")
@click.argument("baseline", type=float)
@click.argument("income", type=float)
@year_option
@json_option
def tax_marginal(baseline, income, year, as_json):
    """Income tax, NI and health tax on INCOME above an annual BASELINE."""
    from equitycalc.sdk import calc_marginal_tax, calc_surtax

    config = resolve_tax_config(year)
    marginal = calc_marginal_tax(config, baseline, income)
    surtax = calc_surtax(config, baseline, income)

    result = {
        "tax_year": config.tax_year,
        "baseline": baseline,
        "income": income,
        "income_tax": marginal.income_tax,
        "national_insurance": marginal.national_insurance,
        "health_tax": marginal.health_tax,
        "surtax": surtax,
        "total": marginal.total + surtax,
    }

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    click.echo(f"Tax year {config.tax_year}: ₪{income:,.2f} above ₪{baseline:,.2f}")
    click.echo(f"  Income tax:          ₪{marginal.income_tax:>12,.2f}")
    click.echo(f"  National Insurance:  ₪{marginal.national_insurance:>12,.2f}")
    click.echo(f"  Health tax:          ₪{marginal.health_tax:>12,.2f}")
    click.echo(f"  Surtax (yasaf):      ₪{surtax:>12,.2f}")
    click.echo(f"  ----------------------------------------")
    click.echo(f"  Total:               ₪{result['total']:>12,.2f}")


@tax.command("brackets")
@click.argument("baseline", type=float)
@click.argument("income", type=float)
@year_option
@json_option
def tax_brackets(baseline, income, year, as_json):
    """Bracket-by-bracket income tax on INCOME above an annual BASELINE."""
    from equitycalc.sdk import calc_income_tax_brackets
    from .renderers.breakdown_renderer import render_bracket_table

    config = resolve_tax_config(year)
    brackets = calc_income_tax_brackets(config, baseline, income)

    if as_json:
        output = [{"rate": b.rate, "taxable": b.taxable, "tax": b.tax} for b in brackets]
        click.echo(json.dumps(output, indent=2))
        return

    render_bracket_table(Console(), brackets, baseline, income)


@tax.command("rules")
@year_option
def tax_rules(year):
    """Show the tax rules in effect for a year."""
    config = resolve_tax_config(year)
    console = Console()

    table = Table(show_header=True, header_style="bold", title=f"Income tax brackets {config.tax_year}")
    table.add_column("Up to", justify="right")
    table.add_column("Rate", justify="right")
    for bracket in config.income_tax_brackets:
        up_to = f"₪{bracket.up_to:,.0f}" if bracket.up_to is not None else "and above"
        table.add_row(up_to, f"{bracket.rate:.0%}")
    console.print(table)

    si = config.social_insurance
    console.print(f"NI + health (monthly): low up to ₪{si.low_threshold_monthly:,.0f} "
                  f"({si.ni_low_rate:.2%} + {si.health_low_rate:.2%}), "
                  f"high up to ₪{si.max_monthly:,.0f} ({si.ni_high_rate:.2%} + {si.health_high_rate:.2%})")
    console.print(f"Capital gains: {config.capital_gains_rate:.0%}")
    console.print(f"Surtax: {config.surtax.rate:.0%} above ₪{config.surtax.threshold:,.0f}/year")
    console.print(f"Section 102 maturation: {config.maturation_months} months from grant")


@tax.command("baseline")
@click.option("--earned", type=float, default=None, help="Gross earned so far this year (default: earned_so_far setting).")
@click.option("--salary", type=float, default=None, help="Monthly gross salary (default: monthly_salary setting).")
def tax_baseline(earned, salary):
    """Project this year's gross income (earned so far + remaining salary)."""
    from equitycalc.sdk import ConfigNotFoundError, get_setting, project_yearly_gross

    try:
        if earned is None:
            earned = get_setting("earned_so_far", 0)
        if salary is None:
            salary = get_setting("monthly_salary", 0)
    except ConfigNotFoundError as e:
        raise click.ClickException(str(e))

    projection = project_yearly_gross(earned, salary)
    click.echo(f"Earned so far:     ₪{projection.earned_so_far:>12,.2f}")
    click.echo(f"Monthly salary:    ₪{projection.monthly_salary:>12,.2f} x {projection.months_remaining} months")
    click.echo(f"Projected gross:   ₪{projection.yearly_gross:>12,.2f}")
