"""Settings CLI commands for Equity Calc.

Manages settings.json - tax year, rule directory and calculator defaults.
"""

import click

from equitycalc.sdk import (
    ConfigNotFoundError,
    KNOWN_SETTINGS,
    get_settings_path,
    get_tax_rules_dir,
    load_settings,
    set_setting,
    unset_setting,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    \b
    Available settings:
    - tax_year: tax year whose rules are used (default: latest)
    - tax_rules_dir: directory with custom <year>.yaml rule files
    - earned_so_far, monthly_salary: annual baseline projection inputs
    - espp_monthly_contribution, espp_purchase_price: ESPP estimate defaults
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    try:
        current = load_settings()
    except ConfigNotFoundError as e:
        raise click.ClickException(str(e))

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective paths:")
    click.echo(f"  tax_rules_dir: {get_tax_rules_dir()}")


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE.

    Examples:
        equity-calc settings set monthly_salary 30000
        equity-calc settings set tax_year 2026
    """
    try:
        path = set_setting(key, value)
    except ValueError:
        expected = KNOWN_SETTINGS[key].__name__
        raise click.BadParameter(f"'{value}' is not a valid {expected}", param_hint="VALUE")
    except ConfigNotFoundError as e:
        raise click.ClickException(str(e))

    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key")
def settings_unset(key):
    """Remove KEY from settings (revert to the default)."""
    try:
        removed = unset_setting(key)
    except ConfigNotFoundError as e:
        raise click.ClickException(str(e))

    if removed:
        click.echo(f"Cleared {key}.")
    else:
        click.echo(f"{key} was not set.")
