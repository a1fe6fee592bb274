"""Equity Calc CLI - Net proceeds and taxes of RSU and ESPP sales."""

import click

from equitycalc import __version__
from equitycalc.sdk import configure_logging

from .espp_commands import espp as espp_group
from .maturation_commands import maturation as maturation_group
from .rsu_commands import rsu as rsu_group
from .settings_commands import settings as settings_group
from .tax_commands import tax as tax_group


@click.group()
@click.version_option(version=__version__, prog_name="equity-calc")
def cli():
    """Equity Calc - Israeli tax on RSU and ESPP sales.

    All amounts are in ILS unless an option says USD. The annual
    baseline (income excluding the sale) comes from --baseline, or is
    projected from the earned_so_far and monthly_salary settings.

    Settings are loaded from (in order):

    \b
    1. EQUITY_CALC_CONFIG_PATH environment variable
    2. ~/.config/equity-calc/settings.json (XDG default)

    Set LOG_LEVEL=DEBUG for diagnostic output.
    """
    pass


cli.add_command(tax_group)
cli.add_command(rsu_group)
cli.add_command(espp_group)
cli.add_command(maturation_group)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    configure_logging()
    cli()


if __name__ == "__main__":
    main()
