"""Shared helpers for CLI commands.

Resolve the tax configuration and annual baseline the way every command
needs them: CLI flag > settings.json > default.
"""

from typing import Optional

import click
from pydantic import ValidationError

from equitycalc.sdk import (
    ConfigNotFoundError,
    TaxConfiguration,
    TaxRulesNotFoundError,
    get_setting,
    load_tax_rules,
    parse_local_date,
    project_yearly_gross,
)


def resolve_tax_config(year: Optional[int]) -> TaxConfiguration:
    """Load tax rules for --year, the tax_year setting, or the latest year."""
    try:
        if year is None:
            year = get_setting("tax_year")
        return load_tax_rules(year)
    except (TaxRulesNotFoundError, ConfigNotFoundError) as e:
        raise click.ClickException(str(e))
    except ValidationError as e:
        raise click.ClickException(f"Invalid tax rules for {year or 'latest year'}:\n{e}")


def resolve_baseline(baseline: Optional[float]) -> float:
    """Annual baseline income from --baseline or the settings projection.

    Without --baseline, projects earned_so_far + monthly_salary x remaining
    months from settings.json (0 if neither is set).
    """
    if baseline is not None:
        return baseline
    try:
        projection = project_yearly_gross(
            get_setting("earned_so_far", 0),
            get_setting("monthly_salary", 0),
        )
    except ConfigNotFoundError as e:
        raise click.ClickException(str(e))
    return projection.yearly_gross


def validate_local_date(ctx, param, value):
    """click callback: accept D/M/YY or D/M/YYYY, reject anything else."""
    if value is None:
        return None
    if parse_local_date(value) is None:
        raise click.BadParameter(f"Invalid date '{value}'. Use D/M/YY or D/M/YYYY.")
    return value


year_option = click.option("--year", type=int, default=None, help="Tax year of the rules to use (default: tax_year setting or latest).")
baseline_option = click.option(
    "--baseline", type=float, default=None,
    help="Annual income excluding this sale, ILS (default: projected from settings).",
)
json_option = click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
