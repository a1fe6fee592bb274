"""Tax rules loading from <year>.yaml files."""

import logging
from pathlib import Path
from typing import Optional, Union

import yaml

from ..config import get_tax_rules_dir
from .schemas import TaxConfiguration

logger = logging.getLogger(__name__)


class TaxRulesNotFoundError(FileNotFoundError):
    """Raised when no tax rules file covers the requested year."""
    pass


def get_available_years(rules_dir: Optional[Path] = None) -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    rules_dir = rules_dir or get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


def load_tax_rules_file(path: Path) -> TaxConfiguration:
    """Load and validate a single tax rules YAML file.

    Raises:
        TaxRulesNotFoundError: If the file doesn't exist
        pydantic.ValidationError: If the file content is not valid rules
    """
    if not path.exists():
        raise TaxRulesNotFoundError(f"Tax rules file not found: {path}")

    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}

    return TaxConfiguration.model_validate(raw)


def load_tax_rules(
    year: Optional[Union[int, str]] = None,
    rules_dir: Optional[Path] = None,
) -> TaxConfiguration:
    """Load tax rules for a year, falling back to the closest prior year.

    Rules rarely change every year, so a request for 2027 with only
    2026.yaml available returns the 2026 rules. With no year, the most
    recent rules are returned.

    Args:
        year: Tax year (e.g., 2026 or "2026"); None for the latest
        rules_dir: Directory of <year>.yaml files (default: settings/package)

    Returns:
        Validated, immutable TaxConfiguration

    Raises:
        TaxRulesNotFoundError: If no usable rules file exists
    """
    rules_dir = rules_dir or get_tax_rules_dir()
    available_years = get_available_years(rules_dir)
    if not available_years:
        raise TaxRulesNotFoundError(f"No tax rules files found in {rules_dir}")

    if year is None:
        chosen = available_years[0]
    else:
        target_year = int(year)
        candidate_years = [y for y in available_years if y <= target_year]
        if not candidate_years:
            raise TaxRulesNotFoundError(
                f"No tax rules for {target_year} or earlier in {rules_dir} "
                f"(available: {', '.join(str(y) for y in available_years)})"
            )
        chosen = candidate_years[0]
        if chosen != target_year:
            logger.debug(f"No tax rules for {target_year}, using {chosen}")

    config = load_tax_rules_file(rules_dir / f"{chosen}.yaml")
    logger.debug(f"Loaded tax rules for {config.tax_year} from {rules_dir}")
    return config
