"""Configuration management for Equity Calc.

Machine-specific settings live in settings.json:
   - tax_year: tax year whose rules the CLI loads (default: latest shipped)
   - tax_rules_dir: directory with custom <year>.yaml rule files
   - earned_so_far, monthly_salary: inputs for the annual baseline projection
   - espp_monthly_contribution, espp_purchase_price: ESPP calculator defaults

Config directory resolution:
1. EQUITY_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/equity-calc/ (XDG_CONFIG_HOME fallback)

The calculation engine never reads settings. Values resolved here are
passed into the engine explicitly by the CLI.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

APP_NAME = "equity-calc"
SETTINGS_FILENAME = "settings.json"

# Settings the CLI knows how to interpret, with their value types
KNOWN_SETTINGS = {
    "tax_year": int,
    "tax_rules_dir": str,
    "earned_so_far": float,
    "monthly_salary": float,
    "espp_monthly_contribution": float,
    "espp_purchase_price": float,
}


class ConfigNotFoundError(Exception):
    """Raised when a required configuration file is missing or unreadable."""
    pass


def configure_logging() -> None:
    """Configure logging based on LOG_LEVEL environment variable (default INFO)."""
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. EQUITY_CALC_CONFIG_PATH environment variable
    2. ~/.config/equity-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("EQUITY_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        ConfigNotFoundError: If the file exists but is not valid JSON
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigNotFoundError(f"Settings file is not valid JSON: {settings_file}: {e}")


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    logger.debug(f"Saved settings to {settings_file}")
    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "tax_year", "monthly_salary")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Known settings are coerced to their declared type, so "30000" stored
    through the CLI becomes 30000.0 for monthly_salary.

    Raises:
        ValueError: If a known setting's value cannot be coerced
    """
    if key in KNOWN_SETTINGS:
        value = KNOWN_SETTINGS[key](value)
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting from settings.json. Returns True if it was present."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_tax_rules_dir() -> Path:
    """Get the directory holding <year>.yaml tax rule files.

    Uses the tax_rules_dir setting when present, otherwise the rule files
    shipped inside the package.
    """
    custom = get_setting("tax_rules_dir")
    if custom:
        return Path(custom).expanduser()
    return Path(__file__).parent.parent / "tax_rules"
