"""Equity Calc SDK - Tax and net proceeds of RSU/ESPP sales."""

from .config import (
    configure_logging,
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_tax_rules_dir,
    ConfigNotFoundError,
    KNOWN_SETTINGS,
)

from .taxes import (
    TaxBracket,
    TaxConfiguration,
    DEFAULT_TAX_CONFIGURATION,
    TaxRulesNotFoundError,
    load_tax_rules,
    BracketTax,
    calc_marginal_income_tax,
    calc_income_tax_brackets,
    SocialContributions,
    MarginalTax,
    calc_social_contributions,
    calc_marginal_tax,
    calc_capital_gains_tax,
    calc_surtax,
)

from .dates import (
    parse_local_date,
    add_months,
    format_local_date,
    to_local_date_string,
    from_local_date_string,
    is_future_date,
)

from .maturation import (
    is_matured,
    get_maturation_date,
    is_grant_matured,
    days_until_maturation,
    is_maturation_coming_soon,
    is_vest_coming_soon,
)

from .equity import (
    VestEvent,
    EsppEvent,
    TaxBreakdown,
    Matured,
    Unmatured,
    TaxResult,
    calc_rsu_net,
    calc_espp_net,
    calc_rsu_net_for_event,
    calc_espp_net_for_event,
    estimate_espp_shares,
    estimate_espp_sale,
    EsppSaleEstimate,
)

from .income import (
    YearlyGross,
    project_yearly_gross,
    months_remaining_in_year,
)

from .sale import (
    SaleAggregate,
    SalePlan,
    WaitScenario,
    plan_rsu_sale,
    order_vests_for_sale,
)

from .grants import (
    Grant,
    HoldingsSummary,
    group_into_grants,
    load_vests,
    summarize_holdings,
)

__all__ = [
    # Config
    "configure_logging",
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_tax_rules_dir",
    "ConfigNotFoundError",
    "KNOWN_SETTINGS",
    # Tax rules and components
    "TaxBracket",
    "TaxConfiguration",
    "DEFAULT_TAX_CONFIGURATION",
    "TaxRulesNotFoundError",
    "load_tax_rules",
    "BracketTax",
    "calc_marginal_income_tax",
    "calc_income_tax_brackets",
    "SocialContributions",
    "MarginalTax",
    "calc_social_contributions",
    "calc_marginal_tax",
    "calc_capital_gains_tax",
    "calc_surtax",
    # Dates
    "parse_local_date",
    "add_months",
    "format_local_date",
    "to_local_date_string",
    "from_local_date_string",
    "is_future_date",
    # Maturation
    "is_matured",
    "get_maturation_date",
    "is_grant_matured",
    "days_until_maturation",
    "is_maturation_coming_soon",
    "is_vest_coming_soon",
    # Equity calculators
    "VestEvent",
    "EsppEvent",
    "TaxBreakdown",
    "Matured",
    "Unmatured",
    "TaxResult",
    "calc_rsu_net",
    "calc_espp_net",
    "calc_rsu_net_for_event",
    "calc_espp_net_for_event",
    "estimate_espp_shares",
    "estimate_espp_sale",
    "EsppSaleEstimate",
    # Income projection
    "YearlyGross",
    "project_yearly_gross",
    "months_remaining_in_year",
    # Sale planning
    "SaleAggregate",
    "SalePlan",
    "WaitScenario",
    "plan_rsu_sale",
    "order_vests_for_sale",
    # Grants
    "Grant",
    "HoldingsSummary",
    "group_into_grants",
    "load_vests",
    "summarize_holdings",
]
