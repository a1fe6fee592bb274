"""taxes - Israeli tax components for equity income.

Scope:
- Progressive income tax brackets (annual)
- National Insurance + health tax (monthly two-tier)
- Capital gains tax and surtax (mas yasaf)
- Tax configuration schemas and <year>.yaml loading

Constraints:
- Pure calculation - every function takes the TaxConfiguration explicitly
- No settings access - rules loading is the caller's job

Usage:
    from equitycalc.sdk.taxes import load_tax_rules, calc_marginal_tax

    config = load_tax_rules(2026)
    tax = calc_marginal_tax(config, base_yearly_gross=400000, additional_income=18500)
"""

# Configuration
from .schemas import (
    TaxBracket,
    SocialInsuranceRules,
    SurtaxRules,
    TaxConfiguration,
    DEFAULT_TAX_CONFIGURATION,
)
from .rules import (
    TaxRulesNotFoundError,
    get_available_years,
    load_tax_rules,
    load_tax_rules_file,
)

# Calculations
from .income_tax import (
    BracketTax,
    calc_income_tax,
    calc_marginal_income_tax,
    calc_income_tax_brackets,
)
from .social import (
    SocialContributions,
    MarginalTax,
    calc_social_contributions,
    calc_marginal_tax,
)
from .capital_gains import calc_capital_gains_tax
from .surtax import calc_surtax

__all__ = [
    # Configuration
    "TaxBracket",
    "SocialInsuranceRules",
    "SurtaxRules",
    "TaxConfiguration",
    "DEFAULT_TAX_CONFIGURATION",
    "TaxRulesNotFoundError",
    "get_available_years",
    "load_tax_rules",
    "load_tax_rules_file",
    # Calculations
    "BracketTax",
    "calc_income_tax",
    "calc_marginal_income_tax",
    "calc_income_tax_brackets",
    "SocialContributions",
    "MarginalTax",
    "calc_social_contributions",
    "calc_marginal_tax",
    "calc_capital_gains_tax",
    "calc_surtax",
]
