"""taxes - Income tax and social insurance calculations.

Scope:
- Progressive income tax brackets per tax class
- Solidarity surcharge and regional church tax
- Capped social insurance contributions (health, pension, unemployment,
  long-term care) per pay period

Constraints:
- Pure calculation - receives parameters, returns amounts
- Parameters come from a validated JurisdictionConfig (see schemas)

Usage:
    from netpay.sdk.taxes import calculate_income_tax, calc_annual_contributions

    tax = calculate_income_tax(52000, config.tax_classes["I"])
"""

from .schemas import (
    JurisdictionConfig,
    TaxBracket,
    TaxClassConfig,
    SocialContributionConfig,
    SocialContributionsConfig,
    AllowanceConfig,
)

from .income import (
    calculate_income_tax,
    calculate_solidarity_tax,
    calculate_church_tax,
)

from .contributions import (
    calc_capped_contribution,
    calc_health_contribution,
    calc_long_term_care_rate,
    calc_long_term_care_contribution,
    calc_period_contributions,
    calc_annual_contributions,
)

__all__ = [
    # Schemas
    "JurisdictionConfig",
    "TaxBracket",
    "TaxClassConfig",
    "SocialContributionConfig",
    "SocialContributionsConfig",
    "AllowanceConfig",
    # Income tax
    "calculate_income_tax",
    "calculate_solidarity_tax",
    "calculate_church_tax",
    # Contributions
    "calc_capped_contribution",
    "calc_health_contribution",
    "calc_long_term_care_rate",
    "calc_long_term_care_contribution",
    "calc_period_contributions",
    "calc_annual_contributions",
]
