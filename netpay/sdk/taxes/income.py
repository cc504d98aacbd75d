"""Income tax and the surcharges computed from it.

Brackets are piecewise linear and anchored at their start: each bracket
carries the tax already owed at its lower edge (base_tax) and the adjusted
income at that edge (base_income). This differs from summing
income-in-bracket * rate over all brackets.
"""

import logging

from .schemas import ChurchTaxConfig, SolidarityTaxConfig, TaxBracket, TaxClassConfig

logger = logging.getLogger(__name__)


def _bracket_tax(adjusted_income: float, bracket: TaxBracket) -> float:
    taxable_portion = max(0.0, adjusted_income - bracket.base_income)
    return max(0.0, bracket.base_tax + taxable_portion * bracket.rate)


def calculate_income_tax(taxable_income: float, tax_class: TaxClassConfig) -> float:
    """Annual income tax for a tax class.

    Args:
        taxable_income: Annual taxable income
        tax_class: Allowances and brackets (sorted ascending by up_to,
            last bracket open-ended)

    Returns:
        Non-negative annual income tax
    """
    allowance = tax_class.basic_allowance + tax_class.additional_allowance
    adjusted_income = max(0.0, taxable_income - allowance)

    for bracket in tax_class.brackets:
        limit = bracket.up_to if bracket.up_to is not None else float("inf")
        if adjusted_income <= limit:
            return _bracket_tax(adjusted_income, bracket)

    # Top bracket carries a bound; extend it
    return _bracket_tax(adjusted_income, tax_class.brackets[-1])


def calculate_solidarity_tax(taxable_income: float, income_tax: float, config: SolidarityTaxConfig) -> float:
    """Solidarity surcharge on income tax.

    No surcharge at or below the free allowance; above it the full rate
    applies (no phase-in).
    """
    if income_tax <= 0 or taxable_income <= config.free_allowance:
        return 0.0
    return income_tax * config.rate


def calculate_church_tax(income_tax: float, config: ChurchTaxConfig, liable: bool, federal_state: str) -> float:
    """Church tax at the state's rate, or the default rate for unknown states."""
    if not liable or income_tax <= 0:
        return 0.0
    rate = config.rate_by_state.get(federal_state)
    if rate is None:
        logger.debug(f"no church tax rate for state '{federal_state}', using default {config.rate}")
        rate = config.rate
    return income_tax * rate
