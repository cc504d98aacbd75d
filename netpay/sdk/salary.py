"""Gross-to-net salary breakdown.

compute_breakdown is the single entry point callers use: it distributes
bonuses over the year, derives taxable income from allowances and benefits
in kind, and applies income tax, surcharges and social contributions.
It is pure: identical input and configuration give identical output.
"""

import logging
from typing import List

from .allowances import (
    calc_capital_gains_deduction,
    calc_child_allowance,
    calc_commute_allowance,
    calc_company_car_benefit,
    calc_company_pension_deduction,
    calc_home_office_allowance,
    calc_meal_voucher_taxable,
    calc_voluntary_insurance,
)
from .bonuses import distribute_bonuses
from .schemas import (
    AllowanceSummary,
    SalaryBreakdown,
    SalaryInput,
    SocialContributions,
    effective_periods,
)
from .taxes.contributions import calc_annual_contributions
from .taxes.income import calculate_church_tax, calculate_income_tax, calculate_solidarity_tax
from .taxes.schemas import JurisdictionConfig, TaxClassConfig

logger = logging.getLogger(__name__)


class TaxClassNotFoundError(KeyError):
    """Raised when the requested tax class is not in the jurisdiction config."""

    def __init__(self, tax_class: str, available: List[str]):
        self.tax_class = tax_class
        self.available = available
        super().__init__(tax_class)

    def __str__(self) -> str:
        choices = ", ".join(self.available) or "none"
        return f"Unknown tax class '{self.tax_class}' (available: {choices})"


def get_tax_class(config: JurisdictionConfig, tax_class: str) -> TaxClassConfig:
    """Look up a tax class, raising TaxClassNotFoundError if absent."""
    try:
        return config.tax_classes[tax_class]
    except KeyError:
        raise TaxClassNotFoundError(tax_class, list(config.tax_classes)) from None


def calc_allowances(salary: SalaryInput, config: JurisdictionConfig, periods: int) -> AllowanceSummary:
    """Resolve every taxable-income adjustment for the year."""
    rules = config.allowances
    tax_class = config.tax_classes.get(salary.tax_class)
    multiplier = tax_class.child_allowance_factor_multiplier if tax_class else None

    return AllowanceSummary(
        home_office=calc_home_office_allowance(
            salary.home_office_days, rules.home_office_daily_rate, rules.home_office_max
        ),
        commute=calc_commute_allowance(
            salary.commute_distance_km,
            salary.commute_days_per_month,
            periods,
            rules.commute_rate_first_20,
            rules.commute_rate_beyond,
        ),
        company_pension=calc_company_pension_deduction(
            salary.company_pension, config.company_pension_max_tax_free, periods
        ),
        capital_gains=calc_capital_gains_deduction(
            salary.capital_gains_allowance, rules.capital_gains_allowance_max_employer, periods
        ),
        company_car_benefit=calc_company_car_benefit(
            salary.car_list_price, salary.car_type, config.company_car_benefit_rates
        ),
        meal_voucher_taxable=calc_meal_voucher_taxable(
            salary.meal_vouchers, rules.meal_voucher_tax_free_limit, periods
        ),
        child_allowance=calc_child_allowance(
            salary.child_allowance_factors, rules.child_allowance_per_factor, multiplier
        ),
    )


def _apportion_monthly_net(
    monthly_grosses: List[float],
    per_period_contributions: List[SocialContributions],
    annual_gross: float,
    annual_shared: float,
    annual_net: float,
) -> List[float]:
    """Net pay of each period.

    Taxes and the voluntary insurance (annual_shared) are split by each
    period's share of annual gross; statutory contributions are the period's
    own capped amounts. Periods that would go negative are set to zero and
    the shortfall is taken from the positive periods in proportion to their
    size, so the figures always add up to annual_net.
    """
    raw = []
    for gross, contributions in zip(monthly_grosses, per_period_contributions):
        share = gross / annual_gross if annual_gross > 0 else 0.0
        raw.append(gross - annual_shared * share - contributions.total)

    positive = sum(amount for amount in raw if amount > 0)
    if positive <= 0:
        return [0.0] * len(raw)
    scale = annual_net / positive
    return [amount * scale if amount > 0 else 0.0 for amount in raw]


def compute_breakdown(salary: SalaryInput, config: JurisdictionConfig) -> SalaryBreakdown:
    """Compute the full annual and monthly net pay breakdown.

    Args:
        salary: Personal inputs
        config: Jurisdiction parameters

    Returns:
        SalaryBreakdown with annual totals and twelve per-period figures

    Raises:
        TaxClassNotFoundError: If salary.tax_class is not configured
    """
    tax_class = get_tax_class(config, salary.tax_class)
    periods = effective_periods(salary.paid_periods)

    monthly_grosses, annual_bonuses = distribute_bonuses(
        salary.base_monthly_gross, periods, salary.bonuses
    )
    annual_gross = sum(monthly_grosses)
    monthly_gross = annual_gross / periods

    allowances = calc_allowances(salary, config, periods)
    taxable_income = max(0.0, annual_gross + allowances.total_additions - allowances.total_reductions)
    logger.debug(
        f"taxable income {taxable_income:.2f} = gross {annual_gross:.2f} "
        f"+ {allowances.total_additions:.2f} - {allowances.total_reductions:.2f}"
    )

    income_tax = calculate_income_tax(taxable_income, tax_class)
    solidarity_tax = (
        calculate_solidarity_tax(taxable_income, income_tax, config.solidarity_tax)
        if salary.solidarity_tax
        else 0.0
    )
    church_tax = calculate_church_tax(
        income_tax, config.church_tax, salary.church_tax, salary.federal_state
    )

    per_period, statutory = calc_annual_contributions(
        monthly_grosses,
        config.social_contributions,
        dependents_under_25=salary.dependents_under_25,
        health_additional_rate_pct=salary.health_additional_rate,
        private_health_insurance=salary.private_health_insurance,
    )
    voluntary = calc_voluntary_insurance(
        monthly_gross, periods, salary.voluntary_insurance, config.allowances
    )
    contributions = statutory.model_copy(update={"voluntary": voluntary})

    total_deductions = income_tax + solidarity_tax + church_tax + contributions.total
    annual_net = max(0.0, annual_gross - total_deductions)

    monthly_net_amounts = _apportion_monthly_net(
        monthly_grosses,
        per_period,
        annual_gross,
        income_tax + solidarity_tax + church_tax + voluntary,
        annual_net,
    )

    logger.debug(
        f"class {salary.tax_class}: gross {annual_gross:.2f}, deductions {total_deductions:.2f}, "
        f"net {annual_net:.2f}"
    )

    return SalaryBreakdown(
        tax_class=salary.tax_class,
        currency=config.meta.currency,
        paid_periods=periods,
        monthly_gross=monthly_gross,
        annual_gross=annual_gross,
        annual_bonuses=annual_bonuses,
        taxable_income=taxable_income,
        income_tax=income_tax,
        solidarity_tax=solidarity_tax,
        church_tax=church_tax,
        social_contributions=contributions,
        allowances=allowances,
        total_deductions=total_deductions,
        annual_net=annual_net,
        monthly_net=annual_net / periods,
        monthly_grosses=monthly_grosses,
        monthly_net_amounts=monthly_net_amounts,
    )
