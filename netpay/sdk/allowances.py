"""Adjustments to taxable income.

Allowances (home office, commute, company pension, capital-gains
allowance) reduce taxable income; benefits in kind (company car, meal
vouchers above the tax-free limit) increase it. Every function returns a
non-negative annual amount, and every cap is a hard ceiling.

The voluntary supplemental insurance is a deduction from net pay rather
than an allowance and is reported with the social contributions.
"""

from typing import Optional

from .schemas import MONTHS_PER_YEAR, CarType
from .taxes.schemas import AllowanceConfig, CompanyCarBenefitRates

COMMUTE_NEAR_KM = 20


def _months(paid_periods: int) -> int:
    return min(max(paid_periods, 0), MONTHS_PER_YEAR)


def calc_home_office_allowance(days: float, daily_rate: float, annual_cap: float) -> float:
    """Home-office allowance: days * daily rate, capped per year."""
    if days <= 0:
        return 0.0
    return min(days * daily_rate, annual_cap)


def calc_commute_allowance(
    distance_km: float,
    days_per_month: float,
    paid_periods: int,
    rate_first_20: float,
    rate_beyond: float,
) -> float:
    """Commuting allowance for one-way distance, tiered at 20 km.

    Example: 25 km, 10 days, 12 periods, 0.30/0.38 ->
        (20 * 0.30 + 5 * 0.38) * 120 = 948.0
    """
    if distance_km <= 0 or days_per_month <= 0:
        return 0.0
    annual_trips = days_per_month * _months(paid_periods)
    near = min(distance_km, COMMUTE_NEAR_KM) * rate_first_20
    far = max(distance_km - COMMUTE_NEAR_KM, 0) * rate_beyond
    return (near + far) * annual_trips


def calc_company_car_benefit(list_price: float, car_type: CarType, rates: CompanyCarBenefitRates) -> float:
    """Annual taxable benefit of a company car (list-price method)."""
    if list_price <= 0 or car_type == "none":
        return 0.0
    return list_price * getattr(rates, car_type) * MONTHS_PER_YEAR


def calc_meal_voucher_taxable(monthly_value: float, tax_free_limit: float, paid_periods: int) -> float:
    """Part of the meal vouchers above the monthly tax-free limit, per year."""
    if monthly_value <= 0:
        return 0.0
    return max(0.0, monthly_value - tax_free_limit) * _months(paid_periods)


def calc_capital_gains_deduction(monthly_amount: float, employer_cap: float, paid_periods: int) -> float:
    """Capital-formation allowance, capped per month."""
    if monthly_amount <= 0:
        return 0.0
    return min(monthly_amount, employer_cap) * _months(paid_periods)


def calc_company_pension_deduction(monthly_contribution: float, tax_free_cap: float, paid_periods: int) -> float:
    """Tax-free part of company-pension contributions, capped per month."""
    if monthly_contribution <= 0:
        return 0.0
    return min(monthly_contribution, tax_free_cap) * _months(paid_periods)


def calc_voluntary_insurance(
    monthly_gross: float,
    paid_periods: int,
    opted_in: bool,
    config: AllowanceConfig,
) -> float:
    """Voluntary supplemental insurance on gross above the monthly threshold."""
    if not opted_in:
        return 0.0
    voluntary = config.voluntary_insurance
    monthly = max(0.0, monthly_gross - voluntary.threshold_monthly) * voluntary.additional_rate
    return monthly * _months(paid_periods)


def calc_child_allowance(factors: float, per_factor: float, multiplier: Optional[float] = None) -> float:
    """Child allowance for the given number of factors (0.5 per parent and child)."""
    if factors <= 0:
        return 0.0
    if multiplier is None:
        multiplier = 1.0
    return factors * per_factor * multiplier
