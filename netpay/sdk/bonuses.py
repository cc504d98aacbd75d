"""Bonus distribution across the twelve pay periods of a year.

Percentage bonuses are resolved against the base annual gross (regular pay
only), never against a running total that already includes other bonuses.
"""

import logging
from typing import Iterable, List, Tuple

from .schemas import MONTHS_PER_YEAR, BonusEntry, clamp_non_negative, effective_periods

logger = logging.getLogger(__name__)


def resolve_bonus_value(entry: BonusEntry, base_annual_gross: float) -> float:
    """Absolute value of a bonus entry.

    Example: kind='percent', value=50, base_annual_gross=36000 -> 18000
    """
    if entry.kind == "percent":
        return (entry.value / 100) * base_annual_gross
    return entry.value


def distribute_bonuses(
    base_monthly_gross: float,
    paid_periods: int,
    bonuses: Iterable[BonusEntry],
) -> Tuple[List[float], float]:
    """Build the gross figure of each of the twelve periods.

    Args:
        base_monthly_gross: Regular gross per paid period
        paid_periods: Number of paid periods (1-12; anything else means 12)
        bonuses: Bonus entries; several entries may target the same period

    Returns:
        Tuple of (monthly_grosses, annual_bonuses) where monthly_grosses has
        twelve entries and periods after the last paid one start at zero.
    """
    base = clamp_non_negative(base_monthly_gross)
    periods = effective_periods(paid_periods)

    monthly_grosses = [base if index < periods else 0.0 for index in range(MONTHS_PER_YEAR)]
    base_annual_gross = base * periods

    annual_bonuses = 0.0
    for entry in bonuses:
        value = resolve_bonus_value(entry, base_annual_gross)
        monthly_grosses[entry.period - 1] += value
        annual_bonuses += value
        logger.debug(f"bonus {entry.id}: {value:.2f} in period {entry.period}")

    return monthly_grosses, annual_bonuses
