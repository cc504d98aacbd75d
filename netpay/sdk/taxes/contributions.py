"""Employee social insurance contributions.

Every branch is computed per pay period against the monthly ceiling and
then summed. A bonus that pushes one period over the ceiling is only
partially subject to contributions, so the annual amount is lower than a
flat rate applied to the annual gross.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from ..schemas import SocialContributions
from .schemas import SocialContributionConfig, SocialContributionsConfig

logger = logging.getLogger(__name__)


def calc_capped_contribution(
    gross: float,
    config: SocialContributionConfig,
    additional_rate: Optional[float] = None,
) -> float:
    """Contribution for one period: capped base * (employee + additional rate).

    Args:
        gross: Period gross
        config: Branch parameters
        additional_rate: Overrides config.additional_rate when given (decimal)
    """
    capped_base = min(max(gross, 0.0), config.cap_monthly)
    if additional_rate is None:
        additional_rate = config.additional_rate or 0.0
    return capped_base * (config.employee_rate + additional_rate)


def calc_health_contribution(
    gross: float,
    config: SocialContributionConfig,
    additional_rate_pct: Optional[float] = None,
    private_insurance: bool = False,
) -> float:
    """Statutory health contribution for one period.

    additional_rate_pct is in percent (1.7 means 1.7%). Privately insured
    employees pay nothing through payroll.
    """
    if private_insurance:
        return 0.0
    additional = additional_rate_pct / 100 if additional_rate_pct is not None else None
    return calc_capped_contribution(gross, config, additional)


def calc_long_term_care_rate(config: SocialContributionConfig, dependents_under_25: int) -> float:
    """Effective long-term care rate for the employee's family situation.

    Childless employees pay the surcharge; from the second child under 25
    on, each child lowers the rate by the per-child discount, up to the
    configured number of discounted children.

    Example: 0.018 base, 0.006 surcharge, 0.0025 discount (max 4)
        0 children -> 0.024, 1 child -> 0.018, 3 children -> 0.013
    """
    dependents = max(dependents_under_25, 0)
    rate = config.employee_rate

    if dependents == 0:
        rate += config.surcharge_without_children or 0.0

    discounted_children = max(0, dependents - 1)
    if config.max_child_discount_children is not None:
        discounted_children = min(discounted_children, config.max_child_discount_children)
    rate -= (config.child_discount_per_child_after_first or 0.0) * discounted_children

    return max(0.0, rate)


def calc_long_term_care_contribution(
    gross: float,
    config: SocialContributionConfig,
    dependents_under_25: int,
) -> float:
    capped_base = min(max(gross, 0.0), config.cap_monthly)
    return capped_base * calc_long_term_care_rate(config, dependents_under_25)


def calc_period_contributions(
    gross: float,
    config: SocialContributionsConfig,
    dependents_under_25: int = 0,
    health_additional_rate_pct: Optional[float] = None,
    private_health_insurance: bool = False,
) -> SocialContributions:
    """All statutory contributions for a single period (voluntary excluded)."""
    return SocialContributions(
        health=calc_health_contribution(
            gross, config.health, health_additional_rate_pct, private_health_insurance
        ),
        pension=calc_capped_contribution(gross, config.pension),
        unemployment=calc_capped_contribution(gross, config.unemployment),
        long_term_care=calc_long_term_care_contribution(gross, config.long_term_care, dependents_under_25),
    )


def calc_annual_contributions(
    monthly_grosses: Iterable[float],
    config: SocialContributionsConfig,
    dependents_under_25: int = 0,
    health_additional_rate_pct: Optional[float] = None,
    private_health_insurance: bool = False,
) -> Tuple[List[SocialContributions], SocialContributions]:
    """Contributions per period and their annual sum.

    Returns:
        Tuple of (per_period, annual). The voluntary branch is zero in both;
        it does not depend on the monthly ceiling and is added by the caller.
    """
    per_period = [
        calc_period_contributions(
            gross,
            config,
            dependents_under_25=dependents_under_25,
            health_additional_rate_pct=health_additional_rate_pct,
            private_health_insurance=private_health_insurance,
        )
        for gross in monthly_grosses
    ]

    annual = SocialContributions(
        health=sum(p.health for p in per_period),
        pension=sum(p.pension for p in per_period),
        unemployment=sum(p.unemployment for p in per_period),
        long_term_care=sum(p.long_term_care for p in per_period),
    )
    logger.debug(
        f"contributions: health={annual.health:.2f} pension={annual.pension:.2f} "
        f"unemployment={annual.unemployment:.2f} ltc={annual.long_term_care:.2f}"
    )
    return per_period, annual
