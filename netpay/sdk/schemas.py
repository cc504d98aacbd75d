"""Pydantic schemas for salary inputs and computed breakdowns.

Caller-supplied records use extra='forbid' so typos in scenario files cause
clear errors rather than silent ignoring. Numeric fields that must be
non-negative are clamped instead of rejected: NaN, infinities and negative
values become 0, so degenerate input still yields a defined breakdown.
"""

import math
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MONTHS_PER_YEAR = 12

BonusKind = Literal["amount", "percent"]
CarType = Literal["none", "combustion", "hybrid", "electric"]


def clamp_non_negative(value: Any) -> float:
    """Coerce a raw number to a finite, non-negative float (else 0)."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def clamp_period(value: Any) -> int:
    """Clamp a 1-based pay period into [1, 12].

    Non-numeric and NaN values map to period 1.
    Example: 0 -> 1, 6.0 -> 6, 13 -> 12, "x" -> 1
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 1
    if math.isnan(number):
        return 1
    return int(min(max(number, 1), MONTHS_PER_YEAR))


def effective_periods(value: Any) -> int:
    """Number of paid periods in [1, 12]; non-positive or malformed means 12."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return MONTHS_PER_YEAR
    if math.isnan(number) or number < 1:
        return MONTHS_PER_YEAR
    return int(min(number, MONTHS_PER_YEAR))


# =============================================================================
# Input Schemas
# =============================================================================


class BonusEntry(BaseModel):
    """One-off payment added to a single pay period."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., description="Caller-side identifier")
    period: int = Field(..., ge=1, le=MONTHS_PER_YEAR, description="Target period (1-12)")
    kind: BonusKind = Field(default="amount", description="Absolute amount or percent of base annual gross")
    value: float = Field(..., description="Amount, or percentage points when kind='percent'")
    description: Optional[str] = None

    @field_validator("period", mode="before")
    @classmethod
    def _clamp_period(cls, v: Any) -> int:
        return clamp_period(v)

    @field_validator("value", mode="before")
    @classmethod
    def _clamp_value(cls, v: Any) -> float:
        return clamp_non_negative(v)


class SalaryInput(BaseModel):
    """Personal inputs for one net-pay computation.

    Monthly amounts (base gross, meal vouchers, capital-gains allowance,
    company pension) are per paid period; home-office days are per year.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_monthly_gross: float = Field(..., description="Regular gross per paid period")
    tax_class: str = Field(default="I", description="Tax class identifier (e.g. 'I'..'VI')")
    church_tax: bool = False
    solidarity_tax: bool = True
    voluntary_insurance: bool = False
    private_health_insurance: bool = Field(
        default=False,
        description="Privately insured; no statutory health contribution is withheld",
    )
    paid_periods: int = Field(default=MONTHS_PER_YEAR, ge=1, le=MONTHS_PER_YEAR)
    bonuses: List[BonusEntry] = Field(default_factory=list)
    home_office_days: float = Field(default=0, description="Remote-work days per year")
    commute_distance_km: float = 0
    commute_days_per_month: float = 0
    child_allowance_factors: float = 0
    dependents_under_25: int = 0
    age: Optional[int] = None
    federal_state: str = Field(default="", description="Subdivision code for the church tax rate")
    health_additional_rate: Optional[float] = Field(
        default=None,
        description="Statutory health additional rate in percent (e.g. 1.7); None uses the configured rate",
    )
    car_list_price: float = 0
    car_type: CarType = "none"
    capital_gains_allowance: float = Field(default=0, description="Monthly employer capital-formation payment")
    meal_vouchers: float = Field(default=0, description="Monthly meal-voucher value")
    company_pension: float = Field(default=0, description="Monthly company-pension contribution")

    @field_validator(
        "base_monthly_gross",
        "home_office_days",
        "commute_distance_km",
        "commute_days_per_month",
        "child_allowance_factors",
        "car_list_price",
        "capital_gains_allowance",
        "meal_vouchers",
        "company_pension",
        mode="before",
    )
    @classmethod
    def _clamp_amounts(cls, v: Any) -> float:
        return clamp_non_negative(v)

    @field_validator("dependents_under_25", mode="before")
    @classmethod
    def _clamp_count(cls, v: Any) -> int:
        return int(clamp_non_negative(v))

    @field_validator("age", mode="before")
    @classmethod
    def _clamp_age(cls, v: Any) -> Optional[int]:
        if v is None:
            return None
        return int(clamp_non_negative(v))

    @field_validator("health_additional_rate", mode="before")
    @classmethod
    def _clamp_health_rate(cls, v: Any) -> Optional[float]:
        if v is None:
            return None
        return clamp_non_negative(v)

    @field_validator("paid_periods", mode="before")
    @classmethod
    def _clamp_periods(cls, v: Any) -> int:
        return effective_periods(v)

    @field_validator("tax_class", mode="before")
    @classmethod
    def _strip_code(cls, v: Any) -> str:
        return str(v or "").strip()

    @field_validator("federal_state", mode="before")
    @classmethod
    def _normalize_state(cls, v: Any) -> str:
        # rate_by_state keys are upper-case codes
        return str(v or "").strip().upper()

    @property
    def has_children(self) -> bool:
        return self.dependents_under_25 > 0


# =============================================================================
# Output Schemas
# =============================================================================


class SocialContributions(BaseModel):
    """Annual employee social insurance contributions by branch."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    health: float = Field(default=0, ge=0)
    pension: float = Field(default=0, ge=0)
    unemployment: float = Field(default=0, ge=0)
    long_term_care: float = Field(default=0, ge=0)
    voluntary: float = Field(default=0, ge=0, description="Voluntary supplemental insurance")

    @property
    def total(self) -> float:
        return self.health + self.pension + self.unemployment + self.long_term_care + self.voluntary


class AllowanceSummary(BaseModel):
    """Annual adjustments that fed into the taxable income.

    company_car_benefit and meal_voucher_taxable increase taxable income;
    the remaining amounts decrease it. child_allowance is informational.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    home_office: float = 0
    commute: float = 0
    company_pension: float = 0
    capital_gains: float = 0
    company_car_benefit: float = 0
    meal_voucher_taxable: float = 0
    child_allowance: float = 0

    @property
    def total_reductions(self) -> float:
        return self.home_office + self.commute + self.company_pension + self.capital_gains

    @property
    def total_additions(self) -> float:
        return self.company_car_benefit + self.meal_voucher_taxable


class SalaryBreakdown(BaseModel):
    """Annual and per-period result of compute_breakdown.

    Annual figures are authoritative. monthly_net is the annual net averaged
    over paid periods; monthly_net_amounts apportions taxes by each period's
    share of gross and is an approximation of actual take-home pay.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_class: str
    currency: str
    paid_periods: int
    monthly_gross: float = Field(..., description="Annual gross averaged over paid periods")
    annual_gross: float
    annual_bonuses: float
    taxable_income: float
    income_tax: float
    solidarity_tax: float
    church_tax: float
    social_contributions: SocialContributions
    allowances: AllowanceSummary
    total_deductions: float
    annual_net: float
    monthly_net: float
    monthly_grosses: List[float] = Field(..., min_length=MONTHS_PER_YEAR, max_length=MONTHS_PER_YEAR)
    monthly_net_amounts: List[float] = Field(..., min_length=MONTHS_PER_YEAR, max_length=MONTHS_PER_YEAR)

    @property
    def total_taxes(self) -> float:
        return self.income_tax + self.solidarity_tax + self.church_tax
