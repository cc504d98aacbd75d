"""Pydantic schemas for jurisdiction configuration.

These schemas validate the jurisdictions/*.yaml documents and provide typed
access to tax brackets, social contribution parameters and allowance limits.
The computation core treats a validated JurisdictionConfig as opaque,
trusted data: it does not re-check bracket ordering or contiguity.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TaxBracket(BaseModel):
    """Single progressive tax bracket.

    Tax inside the bracket is base_tax + (income - base_income) * rate, so
    base_tax must already hold the cumulative tax of all lower brackets.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    up_to: Optional[float] = Field(default=None, description="Upper bound (None for the open top bracket)")
    rate: float = Field(..., ge=0, le=1, description="Marginal rate as decimal")
    base_tax: float = Field(default=0, ge=0, description="Tax owed at the bracket start")
    base_income: float = Field(default=0, ge=0, description="Adjusted income at the bracket start")


class TaxClassConfig(BaseModel):
    """Allowances and bracket schedule for one tax class."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str = ""
    basic_allowance: float = Field(..., ge=0)
    additional_allowance: float = Field(default=0, ge=0)
    brackets: List[TaxBracket]
    child_allowance_factor_multiplier: Optional[float] = Field(default=None, ge=0)


class SocialContributionConfig(BaseModel):
    """Employee share of one social insurance branch."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    employee_rate: float = Field(..., ge=0, le=1)
    cap_monthly: float = Field(..., gt=0, description="Monthly contribution ceiling")
    additional_rate: Optional[float] = Field(default=None, ge=0, le=1)
    surcharge_without_children: Optional[float] = Field(default=None, ge=0, le=1)
    child_discount_per_child_after_first: Optional[float] = Field(default=None, ge=0, le=1)
    max_child_discount_children: Optional[int] = Field(default=None, ge=0)


class SocialContributionsConfig(BaseModel):
    """The four statutory social insurance branches."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    health: SocialContributionConfig
    pension: SocialContributionConfig
    unemployment: SocialContributionConfig
    long_term_care: SocialContributionConfig


class SolidarityTaxConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    free_allowance: float = Field(..., ge=0, description="Taxable income at or below which no surcharge is due")
    rate: float = Field(..., ge=0, le=1)


class ChurchTaxConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: float = Field(..., ge=0, le=1, description="Fallback rate for unknown states")
    rate_by_state: Dict[str, float] = Field(default_factory=dict)


class VoluntaryInsuranceConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    threshold_monthly: float = Field(..., ge=0)
    additional_rate: float = Field(..., ge=0, le=1)


class AllowanceConfig(BaseModel):
    """Allowance rates and ceilings."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    home_office_daily_rate: float = Field(..., ge=0)
    home_office_max: float = Field(..., ge=0, description="Annual home-office ceiling")
    commute_rate_first_20: float = Field(..., ge=0, description="Per-km rate for the first 20 km")
    commute_rate_beyond: float = Field(..., ge=0, description="Per-km rate from km 21 on")
    voluntary_insurance: VoluntaryInsuranceConfig
    meal_voucher_tax_free_limit: float = Field(..., ge=0)
    capital_gains_allowance_max_employer: float = Field(..., ge=0)
    child_allowance_per_factor: float = Field(default=0, ge=0)


class CompanyCarBenefitRates(BaseModel):
    """Monthly benefit-in-kind rate of the list price, per propulsion type."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    combustion: float = Field(..., ge=0, le=1)
    hybrid: float = Field(..., ge=0, le=1)
    electric: float = Field(..., ge=0, le=1)


class JurisdictionMeta(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    country: str
    currency: str = Field(..., min_length=3, max_length=3)
    tax_year: int


class JurisdictionConfig(BaseModel):
    """Complete parameter snapshot for one jurisdiction and tax year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    meta: JurisdictionMeta
    tax_classes: Dict[str, TaxClassConfig]
    social_contributions: SocialContributionsConfig
    solidarity_tax: SolidarityTaxConfig
    church_tax: ChurchTaxConfig
    allowances: AllowanceConfig
    company_car_benefit_rates: CompanyCarBenefitRates
    company_pension_max_tax_free: float = Field(..., ge=0)
