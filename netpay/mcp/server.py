"""Net Pay MCP Server - FastMCP implementation for net pay tools."""

import json
import logging
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field, ValidationError

from netpay.sdk import (
    ConfigValidationError,
    JurisdictionNotFoundError,
    SalaryInput,
    TaxClassNotFoundError,
    compute_breakdown,
    list_jurisdictions,
    load_jurisdiction,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("net-pay")


# --- Tools ---

@mcp.tool()
async def compute_net_pay(
    base_monthly_gross: float = Field(description="Regular gross per paid month"),
    tax_class: str = Field(default="I", description="Tax class identifier (e.g. 'I'..'VI')"),
    paid_periods: int = Field(default=12, description="Paid months in the year (1-12)"),
    bonuses: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Bonus entries: {id, period (1-12), kind ('amount'|'percent'), value, description?}",
    ),
    church_tax: bool = Field(default=False, description="Liable for church tax"),
    solidarity_tax: bool = Field(default=True, description="Apply the solidarity surcharge"),
    federal_state: str = Field(default="", description="Federal state code for the church tax rate"),
    private_health_insurance: bool = Field(default=False, description="Privately health insured"),
    health_additional_rate: Optional[float] = Field(
        default=None, description="Health insurer additional rate in percent (None: configured default)"
    ),
    voluntary_insurance: bool = Field(default=False, description="Include voluntary supplemental insurance"),
    dependents_under_25: int = Field(default=0, description="Children under 25"),
    child_allowance_factors: float = Field(default=0, description="Child allowance factors"),
    home_office_days: float = Field(default=0, description="Home-office days per year"),
    commute_distance_km: float = Field(default=0, description="One-way commute distance in km"),
    commute_days_per_month: float = Field(default=0, description="Commute days per month"),
    car_list_price: float = Field(default=0, description="Company car list price"),
    car_type: str = Field(default="none", description="'none', 'combustion', 'hybrid' or 'electric'"),
    meal_vouchers: float = Field(default=0, description="Monthly meal-voucher value"),
    capital_gains_allowance: float = Field(default=0, description="Monthly capital-formation payment"),
    company_pension: float = Field(default=0, description="Monthly company-pension contribution"),
    jurisdiction: Optional[str] = Field(default=None, description="Jurisdiction name (default: de-2025)"),
) -> dict[str, Any]:
    """Compute a gross-to-net salary breakdown. Returns annual and monthly taxes, contributions and net pay."""
    fields = dict(locals())
    fields.pop("jurisdiction")

    try:
        config = load_jurisdiction(jurisdiction)
        salary = SalaryInput.model_validate(fields)
        breakdown = compute_breakdown(salary, config)
    except TaxClassNotFoundError as e:
        return {"error": str(e), "available_tax_classes": e.available}
    except (JurisdictionNotFoundError, ConfigValidationError, ValidationError) as e:
        logger.error(f"Error computing net pay: {e}")
        return {"error": str(e)}

    return breakdown.model_dump()


@mcp.tool()
async def list_tax_classes(
    jurisdiction: Optional[str] = Field(default=None, description="Jurisdiction name (default: de-2025)"),
) -> dict[str, Any]:
    """List the tax classes of a jurisdiction with their labels and allowances."""
    try:
        config = load_jurisdiction(jurisdiction)
    except (JurisdictionNotFoundError, ConfigValidationError) as e:
        return {"error": str(e), "tax_classes": []}

    return {
        "jurisdiction": f"{config.meta.country} {config.meta.tax_year}",
        "currency": config.meta.currency,
        "tax_classes": [
            {
                "id": class_id,
                "label": tax_class.label,
                "allowance": tax_class.basic_allowance + tax_class.additional_allowance,
            }
            for class_id, tax_class in config.tax_classes.items()
        ],
    }


# --- Resources ---

@mcp.resource("netpay://jurisdictions")
async def list_jurisdictions_resource() -> str:
    """List available jurisdiction names."""
    return json.dumps({"jurisdictions": list_jurisdictions()}, indent=2)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
