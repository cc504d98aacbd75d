"""Net pay calculation command."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console

from netpay.sdk import (
    ConfigValidationError,
    JurisdictionNotFoundError,
    SalaryInput,
    TaxClassNotFoundError,
    compute_breakdown,
    get_setting,
    load_jurisdiction,
    load_salary_input,
)

from .renderers.breakdown_renderer import render_breakdown

CAR_TYPES = ["none", "combustion", "hybrid", "electric"]


def parse_bonus(text: str, index: int) -> Dict[str, Any]:
    """Parse a --bonus value of the form PERIOD:VALUE[%][:DESCRIPTION].

    Examples:
        "6:1200"            -> 1200 in June
        "11:20%:Christmas"  -> 20% of base annual gross in November
    """
    parts = text.split(":", 2)
    if len(parts) < 2:
        raise click.BadParameter(f"'{text}' is not PERIOD:VALUE[%][:DESCRIPTION]", param_hint="--bonus")

    period_text, value_text = parts[0].strip(), parts[1].strip()
    kind = "amount"
    if value_text.endswith("%"):
        kind = "percent"
        value_text = value_text[:-1]

    try:
        period = int(period_text)
        value = float(value_text)
    except ValueError:
        raise click.BadParameter(f"'{text}' has a non-numeric period or value", param_hint="--bonus")

    bonus = {"id": f"bonus-{index}", "period": period, "kind": kind, "value": value}
    if len(parts) == 3 and parts[2].strip():
        bonus["description"] = parts[2].strip()
    return bonus


def _parse_bonuses(ctx, param, values: Tuple[str, ...]) -> Optional[List[Dict[str, Any]]]:
    if not values:
        return None
    return [parse_bonus(text, index) for index, text in enumerate(values, start=1)]


def build_salary_input(input_file: Optional[Path], overrides: Dict[str, Any]) -> SalaryInput:
    """Merge saved defaults, scenario file and command-line options.

    Later sources win: the 'tax_class' setting is overridden by the
    scenario file, which is overridden by command-line options.
    """
    defaults = {}
    default_class = get_setting("tax_class")
    if default_class:
        defaults["tax_class"] = default_class

    if input_file:
        return load_salary_input(input_file, overrides, defaults)

    if "base_monthly_gross" not in overrides:
        raise click.UsageError("Provide --gross or a scenario file via --input.")

    try:
        return SalaryInput.model_validate({**defaults, **overrides})
    except ValidationError as e:
        raise click.ClickException(f"Invalid input:\n{e}")


@click.command("calc")
@click.option("--gross", "base_monthly_gross", type=float, help="Regular gross per paid month.")
@click.option("--tax-class", type=str, help="Tax class (e.g. I..VI). Default: 'tax_class' setting, then I.")
@click.option("--periods", "paid_periods", type=int, help="Paid months in the year (1-12, default 12).")
@click.option("--bonus", "bonuses", multiple=True, callback=_parse_bonuses,
              help="Bonus as PERIOD:VALUE[%][:DESCRIPTION]; repeatable.")
@click.option("--church-tax/--no-church-tax", default=None, help="Liable for church tax.")
@click.option("--solidarity-tax/--no-solidarity-tax", default=None, help="Apply solidarity surcharge (default on).")
@click.option("--state", "federal_state", type=str, help="Federal state code for the church tax rate (e.g. BY).")
@click.option("--private-health/--statutory-health", "private_health_insurance", default=None,
              help="Privately insured (no statutory health contribution).")
@click.option("--health-additional-rate", type=float, help="Health insurer additional rate in percent.")
@click.option("--voluntary-insurance/--no-voluntary-insurance", default=None,
              help="Include voluntary supplemental insurance.")
@click.option("--children", "dependents_under_25", type=int, help="Children under 25.")
@click.option("--child-factors", "child_allowance_factors", type=float, help="Child allowance factors.")
@click.option("--age", type=int, help="Employee age.")
@click.option("--home-office-days", type=float, help="Home-office days per year.")
@click.option("--commute-km", "commute_distance_km", type=float, help="One-way commute distance in km.")
@click.option("--commute-days", "commute_days_per_month", type=float, help="Commute days per month.")
@click.option("--car-price", "car_list_price", type=float, help="Company car list price.")
@click.option("--car-type", type=click.Choice(CAR_TYPES), help="Company car propulsion.")
@click.option("--capital-formation", "capital_gains_allowance", type=float,
              help="Monthly employer capital-formation payment.")
@click.option("--meal-vouchers", type=float, help="Monthly meal-voucher value.")
@click.option("--company-pension", type=float, help="Monthly company-pension contribution.")
@click.option("--input", "input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Scenario file (YAML/JSON) with input fields; options override it.")
@click.option("--jurisdiction", "-j", help="Jurisdiction name or file (default: setting, then de-2025).")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
@click.option("--monthly/--no-monthly", "show_monthly", default=True, help="Show the per-month payout table.")
def calc(input_file: Optional[Path], jurisdiction: Optional[str], output_format: str,
         show_monthly: bool, **fields):
    """Calculate net pay from gross pay.

    Examples:
        net-pay calc --gross 4500 --tax-class I
        net-pay calc --gross 6500 --bonus 6:1000 --bonus 11:20%:Christmas --children 1
        net-pay calc --input scenario.yaml --format json
    """
    overrides = {key: value for key, value in fields.items() if value is not None}

    try:
        config = load_jurisdiction(jurisdiction)
        salary = build_salary_input(input_file, overrides)
        breakdown = compute_breakdown(salary, config)
    except (JurisdictionNotFoundError, ConfigValidationError, TaxClassNotFoundError) as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(breakdown.model_dump(), indent=2))
        return

    render_breakdown(Console(width=100), breakdown, show_periods=show_monthly)
