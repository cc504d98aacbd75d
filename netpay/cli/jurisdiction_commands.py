"""Jurisdiction inspection commands."""

import click
from rich import box
from rich.console import Console
from rich.table import Table

from netpay.sdk import (
    ConfigValidationError,
    JurisdictionNotFoundError,
    get_bundled_jurisdictions_dir,
    get_user_jurisdictions_dir,
    list_jurisdictions,
    load_jurisdiction,
    resolve_jurisdiction_path,
)

from .renderers.format import format_currency, format_number


def _pct(rate: float) -> str:
    return f"{format_number(rate * 100)} %"


@click.group()
def jurisdictions():
    """Inspect jurisdiction documents.

    Bundled documents ship with net-pay; documents placed in the user
    jurisdictions directory take precedence over bundled ones with the
    same name.
    """
    pass


@jurisdictions.command("list")
def jurisdictions_list():
    """List available jurisdictions."""
    names = list_jurisdictions()
    if not names:
        click.echo("No jurisdictions found.")
        return

    for name in names:
        click.echo(f"  {name}")
    click.echo()
    click.echo(f"User directory:    {get_user_jurisdictions_dir()}")
    click.echo(f"Bundled directory: {get_bundled_jurisdictions_dir()}")


@jurisdictions.command("show")
@click.argument("name", required=False)
def jurisdictions_show(name):
    """Show tax classes and key parameters of a jurisdiction.

    NAME is a jurisdiction name or file path (default: the 'jurisdiction'
    setting, then de-2025).
    """
    try:
        path = resolve_jurisdiction_path(name)
        config = load_jurisdiction(name)
    except (JurisdictionNotFoundError, ConfigValidationError) as e:
        raise click.ClickException(str(e))

    console = Console(width=100)
    currency = config.meta.currency
    console.print(f"[bold]{config.meta.country} {config.meta.tax_year}[/bold] ({currency}) - {path}")

    classes = Table(title="Tax Classes", box=box.ROUNDED)
    classes.add_column("Class", style="bold")
    classes.add_column("Label")
    classes.add_column("Allowances", justify="right")
    classes.add_column("Top Rate", justify="right")
    for class_id, tax_class in config.tax_classes.items():
        allowance = tax_class.basic_allowance + tax_class.additional_allowance
        top_rate = tax_class.brackets[-1].rate if tax_class.brackets else 0
        classes.add_row(class_id, tax_class.label, format_currency(allowance, currency), _pct(top_rate))
    console.print(classes)

    social = Table(title="Social Insurance (employee share)", box=box.ROUNDED)
    social.add_column("Branch", style="bold")
    social.add_column("Rate", justify="right")
    social.add_column("Monthly Cap", justify="right")
    branches = config.social_contributions
    for label, branch in [
        ("Health", branches.health),
        ("Pension", branches.pension),
        ("Unemployment", branches.unemployment),
        ("Long-Term Care", branches.long_term_care),
    ]:
        rate = branch.employee_rate + (branch.additional_rate or 0)
        social.add_row(label, _pct(rate), format_currency(branch.cap_monthly, currency))
    console.print(social)

    console.print(
        f"Solidarity surcharge: {_pct(config.solidarity_tax.rate)} above "
        f"{format_currency(config.solidarity_tax.free_allowance, currency)} taxable income"
    )
    console.print(f"Church tax: {_pct(config.church_tax.rate)} default, "
                  f"{len(config.church_tax.rate_by_state)} state rates")
