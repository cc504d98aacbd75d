"""Rich renderer for salary breakdowns.

Transforms SalaryBreakdown output into formatted Rich tables.
"""

from rich import box
from rich.console import Console
from rich.table import Table

from netpay.sdk.schemas import SalaryBreakdown

from .format import format_currency

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def render_breakdown(console: Console, breakdown: SalaryBreakdown, show_periods: bool = True) -> None:
    """Render a salary breakdown as Rich tables.

    Args:
        console: Rich Console instance
        breakdown: Output of compute_breakdown()
        show_periods: Also render the twelve per-period figures
    """
    _render_summary_table(console, breakdown)
    if show_periods:
        _render_periods_table(console, breakdown)


def _render_summary_table(console: Console, b: SalaryBreakdown) -> None:
    """Render annual/monthly summary table."""
    def fmt(amount: float) -> str:
        return format_currency(amount, b.currency)

    def monthly(amount: float) -> str:
        return fmt(amount / b.paid_periods)

    table = Table(
        title=f"Net Pay: Tax Class {b.tax_class} - {b.paid_periods} paid periods",
        box=box.ROUNDED,
    )
    table.add_column("", style="bold", min_width=28)
    table.add_column("Per Period", justify="right", min_width=14)
    table.add_column("Annual", justify="right", min_width=14)

    # Earnings
    table.add_row("[bold]EARNINGS[/bold]", "", "")
    table.add_row("  Gross Pay", fmt(b.monthly_gross), fmt(b.annual_gross))
    if b.annual_bonuses:
        table.add_row("  [dim]of which bonuses[/dim]", "", f"[dim]{fmt(b.annual_bonuses)}[/dim]")
    table.add_row("", "", "")

    # Taxable income adjustments
    a = b.allowances
    adjustments = [
        ("Company Car", a.company_car_benefit),
        ("Meal Vouchers (taxable)", a.meal_voucher_taxable),
        ("Home Office", -a.home_office),
        ("Commute", -a.commute),
        ("Company Pension", -a.company_pension),
        ("Capital Formation", -a.capital_gains),
    ]
    if any(amount for _, amount in adjustments):
        table.add_row("[bold]TAXABLE INCOME ADJUSTMENTS[/bold]", "", "")
        for label, amount in adjustments:
            if amount:
                table.add_row(f"  {label}", "", fmt(amount))
    table.add_row("Taxable Income", "", fmt(b.taxable_income), style="dim")
    if a.child_allowance:
        table.add_row("Child Allowance", "", fmt(a.child_allowance), style="dim")
    table.add_row("", "", "")

    # Taxes
    table.add_row("[bold]TAXES[/bold]", "", "")
    table.add_row("  Income Tax", monthly(b.income_tax), fmt(b.income_tax))
    table.add_row("  Solidarity Surcharge", monthly(b.solidarity_tax), fmt(b.solidarity_tax))
    table.add_row("  Church Tax", monthly(b.church_tax), fmt(b.church_tax))
    table.add_row("", "", "")

    # Social contributions
    c = b.social_contributions
    table.add_row("[bold]SOCIAL INSURANCE[/bold]", "", "")
    table.add_row("  Health", monthly(c.health), fmt(c.health))
    table.add_row("  Pension", monthly(c.pension), fmt(c.pension))
    table.add_row("  Unemployment", monthly(c.unemployment), fmt(c.unemployment))
    table.add_row("  Long-Term Care", monthly(c.long_term_care), fmt(c.long_term_care))
    if c.voluntary:
        table.add_row("  Voluntary Insurance", monthly(c.voluntary), fmt(c.voluntary))
    table.add_row(
        "  [dim]Total Deductions[/dim]",
        f"[dim]{monthly(b.total_deductions)}[/dim]",
        f"[dim]{fmt(b.total_deductions)}[/dim]",
    )
    table.add_row("", "", "")

    # Net pay
    table.add_row(
        "[bold green]NET PAY[/bold green]",
        f"[bold green]{fmt(b.monthly_net)}[/bold green]",
        f"[bold green]{fmt(b.annual_net)}[/bold green]",
    )

    console.print(table)


def _render_periods_table(console: Console, b: SalaryBreakdown) -> None:
    """Render gross and net of each of the twelve periods."""
    table = Table(title="Monthly Payout", box=box.SIMPLE)
    table.add_column("Month")
    table.add_column("Gross", justify="right")
    table.add_column("Net", justify="right")

    for label, gross, net in zip(MONTH_LABELS, b.monthly_grosses, b.monthly_net_amounts):
        style = "dim" if not gross else None
        table.add_row(label, format_currency(gross, b.currency), format_currency(net, b.currency), style=style)

    console.print(table)
    console.print("[dim]Per-month net splits taxes by each month's share of gross (approximation).[/dim]")
