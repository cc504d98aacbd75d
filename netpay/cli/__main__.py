"""Net Pay CLI - Command-line interface for gross-to-net salary calculations."""

import logging

import click

from netpay import __version__

from .calc_commands import calc as calc_command
from .jurisdiction_commands import jurisdictions as jurisdictions_group
from .settings_commands import settings as settings_group


@click.group()
@click.version_option(version=__version__, prog_name="net-pay")
@click.option("--debug", is_flag=True, help="Log intermediate calculation steps.")
def cli(debug: bool):
    """Net Pay - Gross-to-net salary calculator.

    Computes income tax, surcharges and social insurance contributions
    from a jurisdiction document and personal inputs.

    Configuration is loaded from (in order):

    \b
    1. NET_PAY_CONFIG_PATH environment variable
    2. ~/.config/net-pay/ (XDG default)

    Run 'net-pay jurisdictions list' to see available jurisdictions.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


cli.add_command(calc_command)
cli.add_command(jurisdictions_group)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
