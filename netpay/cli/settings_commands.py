"""Settings CLI commands for Net Pay.

Manages settings.json - default jurisdiction and tax class.
"""

import click

from netpay.sdk import (
    DEFAULT_JURISDICTION,
    JurisdictionNotFoundError,
    get_settings_path,
    load_settings,
    resolve_jurisdiction_path,
    set_setting,
    unset_setting,
)

KNOWN_SETTINGS = {
    "jurisdiction": "default jurisdiction name or file",
    "tax_class": "default tax class for 'net-pay calc'",
}


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - jurisdiction: default jurisdiction name or file
    - tax_class: default tax class for 'net-pay calc'
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
        click.echo(f"  jurisdiction: {DEFAULT_JURISDICTION} (default)")
        return

    click.echo("Current settings:")
    for key, value in current.items():
        click.echo(f"  {key}: {value}")


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
@click.argument("value")
def settings_set(key, value):
    """Set a setting.

    Examples:
        net-pay settings set jurisdiction de-2025
        net-pay settings set tax_class III
    """
    if key == "jurisdiction":
        try:
            resolve_jurisdiction_path(value)
        except JurisdictionNotFoundError as e:
            raise click.ClickException(str(e))

    path = set_setting(key, value)
    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
def settings_unset(key):
    """Clear a setting, reverting to its default."""
    if unset_setting(key):
        click.echo(f"Cleared {key}.")
    else:
        click.echo(f"{key} was not set.")
