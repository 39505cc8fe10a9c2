"""Profile and feature commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.errors import DomainError
from fintrack.domain.profile import ProfileService
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.money import CURRENCIES, format_currency


def _on_off(value: bool) -> str:
    return "on" if value else "off"


@click.group()
def profile_group():
    """Show and change profile settings."""
    pass


@profile_group.command("show")
@click.pass_context
def show_profile(ctx):
    """Show the profile and enabled features."""
    profile = ProfileService(ctx.obj["db"]).get_profile()
    click.echo(f"Name:      {profile.name}")
    click.echo(f"Phone:     {profile.phone or '-'}")
    click.echo(f"Currency:  {profile.currency} ({CURRENCIES.get(profile.currency, '?')})")
    click.echo(f"Debt tracking:          {_on_off(profile.show_debt_feature)}")
    click.echo(f"All-accounts analysis:  {_on_off(profile.show_all_accounts_analysis)}")
    if profile.debt_principal is not None:
        click.echo(
            f"Debt principal: {format_currency(profile.debt_principal, profile.currency)}"
            f" at {profile.debt_interest_rate or 0}%"
        )


@profile_group.command("set")
@click.option("--name", help="Display name")
@click.option("--phone", help="Phone number")
@click.option("--currency", type=click.Choice(list(CURRENCIES), case_sensitive=False))
@click.pass_context
def set_profile(ctx, name: str | None, phone: str | None, currency: str | None):
    """Update personal details and currency."""
    try:
        profile = ProfileService(ctx.obj["db"]).update_profile(
            name=name, phone=phone, currency=currency
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated profile for {profile.name} (currency: {profile.currency})")


@profile_group.command("features")
@click.option("--debt/--no-debt", default=None, help="Toggle debt tracking")
@click.option(
    "--all-accounts/--no-all-accounts", default=None, help="Toggle the all-accounts analysis"
)
@click.option("--principal", help="Debt principal")
@click.option("--rate", help="Debt annual interest rate in percent")
@click.option("--clear-debt", is_flag=True, help="Remove the stored principal and rate")
@click.pass_context
def features(ctx, debt, all_accounts, principal, rate, clear_debt):
    """Turn optional features on or off."""
    try:
        principal_value = parse_amount(principal) if principal else None
        rate_value = parse_amount(rate.rstrip("%")) if rate else None
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        profile = ProfileService(ctx.obj["db"]).set_features(
            show_debt_feature=debt,
            show_all_accounts_analysis=all_accounts,
            debt_principal=principal_value,
            debt_interest_rate=rate_value,
            clear_debt=clear_debt,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Debt tracking: {_on_off(profile.show_debt_feature)}")
    click.echo(f"All-accounts analysis: {_on_off(profile.show_all_accounts_analysis)}")


def register_commands(cli):
    """Register profile commands with main CLI."""
    cli.add_command(profile_group, name="profile")
