"""Debt tracking commands."""

import click
from fintrack.cli.account_resolution import selected_account_or_exit
from fintrack.cli.date_filters import resolve_date_option
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.tables import current_currency
from fintrack.domain.account import AccountService
from fintrack.domain.aggregation import monthly_interest
from fintrack.domain.errors import DomainError
from fintrack.domain.transaction import TransactionService
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.money import format_currency


@click.group()
def debt_group():
    """Track debt and its monthly interest."""
    pass


@debt_group.command("add")
@click.argument("amount")
@click.option("--rate", required=True, help="Annual interest rate in percent")
@click.option("--date", "date_str", help="Date the debt was taken (defaults to today)")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@click.pass_context
def add_debt(ctx, amount: str, rate: str, date_str: str | None, account: str | None):
    """Add AMOUNT of debt at an annual interest rate.

    Requires the debt feature (fintrack profile features --debt).

    Examples:
        fintrack debt add 100000 --rate 12
    """
    db = ctx.obj["db"]
    account_obj = selected_account_or_exit(ctx, AccountService(db), account)
    on_date = resolve_date_option(ctx, date_str)

    try:
        value = parse_amount(amount)
        rate_value = parse_amount(rate.rstrip("%"))
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = TransactionService(db).add_debt_entry(
            account_id=account_obj.id,
            amount=value,
            interest_rate=rate_value,
            on_date=on_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    currency = current_currency(ctx)
    txn = db.get_transaction(transaction_id)
    click.echo(f"Added debt of {format_currency(value, currency)} on {on_date} (entry {transaction_id})")
    click.echo(
        f"Monthly interest: {format_currency(monthly_interest(txn.debt, txn.interest_rate), currency)}"
    )


def register_commands(cli):
    """Register debt commands with main CLI."""
    cli.add_command(debt_group, name="debt")
