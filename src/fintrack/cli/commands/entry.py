"""Daily entry commands."""

import click
from fintrack.cli.account_resolution import selected_account_or_exit
from fintrack.cli.date_filters import resolve_date_option, resolve_month_option
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.tables import current_currency
from fintrack.domain.account import AccountService
from fintrack.domain.aggregation import calculate_profit
from fintrack.domain.errors import DomainError
from fintrack.domain.transaction import TransactionService
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.date_parser import month_range
from fintrack.utils.money import format_currency

AMOUNT_OPTIONS = (
    ("investment", "Amount invested"),
    ("earnings", "Amount earned"),
    ("spending", "Amount spent"),
    ("to_be_credit", "Amount earned but not yet received"),
    ("salary", "Salary lump sum"),
    ("debt", "Debt principal"),
    ("interest_rate", "Annual interest rate in percent"),
)


def amount_options(func):
    """Attach one option per entry amount field."""
    for name, help_text in reversed(AMOUNT_OPTIONS):
        func = click.option(f"--{name.replace('_', '-')}", name, help=help_text)(func)
    return func


@click.group()
def entry_group():
    """Record and edit daily entries."""
    pass


@entry_group.command("add")
@click.option("--date", "date_str", help="Entry date (YYYY-MM-DD, 'today', 'yesterday')")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@amount_options
@click.pass_context
def add_entry(ctx, date_str: str | None, account: str | None, **amounts):
    """Add an entry for a day.

    Blank or non-numeric amounts are recorded as 0.

    Examples:
        fintrack entry add --earnings 1000 --investment 200 --spending 100
        fintrack entry add --date 2024-03-15 --to-be-credit 500
    """
    db = ctx.obj["db"]
    account_obj = selected_account_or_exit(ctx, AccountService(db), account)
    entry_date = resolve_date_option(ctx, date_str)

    service = TransactionService(db)
    try:
        transaction_id = service.create_entry(
            account_id=account_obj.id,
            date=entry_date,
            **{name: value for name, value in amounts.items() if value is not None},
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created entry {transaction_id} for {entry_date} in '{account_obj.name}'")


@entry_group.command("edit")
@click.argument("transaction_id", type=int)
@click.option("--date", "date_str", help="New entry date")
@amount_options
@click.pass_context
def edit_entry(ctx, transaction_id: int, date_str: str | None, **amounts):
    """Change the date or amounts of an entry."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    new_date = resolve_date_option(ctx, date_str) if date_str is not None else None
    try:
        service.update_entry(transaction_id, date=new_date, **amounts)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated entry {transaction_id}")


@entry_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, transaction_id: int, yes: bool):
    """Delete an entry and its salary entries."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn = service.get_entry(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Delete entry {transaction_id} ({txn.date})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_entry(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted entry {transaction_id}")


@entry_group.command("list")
@click.option("--month", help="Month to list (e.g. 2024-03, 'last month'); defaults to this month")
@click.option("--all", "show_all", is_flag=True, help="List every entry in the account")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@click.pass_context
def list_entries(ctx, month: str | None, show_all: bool, account: str | None):
    """List entries with their daily profit."""
    db = ctx.obj["db"]
    account_obj = selected_account_or_exit(ctx, AccountService(db), account)
    currency = current_currency(ctx)

    start = end = None
    if not show_all:
        first = resolve_month_option(ctx, month)
        start, end = month_range(first.year, first.month)

    entries = TransactionService(db).list_entries(
        account_id=account_obj.id, start_date=start, end_date=end
    )
    if not entries:
        click.echo("No entries found.")
        return

    click.echo(f"\nEntries for '{account_obj.name}':")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':>5}  {'Date':<10} {'Investment':>13} {'Earnings':>13} {'Spending':>13} "
        f"{'To Credit':>13} {'Salary':>13} {'Profit':>13}"
    )
    for txn in entries:
        profit = calculate_profit(
            txn.earnings, txn.investment, txn.spending, txn.to_be_credit, txn.salary
        )
        click.echo(
            f"{txn.id:>5}  {txn.date.isoformat():<10} "
            f"{format_currency(txn.investment, currency):>13} "
            f"{format_currency(txn.earnings, currency):>13} "
            f"{format_currency(txn.spending, currency):>13} "
            f"{format_currency(txn.to_be_credit, currency):>13} "
            f"{format_currency(txn.salary, currency):>13} "
            f"{format_currency(profit, currency):>13}"
        )
        if txn.debt:
            click.echo(
                f"{'':>17}Debt: {format_currency(txn.debt, currency)} at {txn.interest_rate}%"
            )


@entry_group.command("transfer-credit")
@click.option("--date", "date_str", help="Date of the entry holding the credit")
@click.option("--amount", required=True, help="Amount received")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@click.pass_context
def transfer_credit(ctx, date_str: str | None, amount: str, account: str | None):
    """Move a received amount from "to be credited" into earnings.

    Examples:
        fintrack entry transfer-credit --date 2024-03-15 --amount 500
    """
    db = ctx.obj["db"]
    account_obj = selected_account_or_exit(ctx, AccountService(db), account)
    on_date = resolve_date_option(ctx, date_str)

    try:
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = TransactionService(db).transfer_credit(account_obj.id, on_date, value)
    except DomainError as e:
        handle_domain_error(ctx, e)

    currency = current_currency(ctx)
    click.echo(
        f"{format_currency(value, currency)} has been transferred to earnings for "
        f"{on_date} (entry {transaction_id})"
    )


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
