"""Salary entry commands."""

import click
from fintrack.cli.account_resolution import selected_account_or_exit
from fintrack.cli.date_filters import resolve_date_option, resolve_month_option
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.tables import current_currency
from fintrack.domain.account import AccountService
from fintrack.domain.categorization import classify_income
from fintrack.domain.entities import ZERO
from fintrack.domain.errors import DomainError
from fintrack.domain.transaction import TransactionService
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.date_parser import month_range
from fintrack.utils.money import format_currency


@click.group()
def salary_group():
    """Record named salary payments."""
    pass


@salary_group.command("add")
@click.argument("name")
@click.argument("amount")
@click.option("--purpose", default="", help="What the payment was for (used for income categories)")
@click.option("--date", "date_str", help="Payment date (defaults to today)")
@click.option("--transaction-id", type=int, help="Attach to this entry instead of the date's entry")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@click.pass_context
def add_salary(
    ctx,
    name: str,
    amount: str,
    purpose: str,
    date_str: str | None,
    transaction_id: int | None,
    account: str | None,
):
    """Add a salary payment of AMOUNT from NAME.

    The payment is added to the entry for the date, creating one if needed.

    Examples:
        fintrack salary add "Acme Corp" 50000 --purpose "Monthly salary"
        fintrack salary add "Client X" 12000 --purpose "Freelance design work"
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
        target_id = TransactionService(db).add_salary_entry(
            account_id=account_obj.id,
            name=name,
            amount=value,
            on_date=on_date,
            purpose=purpose,
            transaction_id=transaction_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Added salary entry for {name.strip()}: "
        f"{format_currency(value, current_currency(ctx))} on {on_date} (entry {target_id})"
    )


@salary_group.command("list")
@click.option("--month", help="Month to list (defaults to this month)")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@click.pass_context
def list_salary(ctx, month: str | None, account: str | None):
    """List salary entries for a month."""
    db = ctx.obj["db"]
    account_obj = selected_account_or_exit(ctx, AccountService(db), account)
    first = resolve_month_option(ctx, month)
    start, end = month_range(first.year, first.month)
    currency = current_currency(ctx)

    entries = db.list_salary_entries(account_id=account_obj.id, start_date=start, end_date=end)
    if not entries:
        click.echo("No salary entries found.")
        return

    click.echo(f"\nSalary entries for {first.strftime('%B %Y')}:")
    click.echo("-" * 90)
    total = ZERO
    for entry in entries:
        total += entry.amount
        click.echo(
            f"{entry.date.isoformat():<12} {entry.name:<24} {entry.purpose[:24]:<24} "
            f"{classify_income(entry.purpose):<14} {format_currency(entry.amount, currency):>12}"
        )
    click.echo("-" * 90)
    click.echo(f"{'Total':<76} {format_currency(total, currency):>12}")


def register_commands(cli):
    """Register salary commands with main CLI."""
    cli.add_command(salary_group, name="salary")
