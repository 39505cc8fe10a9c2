"""Analytics commands."""

import click
from fintrack.cli.account_resolution import selected_account_or_exit
from fintrack.cli.tables import current_currency, echo_breakdown, echo_bucket_table
from fintrack.domain.account import AccountService
from fintrack.domain.summary import SummaryService
from fintrack.utils.money import format_currency


@click.group()
def analytics_group():
    """Income sources, spending categories and cross-account analysis."""
    pass


@analytics_group.command("income")
@click.option("--year", type=int, help="Limit to one year")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@click.pass_context
def income(ctx, year: int | None, account: str | None):
    """Break income down by source."""
    db = ctx.obj["db"]
    account_obj = selected_account_or_exit(ctx, AccountService(db), account)
    service = SummaryService(db)
    session = service.load_session(account_obj.id)
    echo_breakdown(service.income_breakdown(session, year), session.currency, "Income Sources")


@analytics_group.command("spending")
@click.option("--year", type=int, help="Limit to one year")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@click.pass_context
def spending(ctx, year: int | None, account: str | None):
    """Break spending down by category."""
    db = ctx.obj["db"]
    account_obj = selected_account_or_exit(ctx, AccountService(db), account)
    service = SummaryService(db)
    session = service.load_session(account_obj.id)
    echo_breakdown(
        service.spending_breakdown(session, year), session.currency, "Spending Breakdown"
    )


@analytics_group.command("all-accounts")
@click.option("--year", type=int, help="Year for the month table (defaults to this year)")
@click.pass_context
def all_accounts(ctx, year: int | None):
    """Combine every account into one analysis.

    Requires the feature to be enabled (fintrack profile features --all-accounts).
    """
    db = ctx.obj["db"]
    if not db.get_profile().show_all_accounts_analysis:
        click.echo(
            "Error: All-accounts analysis is disabled. "
            "Enable it with 'fintrack profile features --all-accounts'",
            err=True,
        )
        ctx.exit(1)

    AccountService(db).ensure_default_account()
    analysis = SummaryService(db).all_accounts_analysis(year)
    currency = current_currency(ctx)

    totals = analysis.totals
    click.echo("\nAll Accounts")
    click.echo("-" * 50)
    for label, value in (
        ("Remaining", totals.profit),
        ("Income", totals.earnings),
        ("Expenses", totals.investment + totals.spending),
        ("To Be Credited", totals.to_be_credit),
        ("Salary", totals.salary),
    ):
        click.echo(f"{label:<20} {format_currency(value, currency):>20}")

    click.echo("\nPer account:")
    for name, bucket in analysis.per_account.items():
        click.echo(f"  {name:<24} {format_currency(bucket.profit, currency):>18}")

    if analysis.yearly:
        click.echo("\nYearly trend:")
        echo_bucket_table(analysis.yearly, currency, period_header="Year")

    if analysis.monthly:
        click.echo("\nMonths this year:")
        echo_bucket_table(analysis.monthly, currency, period_header="Month")
        click.echo(
            f"\nBest month:  {analysis.best_month.label} "
            f"({format_currency(analysis.best_month.profit, currency)})"
        )
        click.echo(
            f"Worst month: {analysis.worst_month.label} "
            f"({format_currency(analysis.worst_month.profit, currency)})"
        )


def register_commands(cli):
    """Register analytics commands with main CLI."""
    cli.add_command(analytics_group, name="analytics")
