"""Summary and overview commands."""

import click
from fintrack.cli.account_resolution import selected_account_or_exit
from fintrack.cli.date_filters import resolve_month_option, resolve_year_option
from fintrack.cli.tables import echo_bucket_table
from fintrack.domain.account import AccountService
from fintrack.domain.session import SummaryOptions
from fintrack.domain.summary import SummaryService
from fintrack.utils.money import format_currency, format_percentage

CALENDAR_LABELS = {
    "income": "Income",
    "expense": "Expense",
    "salary": "Salary",
    "toBeCredit": "To Credit",
    "debt": "Debt",
    "interest": "Interest",
}


def _load_session(ctx, account: str | None, month: str | None, exclude_uncredited: bool = False):
    db = ctx.obj["db"]
    account_obj = selected_account_or_exit(ctx, AccountService(db), account)
    view_date = resolve_month_option(ctx, month)
    service = SummaryService(db)
    session = service.load_session(
        account_obj.id,
        view_date=view_date,
        options=SummaryOptions(include_to_be_credit=not exclude_uncredited),
    )
    return service, session


@click.command("summary")
@click.option("--month", help="Month to summarize (e.g. 2024-03, 'last month')")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@click.option(
    "--exclude-uncredited",
    is_flag=True,
    help="Leave amounts not yet credited out of 'Remaining'",
)
@click.pass_context
def summary(ctx, month: str | None, account: str | None, exclude_uncredited: bool):
    """Show the summary cards for a month.

    Examples:
        fintrack summary
        fintrack summary --month "last month" --account Business
    """
    service, session = _load_session(ctx, account, month, exclude_uncredited)
    result = service.account_summary(session)
    currency = session.currency

    click.echo(f"\n{session.account.name} - {session.view_date.strftime('%B %Y')}")
    click.echo("-" * 50)
    rows = [
        ("Remaining", result.remaining),
        ("Income", result.income),
        ("Expenses", result.expenses),
        ("To Be Credited", result.to_be_credit),
        ("Salary", result.salary),
    ]
    if result.show_debt:
        rows += [("Debt", result.debt), ("Monthly Interest", result.interest)]
    for label, value in rows:
        click.echo(f"{label:<20} {format_currency(value, currency):>20}")

    if result.salary_entries:
        click.echo("\nSalary entries:")
        for entry in result.salary_entries:
            purpose = f" ({entry.purpose})" if entry.purpose else ""
            click.echo(f"  {entry.date}  {entry.name}{purpose}: {format_currency(entry.amount, currency)}")


@click.command("overview")
@click.option("--year", type=int, help="Year to show (defaults to this year)")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@click.pass_context
def overview(ctx, year: int | None, account: str | None):
    """Show the twelve-month overview for a year."""
    service, session = _load_session(ctx, account, None)
    year = resolve_year_option(year, session.view_date)
    rows = service.monthly_overview(session, year)

    click.echo(f"\nMonthly Overview {year} - {session.account.name}")
    echo_bucket_table(rows, session.currency, period_header="Month")


@click.command("yearly")
@click.option("--year", type=int, help="Year to analyze (defaults to this year)")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@click.pass_context
def yearly(ctx, year: int | None, account: str | None):
    """Rank a year's months by ROI."""
    service, session = _load_session(ctx, account, None)
    year = resolve_year_option(year, session.view_date)
    analysis = service.yearly_analysis(session, year)
    currency = session.currency

    click.echo(f"\nYearly Analysis {year} - {session.account.name}")
    click.echo("-" * 50)
    totals = analysis.totals
    for label, value in (
        ("Investment", totals.investment),
        ("Earnings", totals.earnings),
        ("Spending", totals.spending),
        ("Profit", totals.profit),
    ):
        click.echo(f"{label:<20} {format_currency(value, currency):>20}")
    click.echo(f"{'ROI':<20} {format_percentage(totals.roi):>20}")

    if not analysis.months_by_roi:
        click.echo("\nNo entries for this year.")
        return

    click.echo(
        f"\nBest month:  {analysis.best_month.label} ({format_percentage(analysis.best_month.roi)})"
    )
    click.echo(
        f"Worst month: {analysis.worst_month.label} ({format_percentage(analysis.worst_month.roi)})"
    )
    click.echo("\nMonths by ROI:")
    echo_bucket_table(analysis.months_by_roi, currency, period_header="Month")


@click.command("trend")
@click.option("--month", help="Month for the daily series (defaults to this month)")
@click.option("--by-year", is_flag=True, help="Show one row per year instead of per day")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@click.pass_context
def trend(ctx, month: str | None, by_year: bool, account: str | None):
    """Show profit over time, per day of a month or per year."""
    service, session = _load_session(ctx, account, month)
    if by_year:
        buckets = service.yearly_trend(session)
        header = "Year"
    else:
        buckets = service.daily_trend(session)
        header = "Date"

    if not buckets:
        click.echo("No entries found.")
        return
    echo_bucket_table(buckets, session.currency, period_header=header)


@click.command("calendar")
@click.option("--month", help="Month to show (defaults to this month)")
@click.option("--account", help="Account name or ID (defaults to the active account)")
@click.pass_context
def calendar(ctx, month: str | None, account: str | None):
    """List the amounts shown on each calendar day of a month."""
    service, session = _load_session(ctx, account, month)
    entries = service.calendar(session)
    if not entries:
        click.echo("No entries found.")
        return

    current_day = None
    for entry in entries:
        if entry.date != current_day:
            current_day = entry.date
            click.echo(f"\n{current_day.strftime('%a %d %b %Y')}")
        label = CALENDAR_LABELS.get(entry.type, entry.type)
        click.echo(f"  {label:<10} {format_currency(entry.amount, session.currency):>15}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(overview)
    cli.add_command(yearly)
    cli.add_command(trend)
    cli.add_command(calendar)
