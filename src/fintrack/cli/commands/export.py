"""Export commands."""

import click
from fintrack.cli.account_resolution import selected_account_or_exit
from fintrack.cli.date_filters import resolve_month_option, resolve_year_option
from fintrack.domain.account import AccountService
from fintrack.domain.export import ExportService
from fintrack.domain.summary import SummaryService
from fintrack.utils.date_parser import month_range

ACCOUNT_HELP = "Account name or ID (defaults to the active account)"


@click.group()
def export_group():
    """Export entries and summaries to CSV or a spreadsheet."""
    pass


def _session(ctx, account: str | None, month: str | None = None):
    db = ctx.obj["db"]
    account_obj = selected_account_or_exit(ctx, AccountService(db), account)
    service = SummaryService(db)
    return service, service.load_session(account_obj.id, view_date=resolve_month_option(ctx, month))


@export_group.command("transactions")
@click.argument("path", type=click.Path(dir_okay=False, writable=True))
@click.option("--account", help=ACCOUNT_HELP)
@click.pass_context
def export_transactions(ctx, path: str, account: str | None):
    """Export every entry of an account with its net amount."""
    _, session = _session(ctx, account)
    count = ExportService().export_transactions(session.transactions, path)
    click.echo(f"Exported {count} entr{'y' if count == 1 else 'ies'} to {path}")


@export_group.command("monthly")
@click.argument("path", type=click.Path(dir_okay=False, writable=True))
@click.option("--year", type=int, help="Year to export (defaults to this year)")
@click.option("--account", help=ACCOUNT_HELP)
@click.pass_context
def export_monthly(ctx, path: str, year: int | None, account: str | None):
    """Export the twelve-month overview of a year."""
    service, session = _session(ctx, account)
    rows = service.monthly_overview(session, resolve_year_option(year, session.view_date))
    count = ExportService().export_buckets(rows, path)
    click.echo(f"Exported {count} months to {path}")


@export_group.command("yearly")
@click.argument("path", type=click.Path(dir_okay=False, writable=True))
@click.option("--account", help=ACCOUNT_HELP)
@click.pass_context
def export_yearly(ctx, path: str, account: str | None):
    """Export one row per year."""
    service, session = _session(ctx, account)
    count = ExportService().export_buckets(service.yearly_trend(session), path)
    click.echo(f"Exported {count} year{'' if count == 1 else 's'} to {path}")


@export_group.command("salary")
@click.argument("path", type=click.Path(dir_okay=False, writable=True))
@click.option("--month", help="Month to export (defaults to this month)")
@click.option("--account", help=ACCOUNT_HELP)
@click.pass_context
def export_salary(ctx, path: str, month: str | None, account: str | None):
    """Export a month's salary entries."""
    db = ctx.obj["db"]
    account_obj = selected_account_or_exit(ctx, AccountService(db), account)
    first = resolve_month_option(ctx, month)
    start, end = month_range(first.year, first.month)
    entries = db.list_salary_entries(account_id=account_obj.id, start_date=start, end_date=end)
    count = ExportService().export_salary_entries(entries, path)
    click.echo(f"Exported {count} salary entr{'y' if count == 1 else 'ies'} to {path}")


@export_group.command("report")
@click.argument("path", type=click.Path(dir_okay=False, writable=True))
@click.option("--month", help="Month for the summary block (defaults to this month)")
@click.option("--account", help=ACCOUNT_HELP)
@click.pass_context
def export_report(ctx, path: str, month: str | None, account: str | None):
    """Write an .xlsx report with the month's summary and the year's months."""
    service, session = _session(ctx, account, month)
    summary = service.account_summary(session)
    rows = service.monthly_overview(session)
    ExportService().export_report(
        path,
        title=f"{session.account.name} Financial Report",
        summary=summary,
        buckets=rows,
        currency=session.currency,
        subtitle=session.view_date.strftime("%B %Y"),
    )
    click.echo(f"Exported report to {path}")


def register_commands(cli):
    """Register export commands with main CLI."""
    cli.add_command(export_group, name="export")
