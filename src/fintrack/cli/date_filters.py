"""CLI helpers for date and month options."""

from datetime import date

import click

from fintrack.utils.date_parser import parse_date, parse_month


def resolve_date_option(ctx, value: str | None, label: str = "date") -> date:
    """Parse a date option, defaulting to today."""
    if value is None:
        return date.today()
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_month_option(ctx, value: str | None) -> date:
    """Parse a --month option into the first day of that month.

    Defaults to the current month.
    """
    if value is None:
        return date.today().replace(day=1)
    try:
        return parse_month(value)
    except ValueError as e:
        click.echo(f"Error: Invalid month: {e}", err=True)
        ctx.exit(1)


def resolve_year_option(year: int | None, fallback: date) -> int:
    """Return the requested year, else the year of the fallback date."""
    return year if year is not None else fallback.year
