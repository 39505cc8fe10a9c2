"""Plain-text tables for CLI output."""

from typing import Sequence

import click

from fintrack.domain.entities import CategoryAmount, PeriodBucket
from fintrack.utils.money import format_currency, format_percentage


def current_currency(ctx: click.Context) -> str:
    """Return the currency configured in the profile."""
    return ctx.obj["db"].get_profile().currency


def echo_bucket_table(
    buckets: Sequence[PeriodBucket], currency: str, period_header: str = "Period"
) -> None:
    """Print buckets with their totals, profit and ROI."""
    headers = ("Investment", "Earnings", "Spending", "To Credit", "Salary", "Profit")
    click.echo(
        f"{period_header:<12}"
        + "".join(f"{h:>15}" for h in headers)
        + f"{'ROI':>10}"
    )
    click.echo("-" * (12 + 15 * len(headers) + 10))
    for bucket in buckets:
        amounts = (
            bucket.investment,
            bucket.earnings,
            bucket.spending,
            bucket.to_be_credit,
            bucket.salary,
            bucket.profit,
        )
        click.echo(
            f"{bucket.label:<12}"
            + "".join(f"{format_currency(a, currency):>15}" for a in amounts)
            + f"{format_percentage(bucket.roi):>10}"
        )


def echo_breakdown(rows: Sequence[CategoryAmount], currency: str, title: str) -> None:
    """Print a category breakdown with percentages."""
    click.echo(f"\n{title}:")
    click.echo("-" * 60)
    if not rows:
        click.echo("No data.")
        return
    for row in rows:
        click.echo(
            f"{row.name:<30} {format_currency(row.amount, currency):>18} "
            f"{format_percentage(row.percentage):>9}"
        )
